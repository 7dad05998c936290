# =============================================================================
# agents/story_helper.py - Story Outline Generator
# =============================================================================
# This module implements the story helper: three free-text fields are
# rendered into a fixed prompt and sent as a single user message to a hosted
# chat-completion API. The generated text is returned verbatim.
#
# The completion API is Groq, reached through its OpenAI-compatible endpoint
# with the OpenAI SDK.
#
# Usage:
#   from agents.story_helper import StoryHelperAgent
#   agent = StoryHelperAgent(api_key="gsk_...")
#   outline = agent.generate_outline("Sci-fi", "Mara, a courier", "Memories as contraband")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from openai import OpenAI

from agents.prompts.story_outline import build_story_outline_prompt
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.1-8b-instant"
DEFAULT_TEMPERATURE = 0.8
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

# Returned when the upstream produced no text
NO_CONTENT_FALLBACK = "No content generated."

REQUIRED_FIELDS = ("genre", "characters", "idea")


# =============================================================================
# Exceptions
# =============================================================================

class StoryHelperError(ApplicationError):
    """
    Error while generating an outline.

    `message` carries the upstream's message when it had one.
    """

    def __init__(
        self,
        message: str,
        code: str = "STORY_HELPER_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


# =============================================================================
# Story Helper Agent
# =============================================================================

class StoryHelperAgent:
    """
    Generates a synopsis and a 10-panel outline for a comic idea.

    Example:
        agent = StoryHelperAgent(api_key=settings.GROQ_API_KEY)
        text = agent.generate_outline(
            genre="Mystery",
            characters="Two subway detectives",
            idea="An endless metro haunted by lost timelines",
        )
        print(text)  # "SYNOPSIS: ... PANELS: 1. ..."

    Attributes:
        model: Completion model ID
        temperature: Sampling temperature
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        base_url: str = DEFAULT_BASE_URL,
        client: OpenAI | None = None,
    ):
        self.client = client or OpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.temperature = temperature

        logger.info(f"StoryHelperAgent initialized with model={self.model}, temp={self.temperature}")

    @classmethod
    def from_settings(cls, settings: Any) -> StoryHelperAgent | None:
        """
        Build the agent from application settings.

        Returns:
            The agent, or None when GROQ_API_KEY is not configured
        """
        if not settings.GROQ_API_KEY:
            logger.error("GROQ_API_KEY is not set in the environment.")
            return None

        return cls(
            api_key=settings.GROQ_API_KEY,
            model=settings.STORY_HELPER_MODEL,
            temperature=settings.STORY_HELPER_TEMPERATURE,
            base_url=settings.STORY_HELPER_BASE_URL,
        )

    def generate_outline(self, genre: str, characters: str, idea: str) -> str:
        """
        Generate an outline for the given inputs.

        Returns:
            The first choice's text, or NO_CONTENT_FALLBACK if it was empty

        Raises:
            StoryHelperError: If the completion call fails
        """
        prompt = build_story_outline_prompt(genre=genre, characters=characters, idea=idea)
        logger.info(f"Generating story outline (genre='{genre[:30]}')")

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except Exception as e:
            raise StoryHelperError(
                message=str(e) or "Failed to generate story helper content. Check server logs for details.",
                code="UPSTREAM_ERROR",
                suggestion="Check your GROQ_API_KEY and network connection",
                details={"model": self.model},
            )

        content = None
        if completion.choices:
            message = completion.choices[0].message
            content = message.content if message else None

        if not content:
            logger.warning("Completion API returned no content")
            return NO_CONTENT_FALLBACK

        logger.debug(f"Story outline: {content[:200]}...")
        return content
