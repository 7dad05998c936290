# =============================================================================
# agents/prompts/ - Prompts for AI Helpers
# =============================================================================
# This package contains prompt templates:
# - story_outline.py: Synopsis + 10-panel outline prompt for the story helper
# =============================================================================

from agents.prompts.story_outline import (
    STORY_OUTLINE_TEMPLATE,
    build_story_outline_prompt,
)

__all__ = [
    "STORY_OUTLINE_TEMPLATE",
    "build_story_outline_prompt",
]
