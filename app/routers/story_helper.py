# =============================================================================
# app/routers/story_helper.py - Story Helper Endpoint
# =============================================================================
# POST /api/story-helper {genre, characters, idea} -> {content}
#
# Errors use the {error: "..."} body shape the story helper form reads:
# - 500 when GROQ_API_KEY is not configured (checked before anything else)
# - 400 when a field is missing or empty (the upstream is not called)
# - 500 when the completion API fails
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from agents.story_helper import REQUIRED_FIELDS, StoryHelperError
from app.dependencies import StoryHelperDep

logger = logging.getLogger(__name__)

router = APIRouter()

CREDENTIAL_MISSING_MESSAGE = "GROQ_API_KEY is not configured on the server."
MISSING_FIELDS_MESSAGE = "Missing required fields: genre, characters, idea."
UPSTREAM_FALLBACK_MESSAGE = "Failed to generate story helper content. Check server logs for details."


def _extract_fields(body: Any) -> tuple[str, str, str] | None:
    """The three inputs, or None if any is missing, empty or not a string."""
    if not isinstance(body, dict):
        return None

    values = [body.get(name) for name in REQUIRED_FIELDS]
    if not all(isinstance(v, str) and v for v in values):
        return None
    return values[0], values[1], values[2]


@router.post("/story-helper")
async def generate_story_outline(request: Request, agent: StoryHelperDep):
    """
    Generate a synopsis and a 10-panel outline for a comic idea.

    Body: `{"genre": str, "characters": str, "idea": str}`, all required.

    Returns `{"content": str}`. The text can be passed (URL-encoded) as the
    `idea` parameter of `GET /api/v1/comics/draft` to start a comic from it.
    """
    if agent is None:
        logger.error("Story helper called but GROQ_API_KEY is not configured")
        return JSONResponse(status_code=500, content={"error": CREDENTIAL_MISSING_MESSAGE})

    try:
        body = await request.json()
    except ValueError:
        body = None

    fields = _extract_fields(body)
    if fields is None:
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_MESSAGE})

    genre, characters, idea = fields

    try:
        content = await run_in_threadpool(agent.generate_outline, genre, characters, idea)
    except StoryHelperError as e:
        logger.error(f"Error in story helper (completion API): {e}")
        return JSONResponse(status_code=500, content={"error": e.message or UPSTREAM_FALLBACK_MESSAGE})

    return JSONResponse(status_code=200, content={"content": content})
