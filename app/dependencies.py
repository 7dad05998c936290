# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The collaborators are built by the lifespan handler in app/main.py and
# stored on app.state; these dependencies hand them to route handlers.
# Tests replace them with app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from agents.story_helper import StoryHelperAgent
from lib.supabase_client import SupabaseBackend
from app.exceptions import PanelPlayException


def get_backend(request: Request) -> SupabaseBackend:
    """
    Get the hosted backend built at startup.

    Raises:
        PanelPlayException: 503 if the backend could not be initialized
    """
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise PanelPlayException(
            message="Backend is not available",
            code="BACKEND_NOT_INITIALIZED",
            status_code=503,
            suggestion="Check the Supabase settings and the startup logs",
        )
    return backend


def get_story_helper(request: Request) -> StoryHelperAgent | None:
    """
    Get the story helper agent, or None when its credential is missing.
    """
    return getattr(request.app.state, "story_helper", None)


# Type aliases for dependency injection
BackendDep = Annotated[SupabaseBackend, Depends(get_backend)]
StoryHelperDep = Annotated[StoryHelperAgent | None, Depends(get_story_helper)]
