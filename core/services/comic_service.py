# =============================================================================
# core/services/comic_service.py - Comic Business Logic
# =============================================================================
# Handles comic creation, the creator dashboard, the reader view and the
# creation-form draft that can be seeded from a generated story outline.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
import re
from typing import Any
from urllib.parse import quote, unquote, urlencode
from uuid import UUID

from lib.supabase_client import SupabaseBackend, SupabaseClientError
from lib.utils import normalize_uuid
from core.models.comic import ComicCreate, ComicDraft
from core.services.page_service import PageService
from app.exceptions import (
    BackendUnavailableError,
    ComicAccessDeniedError,
    ComicNotFoundError,
    ComicSaveError,
)

logger = logging.getLogger(__name__)

# Path of the draft endpoint that pre-fills the creation form
DRAFT_PATH = "/api/v1/comics/draft"

# A '%' not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


# =============================================================================
# Outline Hand-off
# =============================================================================

def decode_outline(raw: str) -> str:
    """
    Decode a URL-encoded outline.

    Returns the raw string unchanged when it isn't a valid encoding
    (stray '%' or escapes that don't form UTF-8).
    """
    if _MALFORMED_ESCAPE.search(raw):
        return raw
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError:
        return raw


def build_draft_path(outline: str) -> str:
    """
    Path of the draft endpoint with `outline` as the `idea` parameter.

    The value is decoded twice on the way back in (once by the query string
    parser, once by decode_outline), so it is encoded twice here.
    """
    return f"{DRAFT_PATH}?{urlencode({'idea': quote(outline, safe='')})}"


def build_draft(idea: str | None = None) -> ComicDraft:
    """Creation-form defaults, with the description seeded from `idea`."""
    if not idea:
        return ComicDraft()
    return ComicDraft(description=decode_outline(idea))


# =============================================================================
# Comic Service
# =============================================================================

class ComicService:
    """
    Service for comic operations.

    Provides a clean interface between API routes and the backend.
    """

    @staticmethod
    def create_comic(
        backend: SupabaseBackend,
        user_id: UUID | str,
        payload: ComicCreate,
    ) -> dict[str, Any]:
        """
        Insert a new comic owned by `user_id`.

        Raises:
            ComicSaveError: If the insert fails
        """
        data = {
            "title": payload.title,
            "description": payload.description,
            "is_public": payload.is_public,
            "user_id": normalize_uuid(user_id),
        }
        if payload.genre:
            data["genre"] = payload.genre

        try:
            comic = backend.insert_comic(data)
        except SupabaseClientError as e:
            logger.error(f"Failed to create comic: {e}")
            raise ComicSaveError()

        logger.info(f"Created comic: {comic.get('id')} for user: {user_id}")
        return comic

    @staticmethod
    def list_creator_comics(
        backend: SupabaseBackend,
        user_id: UUID | str,
    ) -> list[dict[str, Any]]:
        """
        List a creator's comics, newest first.

        Raises:
            BackendUnavailableError: If the query fails
        """
        try:
            return backend.list_comics(user_id=user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to list comics for {user_id}: {e}")
            raise BackendUnavailableError()

    @staticmethod
    def get_comic(
        backend: SupabaseBackend,
        comic_id: str,
        viewer_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        """
        Get a comic visible to `viewer_id`.

        Public comics are visible to everyone; private ones only to their
        creator. Invisible comics are reported as not found.

        Raises:
            ComicNotFoundError: If the comic doesn't exist or isn't visible
        """
        try:
            comic = backend.fetch_comic(comic_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch comic {comic_id}: {e}")
            raise BackendUnavailableError()

        if not comic:
            raise ComicNotFoundError(comic_id)

        if comic.get("is_public", True) is False:
            owner = comic.get("user_id")
            if viewer_id is None or str(owner) != str(viewer_id):
                raise ComicNotFoundError(comic_id)

        return comic

    @staticmethod
    def get_managed_comic(
        backend: SupabaseBackend,
        comic_id: str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Get a comic whose pages `user_id` may manage.

        Comics without a creator reference can be managed by any signed-in
        user.

        Raises:
            ComicNotFoundError: If the comic doesn't exist
            ComicAccessDeniedError: If another creator owns it
        """
        try:
            comic = backend.fetch_comic(comic_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch comic {comic_id}: {e}")
            raise BackendUnavailableError()

        if not comic:
            raise ComicNotFoundError(comic_id)

        owner = comic.get("user_id")
        if owner and str(owner) != str(user_id):
            raise ComicAccessDeniedError(comic_id)

        return comic

    @staticmethod
    def get_reader(
        backend: SupabaseBackend,
        comic_id: str,
        viewer_id: UUID | str | None = None,
    ) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        """
        Get a comic and its pages in ascending page-number order.

        Returns:
            Tuple of (comic dict, sorted page dicts)
        """
        comic = ComicService.get_comic(backend, comic_id, viewer_id=viewer_id)
        pages = PageService.list_pages(backend, comic_id)
        return comic, pages
