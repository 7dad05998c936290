# =============================================================================
# core/services/explore_service.py - Discovery Feed
# =============================================================================
# Builds the explore feed: public comics only, newest first, with keyword
# search, category facets and creator spotlights.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseBackend, SupabaseClientError
from core.models.comic import CreatorSpotlight, ExploreCard, ExploreFeed
from app.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW_LENGTH = 140
MAX_SPOTLIGHTS = 3
EMPTY_RESULTS_MESSAGE = "No comics match that search just yet. Try another keyword or view all."


def truncate(text: str | None, max_length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Shorten a description for a card, ending it with an ellipsis."""
    if not text:
        return "No description provided."
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + "…"


def matches_search(comic: dict[str, Any], term: str) -> bool:
    """Case-insensitive substring match on title or description."""
    term = term.strip().lower()
    if not term:
        return True
    return term in (comic.get("title") or "").lower() or term in (comic.get("description") or "").lower()


def matches_category(comic: dict[str, Any], category: str) -> bool:
    """A comic matches a category when its genre or description mentions it."""
    if category == "All":
        return True
    needle = category.lower()
    genre = (comic.get("genre") or "").lower()
    return (bool(genre) and needle in genre) or needle in (comic.get("description") or "").lower()


def creator_of(comic: dict[str, Any]) -> str | None:
    """Creator reference of a row; older rows carry it as `author_id`."""
    creator = comic.get("user_id") or comic.get("author_id")
    return str(creator) if creator else None


def creator_spotlights(
    comics: list[dict[str, Any]],
    limit: int = MAX_SPOTLIGHTS,
) -> list[CreatorSpotlight]:
    """
    Summarize comics per creator.

    `comics` must be newest first; the first title seen for a creator is
    their latest one. Creators are returned in order of their latest comic.
    """
    spotlights: dict[str, dict[str, Any]] = {}

    for comic in comics:
        creator = creator_of(comic) or "anonymous"
        entry = spotlights.setdefault(
            creator,
            {"creator": creator, "total": 0, "latest_title": comic.get("title", "")},
        )
        entry["total"] += 1

    return [CreatorSpotlight(**entry) for entry in list(spotlights.values())[:limit]]


def to_card(comic: dict[str, Any], active_category: str) -> ExploreCard:
    """Render a comic row as an explore card."""
    if comic.get("genre"):
        label = comic["genre"]
    elif active_category == "All":
        label = "Original"
    else:
        label = active_category

    return ExploreCard(
        id=str(comic["id"]),
        title=comic.get("title", ""),
        description=truncate(comic.get("description")),
        creator=creator_of(comic) or "Unknown creator",
        category=label,
        created_at=comic.get("created_at"),
    )


class ExploreService:
    """Service for the public discovery feed."""

    @staticmethod
    def build_feed(
        backend: SupabaseBackend,
        search: str = "",
        category: str = "All",
        limit: int = 6,
    ) -> ExploreFeed:
        """
        Build the explore feed.

        Args:
            backend: Hosted backend
            search: Keyword matched against title and description
            category: Category facet ("All" disables the facet)
            limit: Maximum number of cards returned

        Raises:
            BackendUnavailableError: If public comics can't be loaded
        """
        try:
            comics = backend.list_comics(public_only=True)
        except SupabaseClientError as e:
            logger.error(f"Failed to load comics: {e}")
            raise BackendUnavailableError()

        # The query already filters; rows without the flag set are dropped too
        comics = [c for c in comics if c.get("is_public") is True]

        filtered = [
            c for c in comics
            if matches_search(c, search) and matches_category(c, category)
        ]

        logger.debug(f"Explore feed: {len(filtered)} of {len(comics)} public comics match")

        return ExploreFeed(
            comics=[to_card(c, category) for c in filtered[:limit]],
            total=len(filtered),
            search=search,
            category=category,
            spotlights=creator_spotlights(comics),
            message=None if filtered else EMPTY_RESULTS_MESSAGE,
        )
