# =============================================================================
# app/routers/explore.py - Discovery Feed Endpoint
# =============================================================================
# Public comics only, newest first. No session required.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import BackendDep
from core.models.comic import CategoryFilter, ExploreFeed
from core.services.explore_service import ExploreService

router = APIRouter()


@router.get("/explore", response_model=ExploreFeed)
async def explore(
    backend: BackendDep,
    search: Annotated[str, Query(max_length=200, description="Search by title or keyword")] = "",
    category: Annotated[CategoryFilter, Query(description="Category facet; one of the feed's `categories`")] = "All",
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum number of comics")] = 6,
):
    """
    Explore community comics.

    Only comics marked public are listed. `total` counts every match;
    `comics` holds the first `limit` of them. An unknown category is
    rejected with 422.
    """
    return ExploreService.build_feed(
        backend,
        search=search,
        category=category,
        limit=limit,
    )
