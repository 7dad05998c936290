# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - comic.py: Comic CRUD, dashboard and explore schemas
# - page.py: Comic page schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .comic import (
    CATEGORY_FILTERS,
    CategoryFilter,
    ComicCreate,
    ComicCreateResponse,
    ComicDraft,
    ComicList,
    ComicReader,
    ComicResponse,
    CreatorSpotlight,
    ExploreCard,
    ExploreFeed,
)
from .page import (
    ComicPage,
    PageDeleteResponse,
    PageList,
    PageUploadResponse,
)

__all__ = [
    # Comic
    "CATEGORY_FILTERS",
    "CategoryFilter",
    "ComicCreate",
    "ComicCreateResponse",
    "ComicDraft",
    "ComicList",
    "ComicReader",
    "ComicResponse",
    "CreatorSpotlight",
    "ExploreCard",
    "ExploreFeed",
    # Page
    "ComicPage",
    "PageDeleteResponse",
    "PageList",
    "PageUploadResponse",
]
