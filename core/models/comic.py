# =============================================================================
# core/models/comic.py - Comic Schemas
# =============================================================================
# These models define the API contract for comic operations:
# - ComicCreate: Input for the comic-creation form
# - ComicResponse: A comic row as returned to clients
# - ComicDraft: Defaults for the creation form (optionally pre-filled)
# - ComicList: Dashboard listing
# - ExploreCard / CreatorSpotlight / ExploreFeed: Discovery feed
#
# A comic is a titled, described unit of serialized content owned by a creator.
# =============================================================================

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .page import ComicPage


# Category facets offered by the explore feed
CategoryFilter = Literal[
    "All",
    "Action",
    "Romance",
    "Fantasy",
    "Comedy",
    "Drama",
    "Slice of Life",
]

CATEGORY_FILTERS: list[str] = list(get_args(CategoryFilter))


class ComicCreate(BaseModel):
    """
    Schema for the comic-creation form.

    Example:
        {
            "title": "Nebula Drift",
            "description": "A courier pilot smuggles memories across a fractured galaxy.",
            "is_public": true
        }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Comic title"
    )

    description: str = Field(
        ...,
        min_length=1,
        description="Short summary of the comic"
    )

    # Public comics show up on the explore feed
    is_public: bool = Field(
        default=True,
        description="Show this comic on Explore"
    )

    genre: str | None = Field(
        default=None,
        max_length=50,
        description="Optional genre, used by the explore category filter"
    )

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ComicResponse(BaseModel):
    """
    A comic as stored in the `comics` table.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "Nebula Drift",
            "description": "A courier pilot...",
            "is_public": true,
            "user_id": "660e8400-e29b-41d4-a716-446655440001",
            "genre": null,
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: str = Field(..., description="Unique comic identifier")
    title: str
    description: str | None = None
    is_public: bool = True
    user_id: str | None = Field(
        default=None,
        description="Creator reference"
    )
    genre: str | None = None
    created_at: datetime | None = None

    # Supabase returns uuids as strings already; allow UUID objects too
    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        return str(value) if value is not None else None

    model_config = ConfigDict(from_attributes=True)


class ComicCreateResponse(BaseModel):
    """Response after a comic was saved."""
    comic: ComicResponse
    message: str = "Comic saved!"
    redirect: str = "/dashboard"


class ComicDraft(BaseModel):
    """Initial state of the comic-creation form."""
    title: str = ""
    description: str = ""
    is_public: bool = True


class ComicList(BaseModel):
    """
    Dashboard listing, newest first.

    `message` carries the "none yet" state when the list is empty.
    """
    comics: list[ComicResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    message: str | None = None


class ComicReader(BaseModel):
    """A comic with its pages in ascending page-number order."""
    comic: ComicResponse
    pages: list[ComicPage] = Field(default_factory=list)
    page_count: int = Field(default=0, ge=0)
    message: str | None = None


# =============================================================================
# Explore Feed
# =============================================================================

class ExploreCard(BaseModel):
    """A public comic as shown on the explore feed."""
    id: str
    title: str
    description: str
    creator: str
    category: str
    created_at: datetime | None = None


class CreatorSpotlight(BaseModel):
    """Per-creator summary of the public comics in the feed."""
    creator: str
    total: int = Field(..., ge=1)
    latest_title: str


class ExploreFeed(BaseModel):
    """Explore response: cards, result count and creator spotlights."""
    comics: list[ExploreCard] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    search: str = ""
    category: CategoryFilter = "All"
    categories: list[str] = Field(default_factory=lambda: list(CATEGORY_FILTERS))
    spotlights: list[CreatorSpotlight] = Field(default_factory=list)
    message: str | None = None
