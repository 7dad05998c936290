# =============================================================================
# core/models/page.py - Comic Page Schemas
# =============================================================================
# A page is one ordered image belonging to a comic. Page numbers are positive
# and unique within a comic; they define the display order.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ComicPage(BaseModel):
    """
    A row of the `comic_pages` table.

    Example:
        {
            "id": "770e8400-e29b-41d4-a716-446655440002",
            "comic_id": "550e8400-e29b-41d4-a716-446655440000",
            "page_number": 3,
            "image_url": "https://xxx.supabase.co/storage/v1/object/public/comic_pages/comic-550e.../page-3-1705312200000-cover.png"
        }
    """

    id: str
    comic_id: str | None = None
    page_number: int = Field(..., ge=1)
    image_url: str
    created_at: datetime | None = None

    @field_validator("id", "comic_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        return str(value) if value is not None else None


class PageList(BaseModel):
    """Pages of a comic, ascending."""
    comic_id: str
    pages: list[ComicPage] = Field(default_factory=list)
    message: str | None = None


class PageUploadResponse(BaseModel):
    """Response after a page image was uploaded and recorded."""
    page: ComicPage
    message: str = "Page uploaded!"


class PageDeleteResponse(BaseModel):
    """
    Response after a page was deleted.

    The page record is gone even when `blob_deleted` is False; the image
    may then be left behind in storage.
    """
    deleted_page_id: str
    page_number: int
    blob_deleted: bool
    pages: list[ComicPage] = Field(default_factory=list)
