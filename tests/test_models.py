# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the comic and page models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from uuid import UUID

import pytest
from pydantic import ValidationError

from core.models import (
    CATEGORY_FILTERS,
    ComicCreate,
    ComicCreateResponse,
    ComicDraft,
    ComicPage,
    ComicResponse,
    CreatorSpotlight,
    ExploreFeed,
    PageDeleteResponse,
    PageUploadResponse,
)


# =============================================================================
# Comic Model Tests
# =============================================================================

class TestComicCreate:
    """Tests for the comic-creation form."""

    def test_valid_comic(self):
        """Test creating a valid ComicCreate."""
        comic = ComicCreate(title="Nebula Drift", description="Memories as contraband")

        assert comic.title == "Nebula Drift"
        assert comic.is_public is True  # Default
        assert comic.genre is None

    def test_private_comic_with_genre(self):
        comic = ComicCreate(
            title="Moonrise",
            description="A lighthouse keeper meets a comet.",
            is_public=False,
            genre="Fantasy",
        )

        assert comic.is_public is False
        assert comic.genre == "Fantasy"

    def test_missing_title_fails(self):
        """Test that title is required."""
        with pytest.raises(ValidationError):
            ComicCreate(description="No title")

    def test_empty_description_fails(self):
        with pytest.raises(ValidationError):
            ComicCreate(title="Untitled", description="")

    @pytest.mark.parametrize("field", ["title", "description"])
    def test_blank_fields_fail(self, field):
        """Whitespace-only input counts as missing."""
        data = {"title": "Moonrise", "description": "A comet."}
        data[field] = "   "

        with pytest.raises(ValidationError):
            ComicCreate(**data)

    def test_title_too_long_fails(self):
        with pytest.raises(ValidationError):
            ComicCreate(title="x" * 201, description="Too long a title")


class TestComicResponse:
    """Tests for ComicResponse model."""

    def test_uuid_ids_become_strings(self):
        comic = ComicResponse(
            id=UUID("550e8400-e29b-41d4-a716-446655440000"),
            title="Nebula Drift",
            user_id=UUID("660e8400-e29b-41d4-a716-446655440001"),
        )

        assert comic.id == "550e8400-e29b-41d4-a716-446655440000"
        assert comic.user_id == "660e8400-e29b-41d4-a716-446655440001"

    def test_optional_fields(self):
        """A row without creator, description or genre is still valid."""
        comic = ComicResponse(id="abc", title="Orphan")

        assert comic.user_id is None
        assert comic.description is None
        assert comic.is_public is True

    def test_create_response_defaults(self):
        response = ComicCreateResponse(comic=ComicResponse(id="abc", title="Moonrise"))

        assert response.message == "Comic saved!"
        assert response.redirect == "/dashboard"

    def test_draft_defaults(self):
        draft = ComicDraft()

        assert draft.title == ""
        assert draft.description == ""
        assert draft.is_public is True


# =============================================================================
# Page Model Tests
# =============================================================================

class TestComicPage:
    """Tests for ComicPage model."""

    def test_valid_page(self):
        page = ComicPage(
            id="p1",
            comic_id=UUID("550e8400-e29b-41d4-a716-446655440000"),
            page_number=3,
            image_url="https://example.supabase.co/storage/v1/object/public/comic_pages/comic-1/page-3.png",
        )

        assert page.page_number == 3
        assert page.comic_id == "550e8400-e29b-41d4-a716-446655440000"

    def test_page_number_must_be_positive(self):
        with pytest.raises(ValidationError):
            ComicPage(id="p0", page_number=0, image_url="https://example.com/p0.png")

    def test_upload_response_message(self):
        page = ComicPage(id="p1", page_number=1, image_url="https://example.com/p1.png")

        assert PageUploadResponse(page=page).message == "Page uploaded!"

    def test_delete_response_defaults(self):
        response = PageDeleteResponse(deleted_page_id="p1", page_number=1, blob_deleted=False)

        assert response.pages == []
        assert response.blob_deleted is False


# =============================================================================
# Explore Model Tests
# =============================================================================

class TestExploreFeed:
    """Tests for ExploreFeed model."""

    def test_defaults_list_every_category(self):
        feed = ExploreFeed()

        assert feed.categories == CATEGORY_FILTERS
        assert feed.categories[0] == "All"
        assert "Slice of Life" in feed.categories
        assert feed.total == 0

    def test_categories_not_shared_between_instances(self):
        first = ExploreFeed()
        first.categories.append("Horror")

        assert "Horror" not in ExploreFeed().categories

    def test_spotlight_requires_a_comic(self):
        with pytest.raises(ValidationError):
            CreatorSpotlight(creator="anonymous", total=0, latest_title="Nothing")
