# =============================================================================
# tests/test_explore.py - Explore Feed Tests
# =============================================================================
# Tests search, category facets, card rendering and creator spotlights of
# the public discovery feed.
# =============================================================================

from unittest.mock import MagicMock

import pytest

from app.exceptions import BackendUnavailableError
from core.services.explore_service import (
    EMPTY_RESULTS_MESSAGE,
    ExploreService,
    creator_spotlights,
    matches_category,
    matches_search,
    to_card,
    truncate,
)
from lib.supabase_client import SupabaseClientError
from tests.conftest import OTHER_ID, OWNER_ID, FakeBackend, make_comic


@pytest.fixture
def feed_backend():
    """Three public comics by two creators and one private comic."""
    return FakeBackend(comics=[
        make_comic("c1", title="Moonrise", description="A romance under a comet.",
                   created_at="2024-01-01T00:00:00+00:00"),
        make_comic("c2", title="Blade Hour", description="Sword fights at noon.", genre="Action",
                   created_at="2024-02-01T00:00:00+00:00"),
        make_comic("c3", title="Night Shift", description="Convenience store slice of life.",
                   user_id=OTHER_ID, created_at="2024-03-01T00:00:00+00:00"),
        make_comic("hidden", title="Secret Draft", is_public=False,
                   created_at="2024-04-01T00:00:00+00:00"),
    ])


class TestCardHelpers:
    """Tests for the card text helpers."""

    def test_truncate_short_text(self):
        assert truncate("Short.") == "Short."

    def test_truncate_long_text(self):
        text = "word " * 60

        result = truncate(text)

        assert result.endswith("…")
        assert len(result) <= 141

    def test_truncate_empty(self):
        assert truncate(None) == "No description provided."
        assert truncate("") == "No description provided."

    def test_search_is_case_insensitive(self):
        comic = make_comic(title="Moonrise", description="A comet.")

        assert matches_search(comic, "MOON")
        assert matches_search(comic, "comet")
        assert matches_search(comic, "  ")
        assert not matches_search(comic, "dragon")

    def test_category_from_genre_or_description(self):
        assert matches_category(make_comic(genre="Action"), "Action")
        assert matches_category(make_comic(description="A slow romance."), "Romance")
        assert not matches_category(make_comic(description="A comet."), "Drama")
        assert matches_category(make_comic(description=None), "All")

    def test_card_labels(self):
        assert to_card(make_comic(genre="Fantasy"), "All").category == "Fantasy"
        assert to_card(make_comic(), "All").category == "Original"
        assert to_card(make_comic(), "Comedy").category == "Comedy"

    def test_card_without_creator(self):
        card = to_card(make_comic(user_id=None), "All")

        assert card.creator == "Unknown creator"

    def test_card_falls_back_to_author_id(self):
        card = to_card(make_comic(user_id=None, author_id="legacy-author"), "All")

        assert card.creator == "legacy-author"


class TestCreatorSpotlights:
    """Tests for creator_spotlights."""

    def test_latest_title_is_newest(self):
        comics = [
            make_comic("n", title="Newest", created_at="2024-03-01T00:00:00+00:00"),
            make_comic("o", title="Oldest", created_at="2024-01-01T00:00:00+00:00"),
        ]

        spotlight = creator_spotlights(comics)[0]

        assert spotlight.creator == OWNER_ID
        assert spotlight.total == 2
        assert spotlight.latest_title == "Newest"

    def test_anonymous_creator(self):
        spotlight = creator_spotlights([make_comic(user_id=None)])[0]

        assert spotlight.creator == "anonymous"

    def test_legacy_author_id(self):
        comics = [
            make_comic("a", user_id=None, author_id="legacy-author"),
            make_comic("b", user_id=None, author_id="legacy-author"),
        ]

        spotlights = creator_spotlights(comics)

        assert [s.creator for s in spotlights] == ["legacy-author"]
        assert spotlights[0].total == 2

    def test_at_most_three(self):
        comics = [make_comic(user_id=f"creator-{i}") for i in range(5)]

        assert len(creator_spotlights(comics)) == 3


class TestBuildFeed:
    """Tests for ExploreService.build_feed."""

    def test_public_only_newest_first(self, feed_backend):
        feed = ExploreService.build_feed(feed_backend)

        assert [c.id for c in feed.comics] == ["c3", "c2", "c1"]
        assert feed.total == 3
        assert feed.message is None

    def test_rows_without_public_flag_excluded(self):
        backend = FakeBackend(comics=[make_comic("c1"), make_comic("c2", is_public=None)])
        # A backend that ignores the filter
        backend.list_comics = MagicMock(return_value=list(backend.comics.values()))

        feed = ExploreService.build_feed(backend)

        assert [c.id for c in feed.comics] == ["c1"]

    def test_limit_caps_cards_not_total(self, feed_backend):
        feed = ExploreService.build_feed(feed_backend, limit=2)

        assert len(feed.comics) == 2
        assert feed.total == 3

    def test_search_and_category(self, feed_backend):
        assert [c.id for c in ExploreService.build_feed(feed_backend, search="comet").comics] == ["c1"]
        assert [c.id for c in ExploreService.build_feed(feed_backend, category="Action").comics] == ["c2"]
        assert [c.id for c in ExploreService.build_feed(feed_backend, category="Slice of Life").comics] == ["c3"]

    def test_no_matches(self, feed_backend):
        feed = ExploreService.build_feed(feed_backend, search="dragon")

        assert feed.comics == []
        assert feed.total == 0
        assert feed.message == EMPTY_RESULTS_MESSAGE

    def test_spotlights_ignore_filters(self, feed_backend):
        feed = ExploreService.build_feed(feed_backend, search="dragon")

        assert {s.creator for s in feed.spotlights} == {OWNER_ID, OTHER_ID}

    def test_backend_failure(self):
        backend = FakeBackend()
        backend.list_comics = MagicMock(side_effect=SupabaseClientError("down"))

        with pytest.raises(BackendUnavailableError) as exc_info:
            ExploreService.build_feed(backend)

        assert exc_info.value.message == "Unable to load comics right now."
