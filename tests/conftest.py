# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory backend standing in for Supabase tables and storage
# - Signed session tokens and a TestClient wired through dependency overrides
# =============================================================================

import os
import time
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from jose import jwt

from lib.supabase_client import SupabaseClientError

TEST_SUPABASE_URL = os.environ["SUPABASE_URL"]
TEST_JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]

OWNER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_ID = "22222222-2222-4222-8222-222222222222"
COMIC_ID = "33333333-3333-4333-8333-333333333333"


# =============================================================================
# In-memory Backend
# =============================================================================

class FakeBackend:
    """
    Stand-in for SupabaseBackend keeping rows in dicts.

    Enforces the unique (comic_id, page_number) constraint the real
    `comic_pages` table has. Storage calls go to a MagicMock bucket.
    Individual methods can be replaced on an instance to inject failures.
    """

    def __init__(self, comics=None, pages=None, pages_bucket="comic_pages"):
        self.comics = {str(c["id"]): dict(c) for c in comics or []}
        self.pages = {str(p["id"]): dict(p) for p in pages or []}
        self.pages_bucket = pages_bucket

        self.bucket = MagicMock(name="bucket")
        self.bucket.get_public_url.side_effect = lambda path: (
            f"{TEST_SUPABASE_URL}/storage/v1/object/public/{pages_bucket}/{path}?"
        )
        self.auth = MagicMock(name="auth")
        self.client = MagicMock(name="client")

    def storage_bucket(self):
        return self.bucket

    # Comics

    def fetch_comic(self, comic_id):
        return self.comics.get(str(comic_id))

    def list_comics(self, user_id=None, public_only=False):
        rows = list(self.comics.values())
        if user_id is not None:
            rows = [c for c in rows if str(c.get("user_id")) == str(user_id)]
        if public_only:
            rows = [c for c in rows if c.get("is_public") is True]
        return sorted(rows, key=lambda c: c.get("created_at") or "", reverse=True)

    def insert_comic(self, data):
        row = {"id": str(uuid4()), "created_at": datetime.now(timezone.utc).isoformat(), **data}
        row.setdefault("is_public", True)
        self.comics[row["id"]] = row
        return row

    # Pages

    def list_pages(self, comic_id):
        rows = [p for p in self.pages.values() if str(p["comic_id"]) == str(comic_id)]
        # Insertion order, like a query without ORDER BY
        return rows

    def fetch_page(self, page_id):
        return self.pages.get(str(page_id))

    def fetch_max_page_number(self, comic_id):
        numbers = [p["page_number"] for p in self.list_pages(comic_id)]
        return max(numbers) if numbers else None

    def insert_page(self, comic_id, page_number, image_url):
        for p in self.list_pages(comic_id):
            if p["page_number"] == page_number:
                raise SupabaseClientError(
                    message="Failed to insert page: duplicate key value violates unique constraint (23505)",
                    code="INSERT_PAGE_FAILED",
                )
        row = {
            "id": str(uuid4()),
            "comic_id": str(comic_id),
            "page_number": page_number,
            "image_url": image_url,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.pages[row["id"]] = row
        return row

    def delete_page(self, page_id):
        self.pages.pop(str(page_id), None)


def make_comic(comic_id=None, user_id=OWNER_ID, is_public=True, created_at="2024-01-15T10:00:00+00:00", **extra):
    """A `comics` row."""
    row = {
        "id": comic_id or str(uuid4()),
        "title": "Nebula Drift",
        "description": "A courier pilot smuggles memories across a fractured galaxy.",
        "is_public": is_public,
        "user_id": user_id,
        "genre": None,
        "created_at": created_at,
    }
    row.update(extra)
    return row


def make_page(comic_id, page_number, page_id=None, bucket="comic_pages"):
    """A `comic_pages` row with an image URL inside `bucket`."""
    path = f"comic-{comic_id}/page-{page_number}-1705312200000-p{page_number}.png"
    return {
        "id": page_id or str(uuid4()),
        "comic_id": comic_id,
        "page_number": page_number,
        "image_url": f"{TEST_SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}",
        "created_at": "2024-01-15T10:30:00+00:00",
    }


def make_token(user_id=OWNER_ID, email="creator@example.com", expires_in=3600, secret=None):
    """An HS256 access token shaped like the ones Supabase Auth issues."""
    claims = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(claims, secret or TEST_JWT_SECRET, algorithm="HS256")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def comic():
    """A public comic owned by OWNER_ID."""
    return make_comic(comic_id=COMIC_ID)


@pytest.fixture
def backend(comic):
    """Backend holding one comic and no pages."""
    return FakeBackend(comics=[comic])


@pytest.fixture
def story_helper():
    """Story helper agent with a mocked generate_outline."""
    agent = MagicMock(name="story_helper")
    agent.generate_outline.return_value = "SYNOPSIS: A lighthouse keeper...\n\nPANELS:\n1. ..."
    return agent


@pytest.fixture
def app(backend, story_helper):
    """The FastAPI app with its collaborators overridden (lifespan not run)."""
    from app.dependencies import get_backend, get_story_helper
    from app.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_backend] = lambda: backend
    fastapi_app.dependency_overrides[get_story_helper] = lambda: story_helper
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """TestClient for the app."""
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def owner_headers():
    """Authorization header for OWNER_ID."""
    return {"Authorization": f"Bearer {make_token(OWNER_ID)}"}


@pytest.fixture
def other_headers():
    """Authorization header for a user who owns nothing."""
    return {"Authorization": f"Bearer {make_token(OTHER_ID, email='reader@example.com')}"}


@pytest.fixture
def expired_headers():
    """Authorization header with an expired token."""
    return {"Authorization": f"Bearer {make_token(OWNER_ID, expires_in=-300)}"}
