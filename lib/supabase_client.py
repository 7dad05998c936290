# =============================================================================
# lib/supabase_client.py - Supabase Backend Wrapper
# =============================================================================
# This module provides a typed wrapper around the Supabase clients used by
# PanelPlay:
# - a service-role client for the `comics` / `comic_pages` tables and the
#   page image bucket
# - an anon client for Supabase Auth (sign-up, password sign-in)
#
# One SupabaseBackend is built by the application lifespan handler and handed
# to route handlers through `app.dependencies.get_backend`.
#
# Usage:
#   backend = SupabaseBackend.from_settings(settings)
#   comic = backend.fetch_comic(comic_id)
#   pages = backend.list_pages(comic_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    @property
    def is_unique_violation(self) -> bool:
        """True when the underlying PostgREST error was a unique constraint hit."""
        return UNIQUE_VIOLATION_CODE in self.message


class SupabaseBackend:
    """
    Typed wrapper for the hosted backend (tables, storage, auth).

    Example:
        backend = SupabaseBackend.from_settings(settings)

        # Newest public comics first
        comics = backend.list_comics(public_only=True)

        # Pages of one comic, ascending
        pages = backend.list_pages("550e8400-...")
    """

    def __init__(
        self,
        client: Client,
        auth_client: Client | None = None,
        pages_bucket: str = "comic_pages",
    ):
        self.client = client
        self.auth_client = auth_client or client
        self.pages_bucket = pages_bucket

    @classmethod
    def from_settings(cls, settings: Any) -> SupabaseBackend:
        """
        Build the service-role and anon clients from application settings.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
            auth_client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL, SUPABASE_SERVICE_KEY and SUPABASE_ANON_KEY in your .env file"
            )

        logger.info("Supabase clients initialized successfully")
        return cls(client, auth_client=auth_client, pages_bucket=settings.PAGES_BUCKET)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def auth(self):
        """Supabase Auth API (anon client)."""
        return self.auth_client.auth

    def storage_bucket(self):
        """Storage API scoped to the page image bucket."""
        return self.client.storage.from_(self.pages_bucket)

    # -------------------------------------------------------------------------
    # Comics
    # -------------------------------------------------------------------------

    def fetch_comic(self, comic_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a comic by ID.

        Returns:
            Comic dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        comic_id_str = normalize_uuid(comic_id)

        try:
            response = (
                self.client.table("comics")
                .select("*")
                .eq("id", comic_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch comic: {e}",
                code="FETCH_COMIC_FAILED",
                suggestion="Check that the comic_id exists",
                details={"comic_id": comic_id_str}
            )

    def list_comics(
        self,
        user_id: str | UUID | None = None,
        public_only: bool = False,
    ) -> list[dict[str, Any]]:
        """
        List comics, newest first.

        Args:
            user_id: Only comics created by this user
            public_only: Only comics with is_public = true

        Raises:
            SupabaseClientError: If query fails
        """
        query = self.client.table("comics").select("*")

        if user_id is not None:
            query = query.eq("user_id", normalize_uuid(user_id))
        if public_only:
            query = query.eq("is_public", True)

        try:
            response = query.order("created_at", desc=True).execute()
            comics = response.data or []
            logger.debug(f"Fetched {len(comics)} comics (user_id={user_id}, public_only={public_only})")
            return comics

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list comics: {e}",
                code="LIST_COMICS_FAILED",
                details={"user_id": str(user_id) if user_id else None, "public_only": public_only}
            )

    def insert_comic(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a comic row.

        Returns:
            Inserted comic dict with generated id and created_at

        Raises:
            SupabaseClientError: If insert fails
        """
        try:
            response = self.client.table("comics").insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert comic: {e}",
                code="INSERT_COMIC_FAILED",
                details={"title": data.get("title")}
            )

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    def list_pages(self, comic_id: str | UUID) -> list[dict[str, Any]]:
        """
        List the pages of a comic, ascending by page number.

        Raises:
            SupabaseClientError: If query fails
        """
        comic_id_str = normalize_uuid(comic_id)

        try:
            response = (
                self.client.table("comic_pages")
                .select("*")
                .eq("comic_id", comic_id_str)
                .order("page_number", desc=False)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list pages: {e}",
                code="LIST_PAGES_FAILED",
                details={"comic_id": comic_id_str}
            )

    def fetch_page(self, page_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a page by ID.

        Returns:
            Page dict, or None if not found
        """
        page_id_str = normalize_uuid(page_id)

        try:
            response = (
                self.client.table("comic_pages")
                .select("*")
                .eq("id", page_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch page: {e}",
                code="FETCH_PAGE_FAILED",
                details={"page_id": page_id_str}
            )

    def fetch_max_page_number(self, comic_id: str | UUID) -> int | None:
        """
        Highest page number of a comic, or None when it has no pages.
        """
        comic_id_str = normalize_uuid(comic_id)

        try:
            response = (
                self.client.table("comic_pages")
                .select("page_number")
                .eq("comic_id", comic_id_str)
                .order("page_number", desc=True)
                .limit(1)
                .execute()
            )

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to read page numbers: {e}",
                code="FETCH_PAGE_NUMBER_FAILED",
                details={"comic_id": comic_id_str}
            )

        rows = response.data or []
        if not rows:
            return None
        return int(rows[0]["page_number"])

    def insert_page(
        self,
        comic_id: str | UUID,
        page_number: int,
        image_url: str,
    ) -> dict[str, Any]:
        """
        Insert a page row.

        Raises:
            SupabaseClientError: If insert fails. `is_unique_violation` is set
                when another page already holds `page_number`.
        """
        data = {
            "comic_id": normalize_uuid(comic_id),
            "page_number": page_number,
            "image_url": image_url,
        }

        try:
            response = self.client.table("comic_pages").insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert page: {e}",
                code="INSERT_PAGE_FAILED",
                details={"comic_id": data["comic_id"], "page_number": page_number}
            )

    def delete_page(self, page_id: str | UUID) -> None:
        """
        Delete a page row.

        Raises:
            SupabaseClientError: If delete fails
        """
        page_id_str = normalize_uuid(page_id)

        try:
            self.client.table("comic_pages").delete().eq("id", page_id_str).execute()
            logger.info(f"Deleted page row: {page_id_str}")

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete page: {e}",
                code="DELETE_PAGE_FAILED",
                details={"page_id": page_id_str}
            )
