# =============================================================================
# core/services/page_service.py - Page Business Logic
# =============================================================================
# Handles listing, uploading and deleting comic pages.
#
# Upload:  next number -> upload blob -> resolve public URL -> insert row
#          (a failed insert removes the uploaded blob again)
# Delete:  delete row -> delete blob (blob failure is logged, not fatal)
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseBackend, SupabaseClientError
from core.services.storage_service import StorageService
from app.exceptions import (
    BackendUnavailableError,
    PageDeleteError,
    PageNotFoundError,
    PageNumberConflictError,
    PageSaveError,
    StorageUploadError,
)

logger = logging.getLogger(__name__)


class PageService:
    """
    Service for comic page operations.
    """

    @staticmethod
    def sort_pages(pages: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Order pages ascending by page number, whatever order the backend used."""
        return sorted(pages, key=lambda p: int(p["page_number"]))

    @staticmethod
    def next_page_number(max_page_number: int | None) -> int:
        """Page number for a new upload: max + 1, or 1 for an empty comic."""
        return 1 if max_page_number is None else max_page_number + 1

    @staticmethod
    def list_pages(backend: SupabaseBackend, comic_id: str) -> list[dict[str, Any]]:
        """
        List a comic's pages, ascending.

        Raises:
            BackendUnavailableError: If the query fails
        """
        try:
            pages = backend.list_pages(comic_id)
        except SupabaseClientError as e:
            logger.error(f"Error loading pages for {comic_id}: {e}")
            raise BackendUnavailableError("pages")

        return PageService.sort_pages(pages)

    @staticmethod
    def upload_page(
        backend: SupabaseBackend,
        comic_id: str,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> dict[str, Any]:
        """
        Append an image to a comic as its next page.

        Args:
            backend: Hosted backend
            comic_id: Comic the page belongs to
            filename: Original filename (embedded in the storage path)
            content: Image bytes
            content_type: Image MIME type

        Returns:
            The inserted page dict

        Raises:
            StorageUploadError: If the image upload fails (nothing was recorded)
            PageNumberConflictError: If a concurrent upload took the number
            PageSaveError: If the page row could not be inserted
        """
        try:
            max_page_number = backend.fetch_max_page_number(comic_id)
        except SupabaseClientError as e:
            logger.error(f"Could not compute next page number for {comic_id}: {e}")
            raise BackendUnavailableError("pages")

        page_number = PageService.next_page_number(max_page_number)
        path = StorageService.build_page_path(comic_id, page_number, filename)

        StorageService.upload_page_image(backend, path, content, content_type)

        try:
            image_url = StorageService.get_public_url(backend, path)
            page = backend.insert_page(comic_id, page_number, image_url)

        except StorageUploadError:
            PageService._discard_blob(backend, path)
            raise

        except SupabaseClientError as e:
            logger.error(f"Insert error for page {page_number} of {comic_id}: {e}")
            PageService._discard_blob(backend, path)
            if e.is_unique_violation:
                raise PageNumberConflictError(comic_id, page_number)
            raise PageSaveError(comic_id, page_number)

        logger.info(f"Uploaded page {page_number} for comic {comic_id}")
        return page

    @staticmethod
    def _discard_blob(backend: SupabaseBackend, path: str) -> None:
        """Remove a blob whose page row was never written."""
        if not StorageService.delete_file(backend, path):
            logger.warning(f"Orphaned page image left in storage: {path}")

    @staticmethod
    def get_page(
        backend: SupabaseBackend,
        comic_id: str,
        page_id: str,
    ) -> dict[str, Any]:
        """
        Get a page that belongs to `comic_id`.

        Raises:
            PageNotFoundError: If the page doesn't exist in this comic
        """
        try:
            page = backend.fetch_page(page_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch page {page_id}: {e}")
            raise BackendUnavailableError("pages")

        if not page or str(page.get("comic_id")) != str(comic_id):
            raise PageNotFoundError(page_id)
        return page

    @staticmethod
    def delete_page(
        backend: SupabaseBackend,
        page: dict[str, Any],
    ) -> bool:
        """
        Delete a page row, then its image.

        The row is authoritative: once it is gone the delete counts as done,
        even if the image can't be removed.

        Returns:
            True if the image was removed too, False if it was left behind

        Raises:
            PageDeleteError: If the row could not be deleted (image untouched)
        """
        page_id = str(page["id"])

        try:
            backend.delete_page(page_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to delete page row {page_id}: {e}")
            raise PageDeleteError(page_id)

        path = StorageService.path_from_public_url(page.get("image_url") or "", backend.pages_bucket)
        if not path:
            logger.warning(f"Could not derive storage path for page {page_id}: {page.get('image_url')}")
            return False

        blob_deleted = StorageService.delete_file(backend, path)
        if not blob_deleted:
            logger.warning(f"Page {page_id} deleted but its image remains in storage: {path}")
        return blob_deleted
