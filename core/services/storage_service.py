# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles page image upload/delete and public URL handling in Supabase Storage.
#
# Object paths follow comic-<comicId>/page-<n>-<timestampMillis>-<filename>.
# Public URLs contain /storage/v1/object/public/<bucket>/, which is how the
# object path is recovered when a page is deleted.
# =============================================================================

import logging
import posixpath
import time

from lib.supabase_client import SupabaseBackend
from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

PUBLIC_URL_PREFIX = "/storage/v1/object/public/"


class StorageService:
    """
    Service for Supabase Storage operations on the page image bucket.
    """

    @staticmethod
    def build_page_path(
        comic_id: str,
        page_number: int,
        filename: str,
        timestamp_ms: int | None = None,
    ) -> str:
        """
        Build the storage path for a page image.

        The timestamp makes collisions unlikely but not impossible.

        Example:
            build_page_path("abc", 3, "cover.png", 1705312200000)
            -> "comic-abc/page-3-1705312200000-cover.png"
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)

        # Keep only the final component of client-supplied names
        name = posixpath.basename(filename.replace("\\", "/")) or "page"

        return f"comic-{comic_id}/page-{page_number}-{timestamp_ms}-{name}"

    @staticmethod
    def path_from_public_url(url: str, bucket: str) -> str | None:
        """
        Recover the object path from a public URL.

        Returns:
            The path inside the bucket, or None if the URL doesn't point
            into the bucket
        """
        marker = f"{PUBLIC_URL_PREFIX}{bucket}/"
        index = url.find(marker)
        if index == -1:
            return None

        path = url[index + len(marker):]
        # get_public_url may append an empty query string
        path = path.split("?", 1)[0]
        return path or None

    @staticmethod
    def upload_page_image(
        backend: SupabaseBackend,
        path: str,
        content: bytes,
        content_type: str,
    ) -> str:
        """
        Upload page image bytes to storage.

        Returns:
            Storage path where the image was uploaded

        Raises:
            StorageUploadError: If upload fails
        """
        try:
            backend.storage_bucket().upload(
                path=path,
                file=content,
                file_options={"content-type": content_type},
            )

            logger.info(f"Uploaded page image to storage: {path}")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError()

    @staticmethod
    def get_public_url(backend: SupabaseBackend, path: str) -> str:
        """
        Get the public URL for a stored page image.

        Raises:
            StorageUploadError: If the URL can't be resolved
        """
        try:
            return backend.storage_bucket().get_public_url(path)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise StorageUploadError()

    @staticmethod
    def delete_file(backend: SupabaseBackend, path: str) -> bool:
        """
        Delete a file from storage.

        Returns:
            True if deleted successfully, False otherwise (failure is logged)
        """
        try:
            backend.storage_bucket().remove([path])
            logger.info(f"Deleted file from storage: {path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete storage object {path}: {e}")
            return False
