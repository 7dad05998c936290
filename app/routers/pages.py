# =============================================================================
# app/routers/pages.py - Page Management Endpoints
# =============================================================================
# List, upload and delete the pages of a comic. All endpoints require a
# session; upload and delete also require owning the comic.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.dependencies import BackendDep
from app.exceptions import (
    ConfirmationRequiredError,
    FileTooLargeError,
    InvalidFileTypeError,
)
from core.models.page import (
    ComicPage,
    PageDeleteResponse,
    PageList,
    PageUploadResponse,
)
from core.services.comic_service import ComicService
from core.services.page_service import PageService

logger = logging.getLogger(__name__)

router = APIRouter()

NO_PAGES_MESSAGE = "No pages have been uploaded yet."


@router.get("/{comic_id}/pages", response_model=PageList)
async def list_pages(
    comic_id: Annotated[str, Path(description="Comic ID")],
    backend: BackendDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    List a comic's pages in ascending page order.

    Private comics are only listed for their creator.
    """
    ComicService.get_comic(backend, comic_id, viewer_id=user.id)
    pages = PageService.list_pages(backend, comic_id)

    return PageList(
        comic_id=comic_id,
        pages=[ComicPage(**p) for p in pages],
        message=None if pages else NO_PAGES_MESSAGE,
    )


@router.post("/{comic_id}/pages", response_model=PageUploadResponse, status_code=201)
async def upload_page(
    comic_id: Annotated[str, Path(description="Comic ID")],
    file: Annotated[UploadFile, File(description="Page image (JPG, PNG, WEBP)")],
    backend: BackendDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Upload one image as the comic's next page.

    The page number is the current highest page number plus one (1 for a
    comic without pages). If another upload takes the same number first,
    the request fails with 409 and can simply be repeated.
    """
    ComicService.get_managed_comic(backend, comic_id, user.id)

    filename = file.filename or "page"
    content_type = (file.content_type or "").lower()

    if content_type not in settings.allowed_image_types_list:
        raise InvalidFileTypeError(filename, file.content_type, settings.allowed_image_types_list)

    content = await file.read()
    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    logger.info(f"Processing page upload for comic {comic_id}: {filename} ({len(content)} bytes)")

    page = PageService.upload_page(
        backend,
        comic_id=comic_id,
        filename=filename,
        content=content,
        content_type=content_type,
    )

    return PageUploadResponse(page=ComicPage(**page))


@router.delete("/{comic_id}/pages/{page_id}", response_model=PageDeleteResponse)
async def delete_page(
    comic_id: Annotated[str, Path(description="Comic ID")],
    page_id: Annotated[str, Path(description="Page ID")],
    backend: BackendDep,
    user: AuthUser = Depends(get_current_user),
    confirm: Annotated[bool, Query(description="Must be true; deletion cannot be undone")] = False,
):
    """
    Delete a page and its image.

    Returns the remaining pages. The page is gone from the list even when
    its image could not be removed from storage (`blob_deleted` is then
    false).
    """
    ComicService.get_managed_comic(backend, comic_id, user.id)
    page = PageService.get_page(backend, comic_id, page_id)

    if not confirm:
        raise ConfirmationRequiredError(f"Delete page {page['page_number']}? This cannot be undone.")

    # Read before deleting: once the row is gone the delete must succeed
    pages = PageService.list_pages(backend, comic_id)

    blob_deleted = PageService.delete_page(backend, page)

    remaining = [p for p in pages if str(p["id"]) != str(page["id"])]

    return PageDeleteResponse(
        deleted_page_id=str(page["id"]),
        page_number=page["page_number"],
        blob_deleted=blob_deleted,
        pages=[ComicPage(**p) for p in remaining],
    )
