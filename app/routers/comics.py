# =============================================================================
# app/routers/comics.py - Comic Endpoints
# =============================================================================
# Creator dashboard, comic creation (with the draft pre-fill) and the
# public reader view.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.dependencies import BackendDep
from core.models.comic import (
    ComicCreate,
    ComicCreateResponse,
    ComicDraft,
    ComicList,
    ComicReader,
    ComicResponse,
)
from core.models.page import ComicPage
from core.services.comic_service import ComicService, build_draft

logger = logging.getLogger(__name__)

router = APIRouter()

NO_COMICS_MESSAGE = "You don't have any comics yet. Create one!"
NO_PAGES_MESSAGE = "No pages yet"


@router.get("", response_model=ComicList)
async def list_my_comics(
    backend: BackendDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Creator dashboard: the caller's comics, newest first.

    An empty list is a normal response with a "none yet" message.
    """
    comics = ComicService.list_creator_comics(backend, user.id)

    return ComicList(
        comics=[ComicResponse(**c) for c in comics],
        total=len(comics),
        message=None if comics else NO_COMICS_MESSAGE,
    )


@router.post("", response_model=ComicCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_comic(
    payload: ComicCreate,
    backend: BackendDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a comic owned by the caller.

    On failure nothing is saved and the client can resubmit the same form.
    """
    comic = ComicService.create_comic(backend, user.id, payload)
    return ComicCreateResponse(comic=ComicResponse(**comic))


@router.get("/draft", response_model=ComicDraft)
async def get_comic_draft(
    idea: Annotated[Optional[str], Query(description="URL-encoded outline to use as description")] = None,
):
    """
    Defaults for the comic-creation form.

    When `idea` is given (for example a story helper outline) it becomes the
    description. If it can't be URL-decoded it is used as-is.
    """
    return build_draft(idea)


@router.get("/{comic_id}", response_model=ComicReader)
async def read_comic(
    comic_id: Annotated[str, Path(description="Comic ID")],
    backend: BackendDep,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """
    Reader view: a comic and its pages in ascending page order.

    Private comics are only visible to their creator.
    """
    comic, pages = ComicService.get_reader(
        backend,
        comic_id,
        viewer_id=user.id if user else None,
    )

    return ComicReader(
        comic=ComicResponse(**comic),
        pages=[ComicPage(**p) for p in pages],
        page_count=len(pages),
        message=None if pages else NO_PAGES_MESSAGE,
    )
