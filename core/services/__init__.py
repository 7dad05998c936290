# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .page_service import PageService
from .comic_service import ComicService
from .explore_service import ExploreService

__all__ = [
    "ComicService",
    "ExploreService",
    "PageService",
    "StorageService",
]
