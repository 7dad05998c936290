# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - comics.py: Dashboard, comic creation, draft pre-fill and reader
# - pages.py: Page listing, upload and delete
# - explore.py: Public discovery feed
# - story_helper.py: AI story outline generator
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import comics
from . import pages
from . import explore
from . import story_helper

__all__ = [
    "health",
    "comics",
    "pages",
    "explore",
    "story_helper",
]
