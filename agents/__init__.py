# =============================================================================
# agents/ - AI Helpers
# =============================================================================
# This package contains the AI-assisted features:
# - story_helper.py: Story outline generator (synopsis + 10-panel outline)
#
# Prompts:
# - prompts/story_outline.py: Fixed story outline template
# =============================================================================

from agents.story_helper import (
    NO_CONTENT_FALLBACK,
    StoryHelperAgent,
    StoryHelperError,
)

__all__ = [
    "NO_CONTENT_FALLBACK",
    "StoryHelperAgent",
    "StoryHelperError",
]
