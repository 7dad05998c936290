# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed wrapper for Supabase tables, storage and auth
# - utils.py: Shared utilities (error base class, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseBackend, SupabaseClientError
from lib.utils import ApplicationError, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseBackend",
    "SupabaseClientError",
    # Utils
    "ApplicationError",
    "normalize_uuid",
]
