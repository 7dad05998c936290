# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for comics, pages and the explore feed
# - services/: Comic, page, storage and explore operations
#
# Services receive the SupabaseBackend as an argument and raise the
# PanelPlay exceptions from app.exceptions. They don't touch requests.
# =============================================================================
