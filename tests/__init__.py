# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the PanelPlay API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_supabase_client.py: Query shapes of the Supabase wrapper
# - test_page_service.py / test_comic_service.py / test_explore.py: Services
# - test_story_helper.py: Story helper agent and endpoint
# - test_auth.py / test_api.py: HTTP endpoints through the TestClient
#
# Run tests with: pytest
# =============================================================================
