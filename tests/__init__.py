# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Demo Project API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_repositories.py: Repository queries against in-memory SQLite
# - test_cache.py: Cache backends and decorators
# - test_<feature>.py: API tests through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
