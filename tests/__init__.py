# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Abstract API:
# - test_models.py: Pydantic model validation
# - test_feed.py / test_completeness.py / test_provenance.py /
#   test_profile_payload.py / test_vector_math.py / test_entitlements.py:
#   pure rules in lib/
# - test_*_service.py: services with a mocked Supabase client
# - test_tasks.py: Celery tasks called synchronously
# - test_api.py: endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
