# =============================================================================
# tests/test_entitlements.py - Plan Entitlement Tests
# =============================================================================

from unittest.mock import patch

import pytest

from core.models.entitlement import Feature, Plan
from core.services.entitlement_service import EntitlementService, clear_entitlement_cache
from lib.entitlements import features_for, has_feature
from tests.conftest import make_client, make_query

USER_ID = "22222222-2222-2222-2222-222222222222"


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_entitlement_cache()
    yield
    clear_entitlement_cache()


class TestHasFeature:
    """Test plan -> feature gating."""

    def test_free_plan_has_nothing(self):
        assert features_for(Plan.FREE) == []

    @pytest.mark.parametrize("plan", [Plan.ARTIST_PRO, Plan.COLLECTOR_PRO])
    def test_pro_plans_unlock_viewer_lists(self, plan):
        assert has_feature(plan, Feature.VIEW_PROFILE_VIEWERS_LIST)
        assert has_feature(plan, Feature.VIEW_ARTWORK_VIEWERS_LIST)

    def test_strings_accepted(self):
        assert has_feature("artist_pro", "VIEW_PROFILE_VIEWERS_LIST")

    def test_unknown_values(self):
        assert has_feature("enterprise", Feature.VIEW_PROFILE_VIEWERS_LIST) is False
        assert has_feature(Plan.ARTIST_PRO, "TELEPORT") is False


class TestEntitlementService:
    """Test entitlement lookups with a mocked Supabase client."""

    def test_anonymous_is_free(self):
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            entitlement = EntitlementService.get_entitlement(None)

        assert entitlement.plan == Plan.FREE
        mock.get_client.assert_not_called()

    def test_missing_row_is_free(self):
        query = make_query(None)
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": query})

            entitlement = EntitlementService.get_entitlement(USER_ID)

        assert entitlement.plan == Plan.FREE
        assert entitlement.status == "active"

    def test_missing_row_is_created_without_overwriting(self):
        query = make_query(None)
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": query})

            EntitlementService.get_entitlement(USER_ID)
            EntitlementService.get_entitlement(USER_ID)

        upserted, kwargs = query.upsert.call_args
        assert upserted[0]["user_id"] == USER_ID
        assert upserted[0]["plan"] == "free"
        assert kwargs == {"on_conflict": "user_id", "ignore_duplicates": True}
        # select + upsert, then the cached entitlement is served
        assert query.execute.call_count == 2

    def test_existing_row_is_not_upserted(self):
        query = make_query({"plan": "artist_pro"})
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": query})

            EntitlementService.get_entitlement(USER_ID)

        query.upsert.assert_not_called()

    def test_reads_plan(self):
        row = {"plan": "collector_pro", "status": "active", "valid_until": "2026-12-31"}
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": row})

            entitlement = EntitlementService.get_entitlement(USER_ID)

        assert entitlement.plan == Plan.COLLECTOR_PRO
        assert entitlement.valid_until == "2026-12-31"

    def test_unknown_plan_is_free(self):
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": {"plan": "platinum"}})

            assert EntitlementService.get_entitlement(USER_ID).plan == Plan.FREE

    def test_cached_per_user(self):
        query = make_query({"plan": "artist_pro"})
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": query})

            EntitlementService.get_entitlement(USER_ID)
            EntitlementService.get_entitlement(USER_ID)

        assert query.execute.call_count == 1

    def test_cache_expires(self):
        query = make_query({"plan": "artist_pro"})
        with patch("core.services.entitlement_service.SupabaseClient") as mock, \
             patch("core.services.entitlement_service.time") as mock_time:
            mock.get_client.return_value = make_client({"entitlements": query})
            mock_time.monotonic.side_effect = [100.0, 131.0, 131.0]

            EntitlementService.get_entitlement(USER_ID)
            EntitlementService.get_entitlement(USER_ID)

        assert query.execute.call_count == 2

    def test_ensure_free_entitlement_upserts_and_clears_cache(self):
        query = make_query({"plan": "artist_pro"})
        with patch("core.services.entitlement_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"entitlements": query})

            EntitlementService.get_entitlement(USER_ID)
            EntitlementService.ensure_free_entitlement(USER_ID)
            EntitlementService.get_entitlement(USER_ID)

        upserted, kwargs = query.upsert.call_args
        assert upserted[0]["plan"] == "free"
        assert kwargs == {"on_conflict": "user_id", "ignore_duplicates": False}
        assert query.execute.call_count == 3
