# =============================================================================
# core/services/entitlement_service.py - Plan Entitlements
# =============================================================================
# Reads the user's plan from the entitlements table. A missing row means
# the free plan. Lookups are cached per user for 30 seconds.
# =============================================================================

import logging
import time
from datetime import datetime, timezone
from uuid import UUID

from core.models.entitlement import Entitlement, Plan
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 30

# user_id -> (fetched_at, entitlement)
_cache: dict[str, tuple[float, Entitlement]] = {}


def clear_entitlement_cache() -> None:
    _cache.clear()


class EntitlementService:
    """Service for plan lookups."""

    @staticmethod
    def get_entitlement(user_id: str | UUID | None) -> Entitlement:
        """
        Get the user's entitlement.

        Anonymous users and users without a row are on the free plan; a
        missing row is created as free so later plan changes have a row to
        update.
        Unknown plan values are treated as free.

        Raises:
            SupabaseClientError: If the query fails
        """
        if not user_id:
            return Entitlement()

        user_id_str = normalize_uuid(user_id)
        cached = _cache.get(user_id_str)
        if cached and time.monotonic() - cached[0] < CACHE_TTL_SECONDS:
            return cached[1]

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table("entitlements")
                .select("plan, status, valid_until")
                .eq("user_id", user_id_str)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch entitlements: {e}",
                code="FETCH_ENTITLEMENTS_FAILED",
                details={"user_id": user_id_str},
            )

        row = (response.data if response else None) or {}
        if not row:
            EntitlementService.ensure_free_entitlement(user_id_str, overwrite=False)

        try:
            plan = Plan(row.get("plan") or Plan.FREE.value)
        except ValueError:
            logger.warning(f"Unknown plan {row.get('plan')!r} for {user_id_str}; using free")
            plan = Plan.FREE

        entitlement = Entitlement(
            plan=plan,
            status=row.get("status") or "active",
            valid_until=row.get("valid_until"),
        )
        _cache[user_id_str] = (time.monotonic(), entitlement)
        return entitlement

    @staticmethod
    def ensure_free_entitlement(user_id: str | UUID, overwrite: bool = True) -> None:
        """
        Create the user's row on the free plan.

        Args:
            user_id: Profile id
            overwrite: Reset an existing row to free; when False an existing
                row is left alone

        Raises:
            SupabaseClientError: If the upsert fails
        """
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            client.table("entitlements").upsert(
                {
                    "user_id": user_id_str,
                    "plan": Plan.FREE.value,
                    "status": "active",
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
                on_conflict="user_id",
                ignore_duplicates=not overwrite,
            ).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create entitlement: {e}",
                code="UPSERT_ENTITLEMENT_FAILED",
                details={"user_id": user_id_str},
            )
        _cache.pop(user_id_str, None)
        logger.info(f"Free entitlement ensured for {user_id_str} (overwrite={overwrite})")
