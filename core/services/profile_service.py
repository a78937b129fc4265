# =============================================================================
# core/services/profile_service.py - Profile Completeness and Details
# =============================================================================
# Completeness is derived from the profiles row merged with its
# profile_details JSON. The stored profile_completeness column is a cache
# refreshed whenever the computed score is trustworthy and has changed.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.exceptions import MissingRolesError, ProfileNotFoundError
from core.models.profile import CompletenessResult, ProfileBaseInput, ProfileDetailsInput
from lib.completeness import compute_completeness, merge_profile_details
from lib.profile_payload import (
    make_patch,
    normalize_profile_base,
    normalize_profile_details,
    sanitize_profile_details,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

# Columns on profiles; every other details field lives in profile_details
BASE_COLUMNS = frozenset({"display_name", "bio", "location", "website", "education"})


def _load_profile(user_id: str) -> dict[str, Any]:
    profile = SupabaseClient.fetch_profile(user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)
    return profile


def _recompute(row: dict[str, Any], base_patch: dict[str, Any], details: dict[str, Any] | None = None) -> CompletenessResult:
    merged = {**row, **base_patch}
    if details is not None:
        merged["profile_details"] = details
    profile, details_loaded = merge_profile_details(merged)
    return compute_completeness(profile, details_loaded=details_loaded)


def _write_profile(user_id: str, update: dict[str, Any]) -> None:
    client = SupabaseClient.get_client()
    try:
        client.table("profiles").update(update).eq("id", user_id).execute()
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to update profile: {e}",
            code="UPDATE_PROFILE_FAILED",
            details={"profile_id": user_id, "fields": sorted(update)},
        )


class ProfileService:
    """Service for profile completeness and the details form."""

    @staticmethod
    def get_profile_completeness(user_id: str | UUID, persist: bool = True) -> CompletenessResult:
        """
        Compute the user's completeness score.

        Args:
            user_id: Profile id
            persist: Write profile_completeness back when the score is high
                confidence and differs from the stored value

        Raises:
            ProfileNotFoundError: If the profile does not exist
            SupabaseClientError: If a query fails
        """
        user_id_str = normalize_uuid(user_id)
        row = _load_profile(user_id_str)

        profile, details_loaded = merge_profile_details(row)
        result = compute_completeness(profile, details_loaded=details_loaded)

        if persist and result.confidence == "high" and row.get("profile_completeness") != result.score:
            _write_profile(user_id_str, {"profile_completeness": result.score})
            logger.info(f"profile_completeness for {user_id_str}: {row.get('profile_completeness')} -> {result.score}")

        return result

    @staticmethod
    def save_profile_details(user_id: str | UUID, data: ProfileDetailsInput) -> dict[str, Any]:
        """
        Save the details form.

        Only fields present in the request are considered, and only those
        that differ from the stored values are written. The completeness
        score is recomputed in the same update.

        Returns:
            {"updated_fields": [...], "completeness": CompletenessResult}

        Raises:
            ProfileNotFoundError: If the profile does not exist
            SupabaseClientError: If a query fails
        """
        user_id_str = normalize_uuid(user_id)
        row = _load_profile(user_id_str)

        provided = data.model_dump(mode="json", exclude_unset=True)
        cleaned = sanitize_profile_details(provided)
        # Detail selects are stored lower-cased; base columns keep their casing
        cleaned.update(normalize_profile_details(cleaned))
        sanitized = {key: value for key, value in cleaned.items() if key in provided}

        stored_details = row.get("profile_details") if isinstance(row.get("profile_details"), dict) else {}
        base_patch = make_patch(row, {k: v for k, v in sanitized.items() if k in BASE_COLUMNS})
        details_patch = make_patch(stored_details, {k: v for k, v in sanitized.items() if k not in BASE_COLUMNS})

        if not base_patch and not details_patch:
            return {"updated_fields": [], "completeness": _recompute(row, {})}

        merged_details = {**stored_details, **details_patch}
        completeness = _recompute(row, base_patch, merged_details)

        update: dict[str, Any] = {
            **base_patch,
            "profile_completeness": completeness.score,
            "profile_updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if details_patch:
            update["profile_details"] = merged_details

        _write_profile(user_id_str, update)
        updated = sorted({*base_patch, *details_patch})
        logger.info(f"Saved profile details for {user_id_str}: {updated}")
        return {"updated_fields": updated, "completeness": completeness}

    @staticmethod
    def save_profile_base(user_id: str | UUID, data: ProfileBaseInput) -> dict[str, Any]:
        """
        Save the base profile form (identity, roles, visibility, education).

        The whole form is submitted, so omitted fields are cleared. Every
        base field is normalized and compared with the stored row; only the
        differences are written, together with the recomputed completeness
        score.

        Returns:
            {"updated_fields": [...], "completeness": CompletenessResult}

        Raises:
            MissingRolesError: If no usable role remains after normalization
            ProfileNotFoundError: If the profile does not exist
            SupabaseClientError: If a query fails
        """
        user_id_str = normalize_uuid(user_id)
        normalized = normalize_profile_base(data.model_dump(mode="json"))
        if not normalized["roles"]:
            raise MissingRolesError()

        row = _load_profile(user_id_str)
        patch = make_patch(row, normalized)
        if not patch:
            return {"updated_fields": [], "completeness": _recompute(row, {})}

        completeness = _recompute(row, patch)
        _write_profile(user_id_str, {
            **patch,
            "profile_completeness": completeness.score,
            "profile_updated_at": datetime.now(timezone.utc).isoformat(),
        })
        updated = sorted(patch)
        logger.info(f"Saved base profile for {user_id_str}: {updated}")
        return {"updated_fields": updated, "completeness": completeness}
