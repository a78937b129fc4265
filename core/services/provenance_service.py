# =============================================================================
# core/services/provenance_service.py - Provenance Claims
# =============================================================================
# Claim lifecycle:
#
#   create (RPC, confirmed by the creator) ----------------------> claims
#   create_claim_request (pending) --confirm_claim--> confirmed
#                                  --reject_claim---> deleted
#
# Claims about off-platform artists go through create_external_artist_and_claim,
# which creates the external_artists row and the claim in one transaction.
# Only the artist of a work may confirm or reject claims on it.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import (
    ClaimNotFoundError,
    ClaimPermissionError,
    ClaimTargetMissingError,
    WorkNotFoundError,
    WorkPermissionError,
)
from core.models.claim import (
    ClaimConfirm,
    ClaimRequestCreate,
    ClaimStatus,
    ClaimUpdate,
    ExistingArtistClaimCreate,
    ExternalArtistClaimCreate,
    ExternalArtistCreate,
    PendingClaim,
    Visibility,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

DEDUP_DEFAULT_LIMIT = 20

PENDING_CLAIM_SELECT = (
    "id, claim_type, subject_profile_id, work_id, created_at, period_status, "
    "start_date, end_date, profiles!subject_profile_id(username, display_name)"
)


def _embedded_profile(value: Any) -> dict[str, Any] | None:
    """PostgREST embeds a to-one relation as an object or a one-item list."""
    if isinstance(value, list):
        return value[0] if value and isinstance(value[0], dict) else None
    return value if isinstance(value, dict) else None


def _require_target(work_id: str | None, project_id: str | None) -> None:
    if not work_id and not project_id:
        raise ClaimTargetMissingError()


class ProvenanceService:
    """Service for claim creation and moderation."""

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @staticmethod
    def create_external_artist_and_claim(
        data: ExternalArtistClaimCreate,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Create an external artist and a claim in one RPC.

        The RPC records the caller (auth.uid()) as the claim subject, so
        it runs with the caller's access token.

        Returns:
            {"external_artist": {...}, "claim": {...}}

        Raises:
            ClaimTargetMissingError: If neither work_id nor project_id is set
            SupabaseClientError: If the RPC fails
        """
        _require_target(data.work_id, data.project_id)

        params: dict[str, Any] = {
            "p_display_name": data.display_name,
            "p_website": data.website,
            "p_instagram": data.instagram,
            "p_invite_email": data.invite_email,
            "p_claim_type": data.claim_type.value,
            "p_work_id": data.work_id,
            "p_project_id": data.project_id,
            "p_visibility": data.visibility.value,
        }
        if data.period_status is not None:
            params["p_period_status"] = data.period_status.value

        result = SupabaseClient.rpc("create_external_artist_and_claim", params, access_token=access_token)
        logger.info(f"Created external artist '{data.display_name}' with {data.claim_type.value} claim")
        return result

    @staticmethod
    def create_claim_for_existing_artist(
        data: ExistingArtistClaimCreate,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a claim about an on-platform artist's work.

        Returns:
            {"claim": {...}}
        """
        _require_target(data.work_id, data.project_id)

        params: dict[str, Any] = {
            "p_artist_profile_id": data.artist_profile_id,
            "p_claim_type": data.claim_type.value,
            "p_work_id": data.work_id,
            "p_project_id": data.project_id,
            "p_visibility": data.visibility.value,
        }
        if data.period_status is not None:
            params["p_period_status"] = data.period_status.value

        return SupabaseClient.rpc("create_claim_for_existing_artist", params, access_token=access_token)

    @staticmethod
    def create_external_artist(user_id: str | UUID, data: ExternalArtistCreate) -> str | None:
        """
        Insert an external_artists row invited by the user.

        Returns:
            The new external artist id
        """
        client = SupabaseClient.get_client()
        invite_email = (data.invite_email or "").strip() or None

        try:
            response = (
                client.table("external_artists")
                .insert({
                    "display_name": data.display_name.strip(),
                    "invite_email": invite_email,
                    "invited_by": normalize_uuid(user_id),
                })
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create external artist: {e}",
                code="CREATE_EXTERNAL_ARTIST_FAILED",
            )

        rows = response.data or []
        return rows[0].get("id") if rows else None

    @staticmethod
    def update_claim(claim_id: str, user_id: str | UUID, data: ClaimUpdate) -> None:
        """
        Write only the fields set on `data`.

        Raises:
            ClaimNotFoundError: If the claim does not exist
            ClaimPermissionError: If the caller is not the claim's subject
        """
        payload = data.model_dump(mode="json", exclude_unset=True)
        if not payload:
            return

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table("claims")
                .select("id, subject_profile_id")
                .eq("id", claim_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch claim: {e}",
                code="FETCH_CLAIM_FAILED",
                details={"claim_id": claim_id},
            )
        claim = response.data if response else None
        if not claim:
            raise ClaimNotFoundError(claim_id)
        if claim.get("subject_profile_id") != normalize_uuid(user_id):
            raise ClaimPermissionError(claim_id)

        try:
            client.table("claims").update(payload).eq("id", claim_id).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update claim: {e}",
                code="UPDATE_CLAIM_FAILED",
                details={"claim_id": claim_id, "fields": sorted(payload)},
            )

    @staticmethod
    def create_claim_request(user_id: str | UUID, data: ClaimRequestCreate) -> str | None:
        """
        Create a pending claim with the caller as subject.

        The artist of the work confirms or rejects it later.

        Returns:
            The new claim id
        """
        client = SupabaseClient.get_client()
        row: dict[str, Any] = {
            "subject_profile_id": normalize_uuid(user_id),
            "claim_type": data.claim_type.value,
            "work_id": data.work_id,
            "artist_profile_id": data.artist_profile_id,
            "visibility": Visibility.PUBLIC.value,
            "status": ClaimStatus.PENDING.value,
        }
        if data.period_status is not None:
            row["period_status"] = data.period_status.value

        try:
            response = client.table("claims").insert(row).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create claim request: {e}",
                code="CREATE_CLAIM_REQUEST_FAILED",
                suggestion="You may already have a pending request for this work",
                details={"work_id": data.work_id},
            )

        rows = response.data or []
        claim_id = rows[0].get("id") if rows else None
        logger.info(f"Claim request {claim_id} ({data.claim_type.value}) on work {data.work_id}")
        return claim_id

    # -------------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------------

    @staticmethod
    def _assert_artist_of_claim(claim_id: str, user_id: str | UUID) -> dict[str, Any]:
        """
        Load a claim and check the caller is the artist of its work.

        Raises:
            ClaimNotFoundError: If the claim does not exist
            ClaimPermissionError: If the caller is not the artist
        """
        client = SupabaseClient.get_client()
        try:
            response = (
                client.table("claims")
                .select("id, work_id, artist_profile_id, status, artworks!work_id(artist_id)")
                .eq("id", claim_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch claim: {e}",
                code="FETCH_CLAIM_FAILED",
                details={"claim_id": claim_id},
            )

        claim = response.data if response else None
        if not claim:
            raise ClaimNotFoundError(claim_id)

        work = _embedded_profile(claim.get("artworks")) or {}
        artist_id = work.get("artist_id") or claim.get("artist_profile_id")
        if artist_id != normalize_uuid(user_id):
            raise ClaimPermissionError(claim_id)
        return claim

    @staticmethod
    def confirm_claim(claim_id: str, user_id: str | UUID, data: ClaimConfirm | None = None) -> None:
        """
        Confirm a pending claim on one of the caller's works.

        Period status is only written when given; dates are written when
        present in the payload, with "" clearing them.
        """
        ProvenanceService._assert_artist_of_claim(claim_id, user_id)

        update: dict[str, Any] = {"status": ClaimStatus.CONFIRMED.value}
        if data is not None:
            provided = data.model_fields_set
            if data.period_status is not None:
                update["period_status"] = data.period_status.value
            if "start_date" in provided:
                update["start_date"] = data.start_date or None
            if "end_date" in provided:
                update["end_date"] = data.end_date or None

        client = SupabaseClient.get_client()
        try:
            client.table("claims").update(update).eq("id", claim_id).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to confirm claim: {e}",
                code="CONFIRM_CLAIM_FAILED",
                details={"claim_id": claim_id},
            )
        logger.info(f"Claim {claim_id} confirmed")

    @staticmethod
    def reject_claim(claim_id: str, user_id: str | UUID) -> None:
        """Reject (delete) a claim on one of the caller's works."""
        ProvenanceService._assert_artist_of_claim(claim_id, user_id)

        client = SupabaseClient.get_client()
        try:
            client.table("claims").delete().eq("id", claim_id).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to reject claim: {e}",
                code="REJECT_CLAIM_FAILED",
                details={"claim_id": claim_id},
            )
        logger.info(f"Claim {claim_id} rejected")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def _assert_artist_of_work(work_id: str, user_id: str | UUID) -> None:
        """
        Check the caller made the work.

        Raises:
            WorkNotFoundError: If the work does not exist
            WorkPermissionError: If the caller is not its artist
        """
        client = SupabaseClient.get_client()
        try:
            response = (
                client.table("artworks")
                .select("id, artist_id")
                .eq("id", work_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch artwork: {e}",
                code="FETCH_ARTWORK_FAILED",
                details={"work_id": work_id},
            )

        work = response.data if response else None
        if not work:
            raise WorkNotFoundError(work_id)
        if work.get("artist_id") != normalize_uuid(user_id):
            raise WorkPermissionError(work_id)

    @staticmethod
    def list_pending_claims_for_work(work_id: str, user_id: str | UUID) -> list[PendingClaim]:
        """
        Pending claims on one of the caller's works.

        Raises:
            WorkNotFoundError: If the work does not exist
            WorkPermissionError: If the caller is not the work's artist
        """
        ProvenanceService._assert_artist_of_work(work_id, user_id)

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table("claims")
                .select(PENDING_CLAIM_SELECT)
                .eq("work_id", work_id)
                .eq("status", ClaimStatus.PENDING.value)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list pending claims: {e}",
                code="LIST_PENDING_CLAIMS_FAILED",
                details={"work_id": work_id},
            )

        return [
            PendingClaim.model_validate({**row, "profiles": _embedded_profile(row.get("profiles"))})
            for row in response.data or []
        ]

    @staticmethod
    def search_works_for_dedup(
        artist_profile_id: str | None = None,
        external_artist_id: str | None = None,
        q: str | None = None,
        limit: int = DEDUP_DEFAULT_LIMIT,
    ) -> list[dict[str, Any]]:
        """Existing works that a new claim might duplicate."""
        rows = SupabaseClient.rpc("search_works_for_dedup", {
            "p_artist_profile_id": artist_profile_id,
            "p_external_artist_id": external_artist_id,
            "p_q": q,
            "p_limit": limit,
        })
        return rows or []

    @staticmethod
    def count_my_pending_claims(user_id: str | UUID | None) -> int:
        """
        Pending claims across all works the user made.

        Anonymous users and artists without works have zero.
        """
        if not user_id:
            return 0

        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            works = (
                client.table("artworks")
                .select("id")
                .eq("artist_id", user_id_str)
                .execute()
            )
            work_ids = [row["id"] for row in works.data or []]
            if not work_ids:
                return 0

            response = (
                client.table("claims")
                .select("id", count="exact", head=True)
                .in_("work_id", work_ids)
                .eq("status", ClaimStatus.PENDING.value)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count pending claims: {e}",
                code="COUNT_PENDING_CLAIMS_FAILED",
                details={"user_id": user_id_str},
            )

        return response.count or 0
