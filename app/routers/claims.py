# =============================================================================
# app/routers/claims.py - Provenance Claim Endpoints
# =============================================================================
# Claim creation (direct and request-for-confirmation), moderation by the
# work's artist, and the helpers the claim forms need.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Path, Query, status
from pydantic import BaseModel

from app.dependencies import CurrentUser
from core.models.claim import (
    ClaimConfirm,
    ClaimRequestCreate,
    ClaimTypeInfo,
    ClaimUpdate,
    ExistingArtistClaimCreate,
    ExternalArtistClaimCreate,
    ExternalArtistCreate,
    PendingClaim,
)
from core.services.provenance_service import DEDUP_DEFAULT_LIMIT, ProvenanceService
from lib.provenance import describe_claim_types

router = APIRouter()


class ClaimCreatedResponse(BaseModel):
    claim_id: str | None
    status: str = "pending"


class ExternalArtistCreatedResponse(BaseModel):
    id: str | None


# =============================================================================
# Claims
# =============================================================================

@router.get("/claims/types", response_model=list[ClaimTypeInfo])
async def list_claim_types():
    """Labels and "... by" phrases for every claim type."""
    return describe_claim_types()


@router.post("/claims/external", status_code=status.HTTP_201_CREATED)
async def create_external_artist_claim(user: CurrentUser, request: ExternalArtistClaimCreate) -> dict[str, Any]:
    """Claim a work by an artist who is not on the platform yet."""
    return ProvenanceService.create_external_artist_and_claim(request, access_token=user.access_token)


@router.post("/claims/existing", status_code=status.HTTP_201_CREATED)
async def create_existing_artist_claim(user: CurrentUser, request: ExistingArtistClaimCreate) -> dict[str, Any]:
    return ProvenanceService.create_claim_for_existing_artist(request, access_token=user.access_token)


@router.post("/claims/requests", response_model=ClaimCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_claim_request(user: CurrentUser, request: ClaimRequestCreate):
    """
    Ask a work's artist to confirm a relationship ("I own this").

    The claim stays pending until the artist confirms or rejects it.
    """
    claim_id = ProvenanceService.create_claim_request(user.user_id, request)
    return ClaimCreatedResponse(claim_id=claim_id)


@router.patch("/claims/{claim_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_claim(
    claim_id: Annotated[str, Path(description="Claim id")],
    user: CurrentUser,
    request: ClaimUpdate,
):
    """Edit a claim you made; only fields in the body are written."""
    ProvenanceService.update_claim(claim_id, user.user_id, request)


@router.post("/claims/{claim_id}/confirm", status_code=status.HTTP_204_NO_CONTENT)
async def confirm_claim(
    claim_id: Annotated[str, Path(description="Claim id")],
    user: CurrentUser,
    request: ClaimConfirm | None = None,
):
    ProvenanceService.confirm_claim(claim_id, user.user_id, request)


@router.delete("/claims/{claim_id}", status_code=status.HTTP_204_NO_CONTENT)
async def reject_claim(
    claim_id: Annotated[str, Path(description="Claim id")],
    user: CurrentUser,
):
    """Reject (delete) a claim on one of your works."""
    ProvenanceService.reject_claim(claim_id, user.user_id)


@router.post("/external-artists", response_model=ExternalArtistCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_external_artist(user: CurrentUser, request: ExternalArtistCreate):
    """Invite an artist who is not on the platform, without a claim."""
    return ExternalArtistCreatedResponse(id=ProvenanceService.create_external_artist(user.user_id, request))


# =============================================================================
# Works
# =============================================================================

@router.get("/works/dedup")
async def search_works_for_dedup(
    user: CurrentUser,
    artist_profile_id: str | None = None,
    external_artist_id: str | None = None,
    q: str | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = DEDUP_DEFAULT_LIMIT,
) -> list[dict[str, Any]]:
    """Existing works a new claim may duplicate."""
    return ProvenanceService.search_works_for_dedup(
        artist_profile_id=artist_profile_id,
        external_artist_id=external_artist_id,
        q=q,
        limit=limit,
    )


@router.get("/works/{work_id}/pending-claims", response_model=list[PendingClaim])
async def list_pending_claims(
    work_id: Annotated[str, Path(description="Artwork id")],
    user: CurrentUser,
):
    """Pending claims on one of your works, awaiting your decision."""
    return ProvenanceService.list_pending_claims_for_work(work_id, user.user_id)
