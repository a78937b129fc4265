# =============================================================================
# app/routers/me.py - Current User Endpoints
# =============================================================================
# Completeness, profile saves, plan entitlements and the pending-claims
# badge. All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import CurrentUser
from core.models.entitlement import EntitlementResponse
from core.models.profile import CompletenessResult, ProfileBaseInput, ProfileDetailsInput
from core.services.entitlement_service import EntitlementService
from core.services.profile_service import ProfileService
from core.services.provenance_service import ProvenanceService
from lib.entitlements import features_for

router = APIRouter()


class ProfileSaveResponse(BaseModel):
    updated_fields: list[str]
    completeness: CompletenessResult


class CountResponse(BaseModel):
    count: int


@router.get("/completeness", response_model=CompletenessResult)
async def get_my_completeness(user: CurrentUser):
    """
    Profile completeness score (0-100) with sections worth filling in.

    The stored score is refreshed when it has drifted.
    """
    return ProfileService.get_profile_completeness(user.user_id)


@router.patch("/profile", response_model=ProfileSaveResponse)
async def save_my_profile(user: CurrentUser, request: ProfileBaseInput):
    """
    Save the base profile form.

    At least one role is required. main_role falls back to the first role
    when it is not artist, collector, curator or gallerist.
    """
    return ProfileService.save_profile_base(user.user_id, request)


@router.patch("/profile/details", response_model=ProfileSaveResponse)
async def save_my_profile_details(user: CurrentUser, request: ProfileDetailsInput):
    """
    Save the profile details form.

    Only fields present in the body are considered; unchanged values are
    not written.
    """
    return ProfileService.save_profile_details(user.user_id, request)


@router.get("/entitlements", response_model=EntitlementResponse)
async def get_my_entitlements(user: CurrentUser):
    entitlement = EntitlementService.get_entitlement(user.user_id)
    return EntitlementResponse(
        **entitlement.model_dump(),
        features=features_for(entitlement.plan),
    )


@router.get("/pending-claims/count", response_model=CountResponse)
async def count_my_pending_claims(user: CurrentUser):
    """Pending claims awaiting the viewer's decision across their works."""
    return CountResponse(count=ProvenanceService.count_my_pending_claims(user.user_id))
