# =============================================================================
# core/models/entitlement.py - Plan Entitlement Schemas
# =============================================================================
# No payments yet: every user is on a plan, and a missing row means "free".
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class Plan(str, Enum):
    FREE = "free"
    ARTIST_PRO = "artist_pro"
    COLLECTOR_PRO = "collector_pro"


class Feature(str, Enum):
    """Paid features gated by plan."""
    VIEW_PROFILE_VIEWERS_LIST = "VIEW_PROFILE_VIEWERS_LIST"
    VIEW_ARTWORK_VIEWERS_LIST = "VIEW_ARTWORK_VIEWERS_LIST"


class Entitlement(BaseModel):
    plan: Plan = Plan.FREE
    status: str = "active"
    valid_until: str | None = None


class EntitlementResponse(Entitlement):
    """Entitlement plus the features it unlocks."""
    features: list[Feature] = Field(default_factory=list)
