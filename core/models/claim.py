# =============================================================================
# core/models/claim.py - Provenance Claim Schemas
# =============================================================================
# A claim is a relationship declared between a profile and a work or
# project: "I made this", "I own this", "I curated this", ...
#
# Claim creation, confirmation and rejection are performed by the backend;
# these schemas describe the request bodies and result rows.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClaimType(str, Enum):
    """
    Relationship a claim declares.

    - CREATED: the subject made the work (artist persona)
    - OWNS: the subject collected the work
    - INVENTORY: a gallery holds the work
    - EXHIBITED: the subject showed the work
    - CURATED: the subject curated the work into a project
    - INCLUDES_WORK: a project includes the work
    - HOSTS_PROJECT: the subject hosts a project
    """
    CREATED = "CREATED"
    OWNS = "OWNS"
    INVENTORY = "INVENTORY"
    EXHIBITED = "EXHIBITED"
    CURATED = "CURATED"
    INCLUDES_WORK = "INCLUDES_WORK"
    HOSTS_PROJECT = "HOSTS_PROJECT"


class Visibility(str, Enum):
    PUBLIC = "public"
    CONNECTIONS = "connections"
    PRIVATE = "private"


class PeriodStatus(str, Enum):
    """When the relationship held (INVENTORY / CURATED / EXHIBITED)."""
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


class ClaimStatus(str, Enum):
    """
    Moderation state of a claim request.

    Flow: pending -> confirmed (artist accepts) or deleted (artist rejects)
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"


class ProjectStatus(str, Enum):
    PLANNED = "planned"
    LIVE = "live"
    ENDED = "ended"


class ExternalArtistStatus(str, Enum):
    """Lifecycle of an artist who is not (yet) on the platform."""
    INVITED = "invited"
    CLAIMED = "claimed"
    MERGED = "merged"


class PersonaTab(str, Enum):
    """Profile artwork tabs, filtered by the profile's own claims."""
    ALL = "all"
    CREATED = "CREATED"
    OWNS = "OWNS"
    INVENTORY = "INVENTORY"
    CURATED = "CURATED"


# =============================================================================
# Request Models
# =============================================================================

class ExternalArtistClaimCreate(BaseModel):
    """Create an off-platform artist and a claim about one of their works."""
    display_name: str = Field(..., min_length=1, max_length=200)
    website: str | None = None
    instagram: str | None = None
    invite_email: str | None = None
    claim_type: ClaimType
    work_id: str | None = None
    project_id: str | None = None
    visibility: Visibility = Visibility.PUBLIC
    period_status: PeriodStatus | None = None

    @field_validator("display_name")
    @classmethod
    def display_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("display_name cannot be blank")
        return v.strip()


class ExistingArtistClaimCreate(BaseModel):
    """Create a claim about a work by an artist already on the platform."""
    artist_profile_id: str
    claim_type: ClaimType
    work_id: str | None = None
    project_id: str | None = None
    visibility: Visibility = Visibility.PUBLIC
    period_status: PeriodStatus | None = None


class ExternalArtistCreate(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=200)
    invite_email: str | None = None


class ClaimRequestCreate(BaseModel):
    """Ask the artist to confirm a relationship ("I own this")."""
    work_id: str
    claim_type: ClaimType
    artist_profile_id: str
    period_status: PeriodStatus | None = None


class ClaimUpdate(BaseModel):
    """
    Partial claim update by the claimant; only provided fields are written.

    Status is not editable here: confirmation belongs to the work's artist.
    """
    model_config = ConfigDict(extra="forbid")

    claim_type: ClaimType | None = None
    artist_profile_id: str | None = None
    external_artist_id: str | None = None
    visibility: Visibility | None = None


class ClaimConfirm(BaseModel):
    """
    Artist confirmation payload.

    Dates use "" to clear; omitted fields are left untouched.
    """
    period_status: PeriodStatus | None = None
    start_date: str | None = None
    end_date: str | None = None


# =============================================================================
# Result Models
# =============================================================================

class PendingClaim(BaseModel):
    """A claim awaiting the artist's decision."""
    id: str
    claim_type: str
    subject_profile_id: str
    work_id: str | None = None
    created_at: str | None = None
    period_status: PeriodStatus | None = None
    start_date: str | None = None
    end_date: str | None = None
    profiles: dict[str, Any] | None = None


class ClaimTypeInfo(BaseModel):
    """Display metadata for one claim type."""
    claim_type: ClaimType
    label: str
    by_phrase: str | None = None


class PersonaCounts(BaseModel):
    all: int = 0
    created: int = 0
    owns: int = 0
    inventory: int = 0
    curated: int = 0
