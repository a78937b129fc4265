# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - artwork.py: Artwork read-shapes (images, artist profile, claims, likes)
# - feed.py: Threads, feed items and lane pages
# - people.py: People recommendations
# - claim.py: Provenance claim enums and request/result shapes
# - profile.py: Completeness inputs/results and profile detail payloads
# - entitlement.py: Plans and gated features
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Artwork Models
# -----------------------------------------------------------------------------
from .artwork import (
    ArtistProfile,
    Artwork,
    ArtworkClaim,
    ArtworkImage,
    ClaimSubject,
)

# -----------------------------------------------------------------------------
# People Models
# -----------------------------------------------------------------------------
from .people import (
    ROLE_OPTIONS,
    PeoplePage,
    PeopleRec,
    PeopleRecMode,
)

# -----------------------------------------------------------------------------
# Feed Models
# -----------------------------------------------------------------------------
from .feed import (
    FeedItem,
    FeedResponse,
    FeedSort,
    FeedTab,
    LaneName,
    LaneResult,
    RecommendationItem,
    ThreadGroup,
    ThreadItem,
)

# -----------------------------------------------------------------------------
# Claim Models - Provenance
# -----------------------------------------------------------------------------
from .claim import (
    ClaimConfirm,
    ClaimRequestCreate,
    ClaimStatus,
    ClaimType,
    ClaimTypeInfo,
    ClaimUpdate,
    ExistingArtistClaimCreate,
    ExternalArtistClaimCreate,
    ExternalArtistCreate,
    ExternalArtistStatus,
    PendingClaim,
    PeriodStatus,
    PersonaCounts,
    PersonaTab,
    ProjectStatus,
    Visibility,
)

# -----------------------------------------------------------------------------
# Profile Models
# -----------------------------------------------------------------------------
from .profile import (
    CompletenessResult,
    EducationEntry,
    MissingSection,
    ProfileBaseInput,
    ProfileDetailsInput,
    ProfileForCompleteness,
)

# -----------------------------------------------------------------------------
# Entitlement Models
# -----------------------------------------------------------------------------
from .entitlement import (
    Entitlement,
    EntitlementResponse,
    Feature,
    Plan,
)

__all__ = [
    # Artwork
    "ArtistProfile",
    "Artwork",
    "ArtworkClaim",
    "ArtworkImage",
    "ClaimSubject",
    # People
    "ROLE_OPTIONS",
    "PeoplePage",
    "PeopleRec",
    "PeopleRecMode",
    # Feed
    "FeedItem",
    "FeedResponse",
    "FeedSort",
    "FeedTab",
    "LaneName",
    "LaneResult",
    "RecommendationItem",
    "ThreadGroup",
    "ThreadItem",
    # Claim
    "ClaimConfirm",
    "ClaimRequestCreate",
    "ClaimStatus",
    "ClaimType",
    "ClaimTypeInfo",
    "ClaimUpdate",
    "ExistingArtistClaimCreate",
    "ExternalArtistClaimCreate",
    "ExternalArtistCreate",
    "ExternalArtistStatus",
    "PendingClaim",
    "PeriodStatus",
    "PersonaCounts",
    "PersonaTab",
    "ProjectStatus",
    "Visibility",
    # Profile
    "CompletenessResult",
    "EducationEntry",
    "MissingSection",
    "ProfileBaseInput",
    "ProfileDetailsInput",
    "ProfileForCompleteness",
    # Entitlement
    "Entitlement",
    "EntitlementResponse",
    "Feature",
    "Plan",
]
