# =============================================================================
# core/models/artwork.py - Artwork Read Shapes
# =============================================================================
# These models mirror the artwork list query: one artwork row with its
# embedded images, artist profile, provenance claims and like count.
#
# The database owns every invariant; these are read-shapes only, so unknown
# columns are ignored rather than rejected.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class ArtworkImage(BaseModel):
    """One stored image of an artwork."""
    storage_path: str
    sort_order: int | None = None


class ArtistProfile(BaseModel):
    """Public profile fields embedded in artwork and feed rows."""
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    main_role: str | None = None
    roles: list[str] | None = None


class ClaimSubject(BaseModel):
    """The profile that asserted a claim."""
    username: str | None = None
    display_name: str | None = None


class ArtworkClaim(BaseModel):
    """A provenance claim as embedded in an artwork row."""
    model_config = ConfigDict(extra="ignore")

    claim_type: str
    subject_profile_id: str
    profiles: ClaimSubject | None = None


class Artwork(BaseModel):
    """
    Artwork with embedded relations and an always-present like count.

    Example:
        {
            "id": "a1",
            "title": "Untitled (Blue)",
            "artist_id": "p1",
            "created_at": "2025-03-01T10:00:00Z",
            "likes_count": 12,
            "profiles": {"username": "mira", "display_name": "Mira"},
            "claims": [{"claim_type": "CREATED", "subject_profile_id": "p1"}]
        }
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str | None = None
    year: int | None = None
    medium: str | None = None
    size: str | None = None
    story: str | None = None
    visibility: str | None = None
    pricing_mode: str | None = None
    is_price_public: bool | None = None
    price_usd: float | None = None
    price_input_amount: float | None = None
    price_input_currency: str | None = None
    fx_rate_to_usd: float | None = None
    fx_date: str | None = None
    ownership_status: str | None = None
    artist_id: str
    artist_sort_order: int | None = None
    created_at: str | None = None
    artwork_images: list[ArtworkImage] | None = None
    profiles: ArtistProfile | None = None
    claims: list[ArtworkClaim] | None = None

    likes_count: int = Field(
        default=0,
        ge=0,
        description="Number of likes, extracted from the aggregate select"
    )
    primary_claim: ArtworkClaim | None = Field(
        default=None,
        description="Claim shown on the card: CREATED when present, else the first"
    )
