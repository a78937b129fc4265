# =============================================================================
# core/models/profile.py - Profile Schemas
# =============================================================================
# These models cover the profile fields the service reasons about:
# - ProfileForCompleteness: base profile merged with profile_details
# - CompletenessResult: 0-100 score plus what is missing
# - EducationEntry / ProfileBaseInput / ProfileDetailsInput: save payloads
#   before normalizing
# =============================================================================

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MissingSection(str, Enum):
    """Sections that would raise a profile's completeness score."""
    CORE = "core"
    ARTIST_MODULE = "artist_module"
    COLLECTOR_MODULE = "collector_module"
    CURATOR_MODULE = "curator_module"


_LIST_FIELDS = (
    "roles", "themes", "mediums", "styles", "keywords", "education",
    "acquisition_channels", "program_focus",
)
_STRING_FIELDS = (
    "username", "display_name", "avatar_url", "bio", "main_role",
    "city", "region", "country", "affiliation",
)
_COMPLETENESS_FIELD_TYPES: dict[str, type | tuple[type, ...]] = {
    **{name: list for name in _LIST_FIELDS},
    **{name: str for name in _STRING_FIELDS},
    "price_band": (str, list),
}


class ProfileForCompleteness(BaseModel):
    """
    Fields read by the completeness score.

    Built from the profiles row merged with its profile_details JSON;
    other columns are ignored. profile_details is written by clients, so a
    field of the wrong JSON type is read as missing rather than rejected.
    """
    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    main_role: str | None = None
    roles: list[Any] | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    themes: list[Any] | None = None
    mediums: list[Any] | None = None
    styles: list[Any] | None = None
    keywords: list[Any] | None = None
    education: list[Any] | None = None
    # Stored as text by older clients and as a list by newer ones
    price_band: str | list[Any] | None = None
    acquisition_channels: list[Any] | None = None
    affiliation: str | None = None
    program_focus: list[Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_malformed_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for name, expected in _COMPLETENESS_FIELD_TYPES.items():
            if cleaned.get(name) is not None and not isinstance(cleaned[name], expected):
                cleaned[name] = None
        return cleaned


class CompletenessResult(BaseModel):
    """
    Profile completeness score.

    Example:
        {"score": 83, "missing_recommendations": ["artist_module"], "confidence": "high"}
    """
    score: int = Field(..., ge=0, le=100)
    missing_recommendations: list[MissingSection] = Field(default_factory=list)
    confidence: Literal["high", "low"] = Field(
        default="high",
        description="low when profile_details were not available"
    )


class EducationEntry(BaseModel):
    """One education row as submitted by a client."""
    model_config = ConfigDict(extra="ignore")

    school: str | None = None
    program: str | None = None
    year: str | int | None = None
    type: str | None = None


class ProfileBaseInput(BaseModel):
    """
    Base profile form payload (identity, roles, visibility).

    roles must end up non-empty after normalization; main_role falls back
    to the first role when it is not one of the four main roles.
    """
    model_config = ConfigDict(extra="ignore")

    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    main_role: str | None = None
    roles: list[Any] = Field(default_factory=list)
    is_public: bool | None = None
    education: list[EducationEntry] | None = None


class ProfileDetailsInput(BaseModel):
    """Profile details form payload, before sanitizing."""
    model_config = ConfigDict(extra="ignore")

    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    career_stage: str | None = None
    age_band: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    themes: list[Any] | None = None
    mediums: list[Any] | None = None
    styles: list[Any] | None = None
    keywords: list[Any] | None = None
    education: list[EducationEntry] | None = None
    price_band: str | list[str] | None = None
    acquisition_channels: list[Any] | None = None
    affiliation: str | None = None
    program_focus: list[Any] | None = None
