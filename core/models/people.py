# =============================================================================
# core/models/people.py - People Recommendation Schemas
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Roles a profile can hold; also the only values accepted as role filters
ROLE_OPTIONS: tuple[str, ...] = ("artist", "curator", "gallerist", "collector")


class PeopleRecMode(str, Enum):
    """Recommendation lanes served by the get_people_recs RPC."""
    FOLLOW_GRAPH = "follow_graph"
    LIKES_BASED = "likes_based"
    EXPAND = "expand"


class PeopleRec(BaseModel):
    """A recommended or searched profile."""
    model_config = ConfigDict(extra="ignore")

    id: str
    username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    main_role: str | None = None
    roles: list[str] | None = None
    is_public: bool | None = None
    reason_tags: list[str] | None = Field(default_factory=list)
    reason_detail: dict[str, Any] | None = Field(default_factory=dict)
    mutual_follow_sources: int | None = None
    liked_artists_count: int | None = None


class PeoplePage(BaseModel):
    """One page of people results."""
    data: list[PeopleRec] = Field(default_factory=list)
    next_cursor: str | None = None
