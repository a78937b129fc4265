# =============================================================================
# core/models/feed.py - Feed Schemas
# =============================================================================
# Shapes returned by the feed endpoints:
# - ThreadGroup: one artist with a handful of their artworks
# - FeedItem: a thread or a recommended-people card, in display order
# - LaneResult: one page of a feed lane (For You / Expand / Signals)
# =============================================================================

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .artwork import ArtistProfile, Artwork
from .people import PeopleRec


class FeedTab(str, Enum):
    """Which artworks feed the page."""
    ALL = "all"
    FOLLOWING = "following"


class FeedSort(str, Enum):
    """Ordering applied before grouping into threads."""
    LATEST = "latest"
    POPULAR = "popular"


class LaneName(str, Enum):
    """Feed lanes."""
    FOR_YOU = "for-you"
    EXPAND = "expand"
    SIGNALS = "signals"


class ThreadGroup(BaseModel):
    """One artist's artworks shown together in the feed."""
    artist: ArtistProfile
    artworks: list[Artwork] = Field(default_factory=list)


class ThreadItem(BaseModel):
    """Feed slot holding an artist thread."""
    kind: Literal["thread"] = "thread"
    thread: ThreadGroup


class RecommendationItem(BaseModel):
    """Feed slot holding a recommended-people card."""
    kind: Literal["recommendation"] = "recommendation"
    profile: PeopleRec


FeedItem = Annotated[Union[ThreadItem, RecommendationItem], Field(discriminator="kind")]


class FeedResponse(BaseModel):
    """Threaded feed page."""
    tab: FeedTab
    sort: FeedSort
    items: list[FeedItem] = Field(default_factory=list)
    liked_artwork_ids: list[str] = Field(
        default_factory=list,
        description="Artworks on this page the viewer has liked"
    )


class LaneResult(BaseModel):
    """One page of a feed lane."""
    data: list[Artwork] = Field(default_factory=list)
    next_cursor: str | None = Field(
        default=None,
        description='"more" when further results exist, else null'
    )
