# =============================================================================
# app/routers/feed.py - Feed Endpoints
# =============================================================================
# Threaded home feed and the three discovery lanes. Anonymous viewers get
# the public feed without recommendations.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.dependencies import OptionalUser, viewer_id
from core.models.feed import FeedResponse, FeedSort, FeedTab, LaneName, LaneResult
from core.services.feed_service import DEFAULT_LIMIT, FeedService

router = APIRouter()

_LANES = {
    LaneName.FOR_YOU: FeedService.get_for_you,
    LaneName.EXPAND: FeedService.get_expand,
    LaneName.SIGNALS: FeedService.get_signals,
}


@router.get("/feed", response_model=FeedResponse)
async def get_feed(
    user: OptionalUser,
    tab: Annotated[FeedTab, Query(description="all or following")] = FeedTab.ALL,
    sort: Annotated[FeedSort, Query(description="latest or popular")] = FeedSort.LATEST,
    limit: Annotated[int, Query(ge=1, le=200, description="Artworks fetched before grouping")] = 50,
):
    """
    Threaded feed.

    Artworks are grouped per artist; signed-in viewers also get
    recommended-people cards between threads.
    """
    return FeedService.get_feed(
        viewer_id(user),
        tab=tab,
        sort=sort,
        limit=limit,
        access_token=user.access_token if user else None,
    )


@router.get("/feed/lanes/{lane}", response_model=LaneResult)
async def get_lane(
    lane: Annotated[LaneName, Path(description="for-you, expand or signals")],
    user: OptionalUser,
    limit: Annotated[int, Query(ge=1, le=100)] = DEFAULT_LIMIT,
):
    """One page of a feed lane."""
    return _LANES[lane](viewer_id(user), limit=limit)
