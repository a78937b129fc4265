# =============================================================================
# core/services/feed_service.py - Feed Lanes and Threaded Feed
# =============================================================================
# Three lanes share the artwork queries:
#
#   For You  - mix of popular and latest public works (wider pool once the
#              viewer has a taste embedding)
#   Expand   - works by artists outside the viewer's For You top artists
#   Signals  - works by artists the viewer follows
#
# get_feed() is the main threaded feed: artworks grouped per artist with
# recommended-people cards interleaved.
# =============================================================================

import logging
from uuid import UUID

from app.config import settings
from core.models.artwork import Artwork
from core.models.feed import FeedResponse, FeedSort, FeedTab, LaneResult
from core.models.people import PeopleRec, PeopleRecMode
from core.services.artwork_service import ArtworkService
from core.services.like_service import LikeService
from core.services.people_service import PeopleService
from core.services.taste_service import TasteService
from lib.feed import build_feed, mix_popular_and_latest
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

CANDIDATE_POOL = 200
DEFAULT_LIMIT = 20
EXPAND_SEED_SIZE = 30
EXPAND_TOP_ARTISTS = 10
SIGNALS_MIN_FETCH = 50
MORE_CURSOR = "more"


def _page(artworks: list[Artwork], limit: int) -> LaneResult:
    return LaneResult(
        data=artworks[:limit],
        next_cursor=MORE_CURSOR if len(artworks) > limit else None,
    )


class FeedService:
    """Service assembling feed lanes and the threaded feed."""

    @staticmethod
    def get_for_you(user_id: str | UUID | None, limit: int = DEFAULT_LIMIT) -> LaneResult:
        """
        For You lane.

        Viewers with a taste embedding draw from min(200, limit * 3) latest
        works; everyone else from min(200, limit * 2). The pool is mixed
        popular/latest and cut to `limit`.

        Raises:
            SupabaseClientError: If the artwork query fails
        """
        has_taste = False
        if user_id:
            try:
                has_taste = TasteService.has_taste_embedding(user_id)
            except SupabaseClientError as e:
                logger.warning(f"Taste lookup failed for {user_id}: {e.message}")

        pool = min(CANDIDATE_POOL, limit * (3 if has_taste else 2))
        candidates = ArtworkService.list_public_artworks(limit=pool)
        mixed = mix_popular_and_latest(candidates)
        return _page(mixed, limit)

    @staticmethod
    def get_expand(user_id: str | UUID | None, limit: int = DEFAULT_LIMIT) -> LaneResult:
        """
        Expand lane: artists the viewer's For You lane does not lead with.

        Works by artists outside those of the first 10 works of a 30-item
        For You page come first, followed by the rest, deduped.
        """
        seed = FeedService.get_for_you(user_id, limit=EXPAND_SEED_SIZE)
        top_artists = {a.artist_id for a in seed.data[:EXPAND_TOP_ARTISTS]}

        candidates = ArtworkService.list_public_artworks(limit=CANDIDATE_POOL)
        outside = [a for a in candidates if a.artist_id not in top_artists]
        inside = [a for a in candidates if a.artist_id in top_artists]

        seen: set[str] = set()
        ordered: list[Artwork] = []
        for artwork in outside + inside:
            if artwork.id not in seen:
                seen.add(artwork.id)
                ordered.append(artwork)
        return _page(ordered, limit)

    @staticmethod
    def get_signals(user_id: str | UUID | None, limit: int = DEFAULT_LIMIT) -> LaneResult:
        """Signals lane: works by followed artists. Empty for anonymous viewers."""
        if not user_id:
            return LaneResult()
        artworks = ArtworkService.list_following_artworks(user_id, limit=max(limit, SIGNALS_MIN_FETCH))
        return _page(artworks, limit)

    @staticmethod
    def _fetch_recs(user_id: str | UUID | None, access_token: str | None) -> list[PeopleRec]:
        """Follow-graph recommendations for signed-in viewers; never raises."""
        if not user_id or settings.FEED_MAX_RECS < 1:
            return []
        try:
            page = PeopleService.get_people_recs(
                PeopleRecMode.FOLLOW_GRAPH,
                limit=settings.FEED_MAX_RECS,
                access_token=access_token,
            )
        except SupabaseClientError as e:
            logger.warning(f"People recs unavailable for feed: {e.message}")
            return []
        return page.data[:settings.FEED_MAX_RECS]

    @staticmethod
    def get_feed(
        user_id: str | UUID | None,
        tab: FeedTab = FeedTab.ALL,
        sort: FeedSort = FeedSort.LATEST,
        limit: int = 50,
        access_token: str | None = None,
    ) -> FeedResponse:
        """
        Threaded feed page.

        Args:
            user_id: Viewer, or None for anonymous
            tab: ALL (public works) or FOLLOWING (followed artists only)
            sort: LATEST or POPULAR
            limit: Artworks fetched before grouping
            access_token: Viewer token for the recommendations RPC

        Returns:
            FeedResponse with thread / recommendation items and the ids of
            artworks on the page the viewer has liked

        Raises:
            SupabaseClientError: If the artwork query fails
        """
        if tab == FeedTab.FOLLOWING:
            artworks = ArtworkService.list_following_artworks(user_id, limit=limit) if user_id else []
        else:
            artworks = ArtworkService.list_public_artworks(limit=limit)

        items = build_feed(
            artworks,
            recs=FeedService._fetch_recs(user_id, access_token),
            sort=sort,
            every=settings.FEED_RECS_EVERY,
            works_per_thread=settings.FEED_WORKS_PER_THREAD,
        )

        liked = LikeService.get_liked_artwork_ids(user_id, (a.id for a in artworks))
        logger.debug(f"Feed tab={tab.value} sort={sort.value}: {len(artworks)} works, {len(items)} items")
        return FeedResponse(tab=tab, sort=sort, items=items, liked_artwork_ids=sorted(liked))
