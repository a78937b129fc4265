# =============================================================================
# lib/feed.py - Feed Assembly Rules
# =============================================================================
# Pure functions that turn already-fetched artworks into a feed:
# - Like counts extracted from PostgREST aggregate shapes
# - Latest / popular ordering
# - Popular+latest mixing for the For You lane
# - Grouping into per-artist threads
# - Recommended-people cards interleaved at a fixed stride
#
# Nothing here talks to the database.
#
# Usage:
#   from lib.feed import build_feed
#   items = build_feed(artworks, recs, sort=FeedSort.POPULAR)
# =============================================================================

from __future__ import annotations

from typing import Any, Iterable

from core.models.artwork import ArtistProfile, Artwork
from core.models.feed import (
    FeedItem,
    FeedSort,
    RecommendationItem,
    ThreadGroup,
    ThreadItem,
)
from core.models.people import PeopleRec
from lib.provenance import get_primary_claim
from lib.utils import parse_timestamp, to_int

WORKS_PER_THREAD = 6
RECS_EVERY = 4


# =============================================================================
# Row Normalization
# =============================================================================

def extract_likes_count(row: dict[str, Any] | None) -> int:
    """
    Extract the like count from a raw artwork row.

    The aggregated select `artwork_likes(count)` usually returns
    [{"count": n}], sometimes a bare {"count": n}; counts may be strings.
    Always returns an int.
    """
    if not row:
        return 0
    value = row.get("artwork_likes")
    if isinstance(value, list) and value and isinstance(value[0], dict) and "count" in value[0]:
        return to_int(value[0]["count"])
    if isinstance(value, dict) and "count" in value:
        return to_int(value["count"])
    return 0


def normalize_artwork_row(row: dict[str, Any]) -> Artwork:
    """Build an Artwork from a raw row, attaching likes_count and the primary claim."""
    data = {key: value for key, value in row.items() if key != "artwork_likes"}
    profiles = data.get("profiles")
    # One-to-one embeds occasionally come back as a single-element list
    if isinstance(profiles, list):
        data["profiles"] = profiles[0] if profiles else None
    artwork = Artwork.model_validate({**data, "likes_count": max(extract_likes_count(row), 0)})
    artwork.primary_claim = get_primary_claim(artwork)
    return artwork


# =============================================================================
# Ordering
# =============================================================================

def sort_by_latest(artworks: Iterable[Artwork]) -> list[Artwork]:
    """Newest first; rows without created_at sort last."""
    return sorted(artworks, key=lambda a: parse_timestamp(a.created_at), reverse=True)


def sort_by_popular(artworks: Iterable[Artwork]) -> list[Artwork]:
    """Most liked first, ties broken by recency."""
    return sorted(
        artworks,
        key=lambda a: (a.likes_count, parse_timestamp(a.created_at)),
        reverse=True,
    )


def mix_popular_and_latest(artworks: list[Artwork]) -> list[Artwork]:
    """
    Alternate between the latest and the most popular artworks.

    Walks both orderings index by index, taking latest[i] then popular[i],
    and skips anything already taken.
    """
    by_popular = sort_by_popular(artworks)
    by_latest = sort_by_latest(artworks)

    seen: set[str] = set()
    mixed: list[Artwork] = []
    for i in range(max(len(by_popular), len(by_latest))):
        for candidate in (by_latest[i], by_popular[i]):
            if candidate.id not in seen:
                seen.add(candidate.id)
                mixed.append(candidate)
    return mixed


# =============================================================================
# Threads
# =============================================================================

def group_into_threads(
    artworks: Iterable[Artwork],
    works_per_thread: int = WORKS_PER_THREAD,
) -> list[ThreadGroup]:
    """
    Group artworks by artist, in order of each artist's first appearance.

    The artist card is taken from the first artwork's embedded profile.
    Each thread keeps at most `works_per_thread` artworks.
    """
    by_artist: dict[str, list[Artwork]] = {}
    for artwork in artworks:
        by_artist.setdefault(artwork.artist_id, []).append(artwork)

    threads: list[ThreadGroup] = []
    for artist_id, works in by_artist.items():
        profile = works[0].profiles or ArtistProfile()
        artist = profile.model_copy(update={"id": artist_id})
        threads.append(ThreadGroup(artist=artist, artworks=works[:works_per_thread]))
    return threads


def interleave_recommendations(
    threads: list[ThreadGroup],
    recs: list[PeopleRec],
    every: int = RECS_EVERY,
) -> list[FeedItem]:
    """
    Insert a recommended-people card after every `every`-th thread.

    Cards go in while any remain; none is placed before the first stride
    completes or after the last thread.

    Example:
        10 threads, 5 recs, every=4 -> T T T T R T T T T R T T

    Raises:
        ValueError: If every < 1
    """
    if every < 1:
        raise ValueError(f"every must be >= 1, got {every}")

    items: list[FeedItem] = []
    remaining = iter(recs)
    for index, thread in enumerate(threads, start=1):
        items.append(ThreadItem(thread=thread))
        if index % every == 0 and index < len(threads):
            rec = next(remaining, None)
            if rec is not None:
                items.append(RecommendationItem(profile=rec))
    return items


def build_feed(
    artworks: list[Artwork],
    recs: list[PeopleRec] | None = None,
    sort: FeedSort = FeedSort.LATEST,
    every: int = RECS_EVERY,
    works_per_thread: int = WORKS_PER_THREAD,
) -> list[FeedItem]:
    """
    Sort, group into threads, then interleave recommendations.

    Latest order is the order the backend returned; popular re-sorts by
    likes before grouping.
    """
    ordered = sort_by_popular(artworks) if sort == FeedSort.POPULAR else list(artworks)
    threads = group_into_threads(ordered, works_per_thread=works_per_thread)
    return interleave_recommendations(threads, recs or [], every=every)
