# =============================================================================
# core/services/artwork_service.py - Artwork Queries
# =============================================================================
# Read access to artworks with their embedded images, artist profile,
# provenance claims and like counts. Every list returns normalized Artwork
# models with likes_count filled in.
# =============================================================================

import logging
from uuid import UUID

from core.models.artwork import Artwork
from core.models.feed import FeedSort
from lib.feed import normalize_artwork_row, sort_by_latest, sort_by_popular
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50

ARTWORK_SELECT = """
  id,
  title,
  year,
  medium,
  size,
  story,
  visibility,
  pricing_mode,
  is_price_public,
  price_usd,
  price_input_amount,
  price_input_currency,
  fx_rate_to_usd,
  fx_date,
  ownership_status,
  artist_id,
  artist_sort_order,
  created_at,
  artwork_images(storage_path, sort_order),
  profiles!artist_id(id, username, display_name, avatar_url, bio, main_role, roles),
  artwork_likes(count),
  claims(claim_type, subject_profile_id, profiles!subject_profile_id(username, display_name))
"""


class ArtworkService:
    """
    Service for artwork list queries.

    Only public artworks are listed; drafts stay with their owners.
    """

    @staticmethod
    def list_public_artworks(
        limit: int = DEFAULT_LIMIT,
        sort: FeedSort = FeedSort.LATEST,
    ) -> list[Artwork]:
        """
        List public artworks, newest first from the database.

        Args:
            limit: Maximum rows to fetch
            sort: POPULAR re-sorts the fetched page by likes

        Raises:
            SupabaseClientError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("artworks")
                .select(ARTWORK_SELECT)
                .eq("visibility", "public")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list public artworks: {e}",
                code="LIST_ARTWORKS_FAILED",
                details={"limit": limit},
            )

        artworks = [normalize_artwork_row(row) for row in response.data or []]
        logger.debug(f"Fetched {len(artworks)} public artworks")
        if sort == FeedSort.POPULAR:
            return sort_by_popular(artworks)
        return artworks

    @staticmethod
    def list_following_artworks(
        user_id: str | UUID,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Artwork]:
        """
        List public artworks by artists the user follows.

        Returns an empty list when the user follows nobody.

        Raises:
            SupabaseClientError: If a query fails
        """
        following_ids = SupabaseClient.fetch_following_ids(user_id)
        if not following_ids:
            return []

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("artworks")
                .select(ARTWORK_SELECT)
                .eq("visibility", "public")
                .in_("artist_id", sorted(following_ids))
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list following artworks: {e}",
                code="LIST_FOLLOWING_ARTWORKS_FAILED",
                details={"user_id": normalize_uuid(user_id), "limit": limit},
            )

        return [normalize_artwork_row(row) for row in response.data or []]

    @staticmethod
    def list_profile_artworks(
        profile_id: str | UUID,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Artwork]:
        """
        Public artworks connected to a profile.

        Includes works the profile made (artist_id) and works it holds a
        claim on (collected, inventory, curated, ...), newest first.

        Raises:
            SupabaseClientError: If a query fails
        """
        client = SupabaseClient.get_client()
        profile_id_str = normalize_uuid(profile_id)

        try:
            own = (
                client.table("artworks")
                .select(ARTWORK_SELECT)
                .eq("artist_id", profile_id_str)
                .eq("visibility", "public")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            claim_rows = (
                client.table("claims")
                .select("work_id")
                .eq("subject_profile_id", profile_id_str)
                .execute()
            )
            claimed_ids = sorted({
                row["work_id"] for row in claim_rows.data or [] if row.get("work_id")
            })
            claimed = []
            if claimed_ids:
                claimed = (
                    client.table("artworks")
                    .select(ARTWORK_SELECT)
                    .eq("visibility", "public")
                    .in_("id", claimed_ids)
                    .limit(limit)
                    .execute()
                ).data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list profile artworks: {e}",
                code="LIST_PROFILE_ARTWORKS_FAILED",
                details={"profile_id": profile_id_str},
            )

        by_id: dict[str, Artwork] = {}
        for row in (own.data or []) + claimed:
            artwork = normalize_artwork_row(row)
            by_id.setdefault(artwork.id, artwork)
        return sort_by_latest(by_id.values())[:limit]

    @staticmethod
    def fetch_artwork_row(artwork_id: str | UUID) -> dict | None:
        """Raw artwork row (title / medium / story / artist_id) or None."""
        client = SupabaseClient.get_client()
        artwork_id_str = normalize_uuid(artwork_id)

        try:
            response = (
                client.table("artworks")
                .select("id, title, medium, story, artist_id")
                .eq("id", artwork_id_str)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch artwork: {e}",
                code="FETCH_ARTWORK_FAILED",
                details={"artwork_id": artwork_id_str},
            )
        return response.data if response else None
