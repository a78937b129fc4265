# =============================================================================
# core/services/like_service.py - Artwork Likes
# =============================================================================
# Likes are plain rows in artwork_likes. A successful like also queues a
# background taste-profile update; that update never fails the like.
# =============================================================================

import logging
from typing import Iterable
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


def _enqueue_taste_update(user_id: str, artwork_id: str) -> str | None:
    """Queue the Celery taste update; returns the task id or None."""
    from workers.tasks import update_taste_from_like

    try:
        result = update_taste_from_like.delay(user_id, artwork_id)
    except Exception as e:
        logger.warning(f"Could not queue taste update for {user_id}/{artwork_id}: {e}")
        return None
    return result.id


class LikeService:
    """Service for like / unlike and liked-state lookups."""

    @staticmethod
    def like(user_id: str | UUID, artwork_id: str | UUID) -> str | None:
        """
        Like an artwork.

        Returns:
            Celery task id of the queued taste update, or None

        Raises:
            SupabaseClientError: If the insert fails (e.g. already liked)
        """
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)
        artwork_id_str = normalize_uuid(artwork_id)

        try:
            client.table("artwork_likes").insert({
                "artwork_id": artwork_id_str,
                "user_id": user_id_str,
            }).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to like artwork: {e}",
                code="LIKE_FAILED",
                suggestion="The artwork may already be liked",
                details={"artwork_id": artwork_id_str},
            )

        logger.info(f"User {user_id_str} liked artwork {artwork_id_str}")
        return _enqueue_taste_update(user_id_str, artwork_id_str)

    @staticmethod
    def unlike(user_id: str | UUID, artwork_id: str | UUID) -> None:
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)
        artwork_id_str = normalize_uuid(artwork_id)

        try:
            (
                client.table("artwork_likes")
                .delete()
                .eq("artwork_id", artwork_id_str)
                .eq("user_id", user_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to unlike artwork: {e}",
                code="UNLIKE_FAILED",
                details={"artwork_id": artwork_id_str},
            )

    @staticmethod
    def get_liked_artwork_ids(
        user_id: str | UUID | None,
        artwork_ids: Iterable[str],
    ) -> set[str]:
        """Subset of `artwork_ids` the user has liked; empty for anonymous users."""
        ids = sorted(set(artwork_ids))
        if not user_id or not ids:
            return set()

        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("artwork_likes")
                .select("artwork_id")
                .eq("user_id", user_id_str)
                .in_("artwork_id", ids)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch liked artworks: {e}",
                code="FETCH_LIKES_FAILED",
                details={"user_id": user_id_str, "count": len(ids)},
            )

        return {row["artwork_id"] for row in response.data or []}
