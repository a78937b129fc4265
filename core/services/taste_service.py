# =============================================================================
# core/services/taste_service.py - Taste Profile Updates
# =============================================================================
# Keeps a per-user taste embedding in user_taste_profiles, nudged toward
# each liked artwork:
#
#   taste' = normalize(0.8 * taste + 0.2 * artwork)
#
# Artworks without an embedding only bump debug counters, so the profile
# still records activity before embeddings exist.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from lib.embeddings import EmbeddingProvider
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid
from lib.vector_math import normalize, weighted_average

logger = logging.getLogger(__name__)

WEIGHT_OLD = 0.8
WEIGHT_NEW = 1 - WEIGHT_OLD


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _as_vector(value: Any) -> list[float] | None:
    return list(value) if isinstance(value, list) and value else None


class TasteService:
    """Service for reading and updating user taste profiles."""

    @staticmethod
    def fetch_taste_profile(user_id: str | UUID) -> dict[str, Any] | None:
        """Raw user_taste_profiles row, or None."""
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("user_taste_profiles")
                .select("taste_embedding, debug")
                .eq("user_id", user_id_str)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch taste profile: {e}",
                code="FETCH_TASTE_FAILED",
                details={"user_id": user_id_str},
            )
        return response.data if response else None

    @staticmethod
    def fetch_taste_embedding(user_id: str | UUID) -> list[float] | None:
        row = TasteService.fetch_taste_profile(user_id)
        return _as_vector(row.get("taste_embedding")) if row else None

    @staticmethod
    def has_taste_embedding(user_id: str | UUID) -> bool:
        return TasteService.fetch_taste_embedding(user_id) is not None

    @staticmethod
    def fetch_artwork_embedding(artwork_id: str | UUID) -> list[float] | None:
        """Stored artwork embedding, text preferred over image."""
        client = SupabaseClient.get_client()
        artwork_id_str = normalize_uuid(artwork_id)

        try:
            response = (
                client.table("artwork_embeddings")
                .select("text_embedding, image_embedding")
                .eq("artwork_id", artwork_id_str)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch artwork embedding: {e}",
                code="FETCH_ARTWORK_EMBEDDING_FAILED",
                details={"artwork_id": artwork_id_str},
            )

        row = response.data if response else None
        if not row:
            return None
        return _as_vector(row.get("text_embedding")) or _as_vector(row.get("image_embedding"))

    @staticmethod
    def store_artwork_embedding(
        artwork: dict[str, Any],
        provider: EmbeddingProvider | None = None,
    ) -> bool:
        """
        Compute and store the text embedding for an artwork.

        Returns:
            True if an embedding was stored, False if none was produced
        """
        provider = provider or EmbeddingProvider()
        vector = provider.get_artwork_text_embedding(artwork)
        if vector is None:
            return False

        client = SupabaseClient.get_client()
        client.table("artwork_embeddings").upsert(
            {
                "artwork_id": artwork["id"],
                "text_embedding": vector,
                "updated_at": _now_iso(),
            },
            on_conflict="artwork_id",
        ).execute()
        logger.info(f"Stored text embedding for artwork {artwork['id']}")
        return True

    @staticmethod
    def update_taste_from_like(user_id: str | UUID, artwork_id: str | UUID) -> dict[str, Any]:
        """
        Fold a liked artwork into the user's taste profile.

        Returns:
            The upserted row (without the full vector) for task results

        Raises:
            SupabaseClientError: If a query fails
        """
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)
        artwork_id_str = normalize_uuid(artwork_id)
        now = _now_iso()

        embedding = TasteService.fetch_artwork_embedding(artwork_id_str)

        if embedding is None:
            existing = TasteService.fetch_taste_profile(user_id_str) or {}
            debug = existing.get("debug") or {}
            try:
                liked_count = int(debug.get("liked_count") or 0) + 1
            except (TypeError, ValueError):
                liked_count = 1
            row = {
                "user_id": user_id_str,
                "taste_updated_at": now,
                "last_event_at": now,
                "debug": {**debug, "liked_count": liked_count, "last_liked_artwork_id": artwork_id_str},
            }
            client.table("user_taste_profiles").upsert(row, on_conflict="user_id").execute()
            logger.debug(f"No embedding for {artwork_id_str}; liked_count={liked_count} for {user_id_str}")
            return {"user_id": user_id_str, "embedding_updated": False, "liked_count": liked_count}

        current = TasteService.fetch_taste_embedding(user_id_str)
        blended = weighted_average(current, embedding, WEIGHT_OLD) if current else embedding
        if blended is None:
            logger.warning(f"Taste dims {len(current)} != artwork dims {len(embedding)} for {user_id_str}; skipped")
            return {"user_id": user_id_str, "embedding_updated": False}

        client.table("user_taste_profiles").upsert(
            {
                "user_id": user_id_str,
                "taste_embedding": normalize(blended),
                "taste_updated_at": now,
                "last_event_at": now,
            },
            on_conflict="user_id",
        ).execute()
        logger.info(f"Updated taste embedding for {user_id_str} from artwork {artwork_id_str}")
        return {"user_id": user_id_str, "embedding_updated": True, "dimensions": len(blended)}
