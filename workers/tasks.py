# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Background tasks triggered by user activity.
#
# Tasks:
# - update_taste_from_like: Fold a liked artwork into the liker's taste
# - embed_artwork: Compute and store an artwork's text embedding
#
# Neither task raises: failures are logged and reported in the result so a
# like is never affected by taste bookkeeping.
# =============================================================================

import logging
from typing import Any

from celery import shared_task

logger = logging.getLogger(__name__)


# =============================================================================
# Taste Update Task
# =============================================================================

@shared_task(bind=True, name="workers.tasks.update_taste_from_like")
def update_taste_from_like(self, user_id: str, artwork_id: str) -> dict[str, Any]:
    """
    Update the user's taste profile after a like.

    Args:
        user_id: The user who liked
        artwork_id: The liked artwork

    Returns:
        Dict with success flag and the service summary or error
    """
    logger.info(f"Updating taste for {user_id} from artwork {artwork_id}")

    try:
        from app.config import settings
        from core.services.taste_service import TasteService

        summary = TasteService.update_taste_from_like(user_id, artwork_id)
        if "liked_count" in summary and settings.embeddings_enabled:
            # Artwork had no embedding yet
            embed_artwork.delay(artwork_id)
        return {"success": True, **summary}

    except Exception as e:
        logger.exception(f"Taste update failed: {e}")
        return {
            "success": False,
            "error": str(e),
        }


# =============================================================================
# Artwork Embedding Task
# =============================================================================

@shared_task(bind=True, name="workers.tasks.embed_artwork")
def embed_artwork(self, artwork_id: str) -> dict[str, Any]:
    """
    Compute the text embedding for an artwork.

    Skipped (success with stored=False) when embeddings are disabled or the
    artwork has no text.
    """
    try:
        from core.services.artwork_service import ArtworkService
        from core.services.taste_service import TasteService

        artwork = ArtworkService.fetch_artwork_row(artwork_id)
        if not artwork:
            return {
                "success": False,
                "error": f"Artwork not found: {artwork_id}",
            }

        stored = TasteService.store_artwork_embedding(artwork)
        return {"success": True, "artwork_id": artwork_id, "stored": stored}

    except Exception as e:
        logger.exception(f"Embedding failed for {artwork_id}: {e}")
        return {
            "success": False,
            "error": str(e),
        }
