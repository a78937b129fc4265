# =============================================================================
# tests/test_tasks.py - Celery Task Tests
# =============================================================================
# Tasks are called directly (synchronously); services are patched.
# =============================================================================

from unittest.mock import patch

from workers.tasks import embed_artwork, update_taste_from_like

USER_ID = "77777777-7777-7777-7777-777777777777"


class TestUpdateTasteTask:
    """Test the taste update task."""

    def test_success(self):
        summary = {"user_id": USER_ID, "embedding_updated": True, "dimensions": 2}
        with patch("core.services.taste_service.TasteService.update_taste_from_like", return_value=summary), \
             patch("workers.tasks.embed_artwork") as mock_embed:
            result = update_taste_from_like(USER_ID, "a1")

        assert result == {"success": True, **summary}
        mock_embed.delay.assert_not_called()

    def test_queues_embedding_when_missing(self):
        summary = {"user_id": USER_ID, "embedding_updated": False, "liked_count": 1}
        with patch("core.services.taste_service.TasteService.update_taste_from_like", return_value=summary), \
             patch("app.config.settings.OPENAI_API_KEY", "sk-test"), \
             patch("workers.tasks.embed_artwork") as mock_embed:
            update_taste_from_like(USER_ID, "a1")

        mock_embed.delay.assert_called_once_with("a1")

    def test_no_embedding_queue_without_key(self):
        summary = {"user_id": USER_ID, "embedding_updated": False, "liked_count": 1}
        with patch("core.services.taste_service.TasteService.update_taste_from_like", return_value=summary), \
             patch("app.config.settings.OPENAI_API_KEY", None), \
             patch("workers.tasks.embed_artwork") as mock_embed:
            update_taste_from_like(USER_ID, "a1")

        mock_embed.delay.assert_not_called()

    def test_failure_reported_not_raised(self):
        with patch("core.services.taste_service.TasteService.update_taste_from_like",
                   side_effect=RuntimeError("db down")):
            result = update_taste_from_like(USER_ID, "a1")

        assert result == {"success": False, "error": "db down"}


class TestEmbedArtworkTask:
    """Test the artwork embedding task."""

    def test_missing_artwork(self):
        with patch("core.services.artwork_service.ArtworkService.fetch_artwork_row", return_value=None):
            result = embed_artwork("a404")

        assert result["success"] is False
        assert "a404" in result["error"]

    def test_stores_embedding(self):
        row = {"id": "a1", "title": "Blue"}
        with patch("core.services.artwork_service.ArtworkService.fetch_artwork_row", return_value=row), \
             patch("core.services.taste_service.TasteService.store_artwork_embedding", return_value=True) as mock_store:
            result = embed_artwork("a1")

        mock_store.assert_called_once_with(row)
        assert result == {"success": True, "artwork_id": "a1", "stored": True}
