# =============================================================================
# tests/test_taste_service.py - Likes and Taste Profile Tests
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from core.services.like_service import LikeService
from core.services.taste_service import TasteService
from lib.supabase_client import SupabaseClientError
from tests.conftest import make_client, make_query

USER_ID = "66666666-6666-6666-6666-666666666666"


class TestTasteUpdate:
    """Test folding a liked artwork into the taste profile."""

    def test_without_embedding_bumps_counter(self):
        taste = make_query({"taste_embedding": None, "debug": {"liked_count": 2}})
        with patch("core.services.taste_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({
                "artwork_embeddings": None,
                "user_taste_profiles": taste,
            })

            result = TasteService.update_taste_from_like(USER_ID, "a1")

        row = taste.upsert.call_args.args[0]
        assert result == {"user_id": USER_ID, "embedding_updated": False, "liked_count": 3}
        assert row["debug"] == {"liked_count": 3, "last_liked_artwork_id": "a1"}
        assert "taste_embedding" not in row

    def test_blends_into_existing_taste(self):
        taste = make_query({"taste_embedding": [1.0, 0.0]})
        with patch("core.services.taste_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({
                "artwork_embeddings": {"text_embedding": [0.0, 1.0]},
                "user_taste_profiles": taste,
            })

            result = TasteService.update_taste_from_like(USER_ID, "a1")

        vector = taste.upsert.call_args.args[0]["taste_embedding"]
        assert result["embedding_updated"] is True
        assert vector == pytest.approx([0.970143, 0.242536], abs=1e-6)

    def test_first_like_seeds_taste(self):
        taste = make_query(None)
        with patch("core.services.taste_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({
                "artwork_embeddings": {"text_embedding": None, "image_embedding": [3.0, 4.0]},
                "user_taste_profiles": taste,
            })

            TasteService.update_taste_from_like(USER_ID, "a1")

        assert taste.upsert.call_args.args[0]["taste_embedding"] == pytest.approx([0.6, 0.8])

    def test_dimension_mismatch_skipped(self):
        taste = make_query({"taste_embedding": [1.0, 0.0, 0.0]})
        with patch("core.services.taste_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({
                "artwork_embeddings": {"text_embedding": [0.0, 1.0]},
                "user_taste_profiles": taste,
            })

            result = TasteService.update_taste_from_like(USER_ID, "a1")

        assert result["embedding_updated"] is False
        taste.upsert.assert_not_called()

    def test_store_artwork_embedding(self):
        embeddings = make_query()
        provider = MagicMock()
        provider.get_artwork_text_embedding.return_value = [0.1, 0.2]
        with patch("core.services.taste_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"artwork_embeddings": embeddings})

            stored = TasteService.store_artwork_embedding({"id": "a1", "title": "Blue"}, provider=provider)

        assert stored is True
        assert embeddings.upsert.call_args.args[0]["text_embedding"] == [0.1, 0.2]

    def test_store_skipped_without_vector(self):
        provider = MagicMock()
        provider.get_artwork_text_embedding.return_value = None
        with patch("core.services.taste_service.SupabaseClient") as mock:
            assert TasteService.store_artwork_embedding({"id": "a1"}, provider=provider) is False

        mock.get_client.assert_not_called()


class TestLikeService:
    """Test likes and the queued taste update."""

    def test_like_queues_taste_update(self):
        likes = make_query()
        with patch("core.services.like_service.SupabaseClient") as mock, \
             patch("workers.tasks.update_taste_from_like") as mock_task:
            mock.get_client.return_value = make_client({"artwork_likes": likes})
            mock_task.delay.return_value = MagicMock(id="task-1")

            task_id = LikeService.like(USER_ID, "a1")

        assert task_id == "task-1"
        likes.insert.assert_called_once_with({"artwork_id": "a1", "user_id": USER_ID})
        mock_task.delay.assert_called_once_with(USER_ID, "a1")

    def test_like_survives_broker_outage(self):
        with patch("core.services.like_service.SupabaseClient") as mock, \
             patch("workers.tasks.update_taste_from_like") as mock_task:
            mock.get_client.return_value = make_client({"artwork_likes": []})
            mock_task.delay.side_effect = ConnectionError("redis down")

            assert LikeService.like(USER_ID, "a1") is None

    def test_duplicate_like_raises(self):
        likes = make_query()
        likes.execute.side_effect = RuntimeError("duplicate key value")
        with patch("core.services.like_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"artwork_likes": likes})

            with pytest.raises(SupabaseClientError) as exc_info:
                LikeService.like(USER_ID, "a1")

        assert exc_info.value.code == "LIKE_FAILED"

    def test_liked_ids(self):
        likes = make_query([{"artwork_id": "a2"}])
        with patch("core.services.like_service.SupabaseClient") as mock:
            mock.get_client.return_value = make_client({"artwork_likes": likes})

            liked = LikeService.get_liked_artwork_ids(USER_ID, ["a2", "a1", "a2"])

        assert liked == {"a2"}
        likes.in_.assert_called_once_with("artwork_id", ["a1", "a2"])

    def test_liked_ids_anonymous(self):
        with patch("core.services.like_service.SupabaseClient") as mock:
            assert LikeService.get_liked_artwork_ids(None, ["a1"]) == set()

        mock.get_client.assert_not_called()
