# =============================================================================
# tests/test_api.py - HTTP Endpoint Tests
# =============================================================================
# Routes are exercised through FastAPI's TestClient with services patched.
# Authenticated requests carry an HS256 token signed with the test secret.
# =============================================================================

import time
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.exceptions import ClaimPermissionError, MissingRolesError, ProfileNotFoundError, WorkPermissionError
from app.main import app
from core.models.entitlement import Entitlement, Plan
from core.models.feed import FeedResponse, FeedSort, FeedTab, LaneResult
from core.models.people import PeoplePage
from core.models.profile import CompletenessResult
from lib.supabase_client import SupabaseClientError

USER_ID = "88888888-8888-8888-8888-888888888888"


def make_token(sub: str = USER_ID, expires_in: int = 3600, secret: str = "test-jwt-secret") -> str:
    claims = {
        "sub": sub,
        "email": "mira@example.com",
        "role": "authenticated",
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


class TestAuth:
    """Test token handling on protected and optional routes."""

    def test_missing_token_rejected(self, client):
        response = client.get("/api/v1/me/entitlements")

        assert response.status_code in (401, 403)

    def test_expired_token(self, client):
        headers = {"Authorization": f"Bearer {make_token(expires_in=-60)}"}

        response = client.get("/api/v1/me/entitlements", headers=headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_wrong_secret(self, client):
        headers = {"Authorization": f"Bearer {make_token(secret='other')}"}

        assert client.get("/api/v1/me/entitlements", headers=headers).status_code == 401

    def test_non_uuid_subject(self, client):
        headers = {"Authorization": f"Bearer {make_token(sub='not-a-uuid')}"}

        response = client.get("/api/v1/me/entitlements", headers=headers)

        assert response.json()["detail"] == "Invalid token: malformed user ID"

    def test_bad_token_is_anonymous_on_feed(self, client):
        empty = FeedResponse(tab=FeedTab.ALL, sort=FeedSort.LATEST)
        with patch("app.routers.feed.FeedService.get_feed", return_value=empty) as mock_feed:
            response = client.get("/api/v1/feed", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200
        assert mock_feed.call_args.args[0] is None


class TestFeedRoutes:

    def test_feed_passes_viewer_and_token(self, client, auth_headers):
        empty = FeedResponse(tab=FeedTab.FOLLOWING, sort=FeedSort.POPULAR)
        with patch("app.routers.feed.FeedService.get_feed", return_value=empty) as mock_feed:
            response = client.get("/api/v1/feed?tab=following&sort=popular", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["tab"] == "following"
        assert mock_feed.call_args.args[0] == USER_ID
        assert mock_feed.call_args.kwargs["access_token"] == auth_headers["Authorization"][7:]

    def test_unknown_sort_rejected(self, client):
        assert client.get("/api/v1/feed?sort=random").status_code == 422

    def test_lane(self, client):
        with patch.dict("app.routers.feed._LANES", {"signals": lambda user_id, limit: LaneResult(next_cursor="more")}):
            response = client.get("/api/v1/feed/lanes/signals?limit=5")

        assert response.json() == {"data": [], "next_cursor": "more"}

    def test_unknown_lane(self, client):
        assert client.get("/api/v1/feed/lanes/trending").status_code == 422


class TestMeRoutes:

    def test_entitlements_include_features(self, client, auth_headers):
        with patch("app.routers.me.EntitlementService.get_entitlement",
                   return_value=Entitlement(plan=Plan.ARTIST_PRO)):
            response = client.get("/api/v1/me/entitlements", headers=auth_headers)

        body = response.json()
        assert body["plan"] == "artist_pro"
        assert body["features"] == ["VIEW_PROFILE_VIEWERS_LIST", "VIEW_ARTWORK_VIEWERS_LIST"]

    def test_completeness(self, client, auth_headers):
        result = CompletenessResult(score=42, missing_recommendations=["core"])
        with patch("app.routers.me.ProfileService.get_profile_completeness", return_value=result):
            response = client.get("/api/v1/me/completeness", headers=auth_headers)

        assert response.json() == {"score": 42, "missing_recommendations": ["core"], "confidence": "high"}

    def test_profile_not_found_shape(self, client, auth_headers):
        with patch("app.routers.me.ProfileService.get_profile_completeness",
                   side_effect=ProfileNotFoundError(USER_ID)):
            response = client.get("/api/v1/me/completeness", headers=auth_headers)

        body = response.json()
        assert response.status_code == 404
        assert body["code"] == "PROFILE_NOT_FOUND"
        assert body["details"] == {"profile_id": USER_ID}
        assert "suggestion" in body

    def test_save_profile(self, client, auth_headers):
        saved = {"updated_fields": ["roles"], "completeness": CompletenessResult(score=60)}
        with patch("app.routers.me.ProfileService.save_profile_base", return_value=saved) as mock_save:
            response = client.patch("/api/v1/me/profile", json={"roles": ["artist"]}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["updated_fields"] == ["roles"]
        assert mock_save.call_args.args[1].roles == ["artist"]

    def test_save_profile_without_roles(self, client, auth_headers):
        with patch("app.routers.me.ProfileService.save_profile_base", side_effect=MissingRolesError()):
            response = client.patch("/api/v1/me/profile", json={"roles": []}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "ROLES_REQUIRED"

    def test_backend_error_is_502(self, client, auth_headers):
        error = SupabaseClientError("relation does not exist", code="COUNT_PENDING_CLAIMS_FAILED")
        with patch("app.routers.me.ProvenanceService.count_my_pending_claims", side_effect=error):
            response = client.get("/api/v1/me/pending-claims/count", headers=auth_headers)

        assert response.status_code == 502
        assert response.json()["code"] == "COUNT_PENDING_CLAIMS_FAILED"


class TestClaimRoutes:

    def test_claim_types_public(self, client):
        response = client.get("/api/v1/claims/types")

        assert response.status_code == 200
        assert {row["claim_type"] for row in response.json()} >= {"CREATED", "OWNS", "CURATED"}

    def test_confirm_forbidden(self, client, auth_headers):
        with patch("app.routers.claims.ProvenanceService.confirm_claim",
                   side_effect=ClaimPermissionError("c1")):
            response = client.post("/api/v1/claims/c1/confirm", json={}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "CLAIM_FORBIDDEN"

    def test_claim_request_created(self, client, auth_headers):
        body = {"work_id": "w1", "claim_type": "OWNS", "artist_profile_id": "p1"}
        with patch("app.routers.claims.ProvenanceService.create_claim_request", return_value="c9") as mock_create:
            response = client.post("/api/v1/claims/requests", json=body, headers=auth_headers)

        assert response.status_code == 201
        assert response.json() == {"claim_id": "c9", "status": "pending"}
        assert mock_create.call_args.args[0] == USER_ID

    def test_external_claim_validation(self, client, auth_headers):
        body = {"display_name": "", "claim_type": "OWNS", "work_id": "w1"}

        assert client.post("/api/v1/claims/external", json=body, headers=auth_headers).status_code == 422

    def test_claimant_cannot_confirm_via_update(self, client, auth_headers):
        with patch("app.routers.claims.ProvenanceService.update_claim") as mock_update:
            response = client.patch("/api/v1/claims/c1", json={"status": "confirmed"}, headers=auth_headers)

        assert response.status_code == 422
        mock_update.assert_not_called()

    def test_pending_claims_limited_to_artist(self, client, auth_headers):
        with patch("app.routers.claims.ProvenanceService.list_pending_claims_for_work",
                   side_effect=WorkPermissionError("w1")) as mock_list:
            response = client.get("/api/v1/works/w1/pending-claims", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "WORK_FORBIDDEN"
        assert mock_list.call_args.args == ("w1", USER_ID)


class TestLikeAndPeopleRoutes:

    def test_like_returns_task(self, client, auth_headers):
        with patch("app.routers.likes.LikeService.like", return_value="task-1"):
            response = client.post("/api/v1/artworks/a1/like", headers=auth_headers)

        assert response.status_code == 201
        assert response.json() == {"artwork_id": "a1", "liked": True, "task_id": "task-1"}

    def test_people_recs_anonymous(self, client):
        with patch("app.routers.people.PeopleService.get_people_recs", return_value=PeoplePage()) as mock_recs:
            response = client.get("/api/v1/people/recs?mode=expand&roles=artist&roles=curator")

        assert response.status_code == 200
        assert mock_recs.call_args.kwargs["roles"] == ["artist", "curator"]
        assert mock_recs.call_args.kwargs["access_token"] is None


class TestHealth:

    def test_live(self, client):
        response = client.get("/api/v1/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/v1/health"
