# =============================================================================
# tests/test_provenance_service.py - Claim Lifecycle Tests
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import (
    ClaimNotFoundError,
    ClaimPermissionError,
    ClaimTargetMissingError,
    WorkNotFoundError,
    WorkPermissionError,
)
from core.models.claim import (
    ClaimConfirm,
    ClaimRequestCreate,
    ClaimUpdate,
    ExistingArtistClaimCreate,
    ExternalArtistClaimCreate,
)
from core.services.provenance_service import ProvenanceService
from lib.supabase_client import SupabaseClientError
from tests.conftest import make_client, make_query

ARTIST_ID = "44444444-4444-4444-4444-444444444444"
COLLECTOR_ID = "55555555-5555-5555-5555-555555555555"
CLIENT = "core.services.provenance_service.SupabaseClient"


def _claim_row(**overrides):
    row = {
        "id": "c1",
        "work_id": "w1",
        "artist_profile_id": ARTIST_ID,
        "subject_profile_id": COLLECTOR_ID,
        "status": "pending",
        "artworks": {"artist_id": ARTIST_ID},
    }
    row.update(overrides)
    return row


class TestCreateClaims:
    """Test the claim creation RPC wrappers."""

    def test_external_claim_params(self):
        data = ExternalArtistClaimCreate(display_name="Ana", claim_type="OWNS", work_id="w1")
        with patch(f"{CLIENT}.rpc", return_value={"claim": {"id": "c1"}}) as mock_rpc:
            result = ProvenanceService.create_external_artist_and_claim(data, access_token="tok")

        name, params = mock_rpc.call_args.args
        assert name == "create_external_artist_and_claim"
        assert params["p_claim_type"] == "OWNS"
        assert params["p_visibility"] == "public"
        assert "p_period_status" not in params
        assert mock_rpc.call_args.kwargs == {"access_token": "tok"}
        assert result["claim"]["id"] == "c1"

    def test_period_status_sent_when_set(self):
        data = ExistingArtistClaimCreate(
            artist_profile_id=ARTIST_ID, claim_type="INVENTORY", work_id="w1", period_status="current",
        )
        with patch(f"{CLIENT}.rpc", return_value={}) as mock_rpc:
            ProvenanceService.create_claim_for_existing_artist(data)

        assert mock_rpc.call_args.args[1]["p_period_status"] == "current"

    def test_target_required(self):
        data = ExternalArtistClaimCreate(display_name="Ana", claim_type="OWNS")
        with patch(f"{CLIENT}.rpc") as mock_rpc:
            with pytest.raises(ClaimTargetMissingError):
                ProvenanceService.create_external_artist_and_claim(data)
        mock_rpc.assert_not_called()

    def test_claim_request_is_pending(self):
        claims = make_query([{"id": "c9"}])
        data = ClaimRequestCreate(work_id="w1", claim_type="OWNS", artist_profile_id=ARTIST_ID)
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            claim_id = ProvenanceService.create_claim_request(COLLECTOR_ID, data)

        row = claims.insert.call_args.args[0]
        assert claim_id == "c9"
        assert row["status"] == "pending"
        assert row["visibility"] == "public"
        assert row["subject_profile_id"] == COLLECTOR_ID
        assert "period_status" not in row

    def test_claim_request_failure_wrapped(self):
        claims = make_query()
        claims.execute.side_effect = RuntimeError("duplicate key")
        data = ClaimRequestCreate(work_id="w1", claim_type="OWNS", artist_profile_id=ARTIST_ID)
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            with pytest.raises(SupabaseClientError) as exc_info:
                ProvenanceService.create_claim_request(COLLECTOR_ID, data)

        assert exc_info.value.code == "CREATE_CLAIM_REQUEST_FAILED"


class TestModeration:
    """Test confirm / reject permission checks and payloads."""

    def test_confirm_writes_status_and_dates(self):
        claims = make_query(_claim_row())
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            ProvenanceService.confirm_claim(
                "c1", ARTIST_ID, ClaimConfirm(period_status="past", start_date="2020-01-01", end_date=""),
            )

        assert claims.update.call_args.args[0] == {
            "status": "confirmed",
            "period_status": "past",
            "start_date": "2020-01-01",
            "end_date": None,
        }

    def test_confirm_without_payload(self):
        claims = make_query(_claim_row())
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            ProvenanceService.confirm_claim("c1", ARTIST_ID)

        assert claims.update.call_args.args[0] == {"status": "confirmed"}

    def test_confirm_by_non_artist_forbidden(self):
        claims = make_query(_claim_row())
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            with pytest.raises(ClaimPermissionError):
                ProvenanceService.confirm_claim("c1", COLLECTOR_ID)

        claims.update.assert_not_called()

    def test_artist_from_claim_when_work_not_embedded(self):
        claims = make_query(_claim_row(artworks=[]))
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            ProvenanceService.reject_claim("c1", ARTIST_ID)

        claims.delete.assert_called_once()

    def test_missing_claim(self):
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": None})

            with pytest.raises(ClaimNotFoundError):
                ProvenanceService.reject_claim("nope", ARTIST_ID)


class TestUpdateClaim:
    """Test partial claim updates by the claimant."""

    def test_only_set_fields_written(self):
        claims = make_query(_claim_row())
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": claims})

            ProvenanceService.update_claim("c1", COLLECTOR_ID, ClaimUpdate(visibility="private"))

        assert claims.update.call_args.args[0] == {"visibility": "private"}

    def test_empty_update_is_noop(self):
        with patch(CLIENT) as mock:
            ProvenanceService.update_claim("c1", COLLECTOR_ID, ClaimUpdate())

        mock.get_client.assert_not_called()

    def test_other_user_forbidden(self):
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"claims": _claim_row()})

            with pytest.raises(ClaimPermissionError):
                ProvenanceService.update_claim("c1", ARTIST_ID, ClaimUpdate(visibility="private"))


class TestQueries:
    """Test pending lists, dedup search and the pending badge count."""

    def test_pending_claims_unwrap_profile(self):
        rows = [{
            "id": "c1",
            "claim_type": "OWNS",
            "subject_profile_id": COLLECTOR_ID,
            "work_id": "w1",
            "profiles": [{"username": "jun", "display_name": "Jun"}],
        }]
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({
                "artworks": {"id": "w1", "artist_id": ARTIST_ID},
                "claims": rows,
            })

            pending = ProvenanceService.list_pending_claims_for_work("w1", ARTIST_ID)

        assert pending[0].profiles == {"username": "jun", "display_name": "Jun"}

    def test_pending_claims_hidden_from_other_users(self):
        claims = make_query([{"id": "c1", "claim_type": "OWNS", "work_id": "w1"}])
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({
                "artworks": {"id": "w1", "artist_id": ARTIST_ID},
                "claims": claims,
            })

            with pytest.raises(WorkPermissionError):
                ProvenanceService.list_pending_claims_for_work("w1", COLLECTOR_ID)

        claims.execute.assert_not_called()

    def test_pending_claims_missing_work(self):
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"artworks": None})

            with pytest.raises(WorkNotFoundError):
                ProvenanceService.list_pending_claims_for_work("w404", ARTIST_ID)

    def test_dedup_search(self):
        with patch(f"{CLIENT}.rpc", return_value=None) as mock_rpc:
            assert ProvenanceService.search_works_for_dedup(artist_profile_id=ARTIST_ID, q="blue") == []

        assert mock_rpc.call_args.args[1]["p_limit"] == 20

    def test_count_pending(self):
        claims = make_query(None, count=3)
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({
                "artworks": [{"id": "w1"}, {"id": "w2"}],
                "claims": claims,
            })

            assert ProvenanceService.count_my_pending_claims(ARTIST_ID) == 3

        claims.in_.assert_called_once_with("work_id", ["w1", "w2"])

    def test_count_without_works(self):
        with patch(CLIENT) as mock:
            mock.get_client.return_value = make_client({"artworks": []})

            assert ProvenanceService.count_my_pending_claims(ARTIST_ID) == 0

    def test_count_anonymous(self):
        assert ProvenanceService.count_my_pending_claims(None) == 0
