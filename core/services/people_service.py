# =============================================================================
# core/services/people_service.py - People Recommendations and Search
# =============================================================================
# Wraps the get_people_recs and search_people RPCs. Ranking lives in the
# database; this layer cleans filters and builds page cursors.
# =============================================================================

import logging
from typing import Iterable

from core.models.people import ROLE_OPTIONS, PeoplePage, PeopleRec, PeopleRecMode
from lib.supabase_client import SupabaseClient
from lib.utils import encode_cursor

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 15
MAX_LIMIT = 50


def clean_roles(roles: Iterable[str] | None) -> list[str]:
    """Keep only known roles, in the given order."""
    return [role for role in roles or [] if role in ROLE_OPTIONS]


def next_cursor(rows: list[PeopleRec], limit: int) -> str | None:
    """A cursor for the next page when this page came back full."""
    if len(rows) >= limit and rows and rows[-1].id:
        return encode_cursor(rows[-1].id)
    return None


class PeopleService:
    """Service for people recommendation and search RPCs."""

    @staticmethod
    def get_people_recs(
        mode: PeopleRecMode,
        roles: Iterable[str] | None = None,
        limit: int = DEFAULT_LIMIT,
        cursor: str | None = None,
        access_token: str | None = None,
    ) -> PeoplePage:
        """
        Fetch one page of recommended people.

        Args:
            mode: follow_graph, likes_based or expand
            roles: Optional role filter (unknown roles are dropped)
            limit: Page size, clamped to 1..50
            cursor: Cursor from the previous page
            access_token: Viewer token; the RPC ranks relative to auth.uid()

        Raises:
            SupabaseClientError: If the RPC fails
        """
        limit = min(max(limit, 1), MAX_LIMIT)
        rows = SupabaseClient.rpc("get_people_recs", {
            "p_mode": PeopleRecMode(mode).value,
            "p_roles": clean_roles(roles),
            "p_limit": limit,
            "p_cursor": cursor or None,
        }, access_token=access_token)

        recs = [PeopleRec.model_validate(row) for row in rows or []]
        logger.debug(f"get_people_recs({mode}) returned {len(recs)} rows")
        return PeoplePage(data=recs, next_cursor=next_cursor(recs, limit))

    @staticmethod
    def search_people(
        q: str,
        roles: Iterable[str] | None = None,
        limit: int = DEFAULT_LIMIT,
        cursor: str | None = None,
        access_token: str | None = None,
    ) -> PeoplePage:
        """
        Search profiles by name or username.

        A blank query returns an empty page without calling the backend.

        Raises:
            SupabaseClientError: If the RPC fails
        """
        normalized = q.strip()
        if not normalized:
            return PeoplePage()

        rows = SupabaseClient.rpc("search_people", {
            "p_q": normalized,
            "p_roles": clean_roles(roles),
            "p_limit": limit,
            "p_cursor": cursor or None,
        }, access_token=access_token)

        results = [PeopleRec.model_validate(row) for row in rows or []]
        return PeoplePage(data=results, next_cursor=next_cursor(results, limit))
