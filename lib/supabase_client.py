# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the shared building blocks the services rely on:
# - RPC calls with error wrapping
# - Profile lookups
# - Follow graph lookups
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   profile = SupabaseClient.fetch_profile(user_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import format_supabase_error

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for ".single()" matching no rows
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries the backend's message plus a machine-readable code and an
    actionable suggestion.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_not_found(error: Exception) -> bool:
    """True when a PostgREST error means "no rows"."""
    return NO_ROWS_CODE in str(error)


class SupabaseClient:
    """
    Typed wrapper for Supabase operations.

    One client instance is shared across the application. All methods are
    class methods for easy access without instantiation.

    Example:
        rows = SupabaseClient.rpc("get_people_recs", {"p_mode": "expand"})
        following = SupabaseClient.fetch_following_ids(user_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key, so callers are responsible for scoping
        queries to the authenticated user.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def get_user_client(cls, access_token: str) -> Client:
        """
        A client acting as the signed-in user.

        RPCs that read auth.uid() (claim creation) must run with the
        caller's token instead of the service key. Not cached.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
            client.postgrest.auth(access_token)
            return client
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create user Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # RPC
    # -------------------------------------------------------------------------

    @classmethod
    def rpc(
        cls,
        function: str,
        params: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> Any:
        """
        Call a Postgres RPC function.

        Args:
            function: RPC function name
            params: Named parameters (p_* by convention)
            access_token: Run as this user instead of the service role

        Returns:
            The RPC's data payload (list, dict, scalar, or None)

        Raises:
            SupabaseClientError: If the call fails
        """
        client = cls.get_user_client(access_token) if access_token else cls.get_client()

        try:
            response = client.rpc(function, params or {}).execute()
            return response.data
        except Exception as e:
            raise SupabaseClientError(
                message=format_supabase_error(e, f"RPC {function} failed"),
                code="RPC_FAILED",
                suggestion=f"Check that the {function} function exists and the caller may execute it",
                details={"function": function},
            )

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_profile(cls, profile_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a profile row including its profile_details JSON.

        Returns:
            Profile dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        profile_id_str = cls._normalize_uuid(profile_id)

        try:
            response = (
                client.table("profiles")
                .select("*")
                .eq("id", profile_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch profile: {e}",
                code="FETCH_PROFILE_FAILED",
                suggestion="Check that the profile exists",
                details={"profile_id": profile_id_str}
            )

    # -------------------------------------------------------------------------
    # Follow Graph
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_following_ids(cls, user_id: str | UUID) -> set[str]:
        """
        Fetch the ids of profiles the user follows.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("follows")
                .select("following_id")
                .eq("follower_id", user_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch following ids: {e}",
                code="FETCH_FOLLOWING_FAILED",
                details={"user_id": user_id_str}
            )

        ids = {row["following_id"] for row in (response.data or [])}
        logger.debug(f"User {user_id_str} follows {len(ids)} profiles")
        return ids
