# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample artwork / profile rows shaped like PostgREST output
# - Provides a chainable fake of the Supabase query builder
# =============================================================================

import os
from typing import Any
from unittest.mock import MagicMock

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.pop("OPENAI_API_KEY", None)

import pytest

from core.models.artwork import Artwork
from core.models.people import PeopleRec


# =============================================================================
# Supabase Fakes
# =============================================================================

def make_query(data: Any = None, count: int | None = None) -> MagicMock:
    """
    A fake PostgREST query builder.

    Every filter method returns the builder itself; execute() returns a
    response with `.data` and `.count`.
    """
    query = MagicMock(name="query")
    for method in ("select", "eq", "in_", "order", "limit", "maybe_single",
                   "single", "insert", "update", "upsert", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data, count=count)
    return query


def make_client(tables: dict[str, Any] | None = None) -> MagicMock:
    """
    A fake Supabase client whose table(name) returns tables[name].

    Values may be a prepared query (see make_query) or raw data.
    """
    client = MagicMock(name="client")
    prepared = {
        name: value if isinstance(value, MagicMock) else make_query(value)
        for name, value in (tables or {}).items()
    }
    client.table.side_effect = lambda name: prepared.setdefault(name, make_query([]))
    return client


# =============================================================================
# Fixtures
# =============================================================================

def artwork_row(
    artwork_id: str,
    artist_id: str,
    created_at: str,
    likes: int | str = 0,
    claims: list[dict] | None = None,
) -> dict[str, Any]:
    """A raw artwork row as returned by the artwork list select."""
    return {
        "id": artwork_id,
        "title": f"Work {artwork_id}",
        "medium": "Oil on linen",
        "visibility": "public",
        "artist_id": artist_id,
        "created_at": created_at,
        "artwork_images": [{"storage_path": f"{artist_id}/{artwork_id}.jpg", "sort_order": 0}],
        "profiles": {"id": artist_id, "username": f"user_{artist_id}", "display_name": artist_id.title()},
        "artwork_likes": [{"count": likes}],
        "claims": claims if claims is not None else [
            {"claim_type": "CREATED", "subject_profile_id": artist_id},
        ],
    }


def make_artwork(artwork_id: str, artist_id: str, created_at: str, likes: int = 0, **extra) -> Artwork:
    return Artwork(
        id=artwork_id,
        artist_id=artist_id,
        created_at=created_at,
        likes_count=likes,
        profiles={"id": artist_id, "username": f"user_{artist_id}"},
        **extra,
    )


@pytest.fixture
def sample_artwork_rows():
    """Five public artworks by three artists, newest first."""
    return [
        artwork_row("a5", "mira", "2025-03-05T10:00:00Z", likes=1),
        artwork_row("a4", "jun", "2025-03-04T10:00:00Z", likes=9),
        artwork_row("a3", "mira", "2025-03-03T10:00:00Z", likes="4"),
        artwork_row("a2", "sol", "2025-03-02T10:00:00Z", likes=0),
        artwork_row("a1", "jun", "2025-03-01T10:00:00Z", likes=2),
    ]


@pytest.fixture
def sample_artworks(sample_artwork_rows):
    from lib.feed import normalize_artwork_row

    return [normalize_artwork_row(row) for row in sample_artwork_rows]


@pytest.fixture
def sample_recs():
    return [
        PeopleRec(id=f"rec-{i}", username=f"rec{i}", reason_tags=["follow_graph"])
        for i in range(1, 6)
    ]


@pytest.fixture
def complete_artist_profile():
    """A profiles row for an artist with every section filled in."""
    return {
        "id": "11111111-1111-1111-1111-111111111111",
        "username": "mira",
        "display_name": "Mira Chen",
        "avatar_url": "https://cdn.example.com/mira.png",
        "bio": "Painter working in Seoul.",
        "main_role": "artist",
        "roles": ["artist"],
        "profile_completeness": 40,
        "profile_details": {
            "city": "Seoul",
            "themes": ["memory", "landscape", "water"],
            "mediums": ["oil"],
            "styles": ["abstract"],
            "education": [{"school": "SNU", "year": 2015}],
        },
    }
