# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper (singleton, user clients, RPC)
# - feed.py: Feed assembly (threads, ordering, recommendation interleaving)
# - completeness.py: Role-based profile completeness score
# - provenance.py: Claim labels, primary claim, persona tabs
# - profile_payload.py: Profile payload normalization and patches
# - vector_math.py: Embedding vector helpers (numpy)
# - embeddings.py: Artwork embedding provider (OpenAI)
# - entitlements.py: Plan feature gating
# - utils.py: Shared utilities (errors, cursors, UUID normalization)
#
# Apart from supabase_client and embeddings, these modules are pure and can
# be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.completeness import compute_completeness, merge_profile_details
from lib.feed import build_feed, group_into_threads, interleave_recommendations
from lib.provenance import claim_type_to_by_phrase, claim_type_to_label
from lib.utils import ApplicationError, format_supabase_error, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Rules
    "compute_completeness",
    "merge_profile_details",
    "build_feed",
    "group_into_threads",
    "interleave_recommendations",
    "claim_type_to_by_phrase",
    "claim_type_to_label",
    # Utils
    "ApplicationError",
    "format_supabase_error",
    "normalize_uuid",
]
