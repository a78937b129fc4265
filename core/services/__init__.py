# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .artwork_service import ArtworkService
from .entitlement_service import EntitlementService
from .feed_service import FeedService
from .like_service import LikeService
from .people_service import PeopleService
from .profile_service import ProfileService
from .provenance_service import ProvenanceService
from .taste_service import TasteService

__all__ = [
    "ArtworkService",
    "EntitlementService",
    "FeedService",
    "LikeService",
    "PeopleService",
    "ProfileService",
    "ProvenanceService",
    "TasteService",
]
