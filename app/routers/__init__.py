# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - feed.py: Threaded feed and discovery lanes
# - me.py: Completeness, profile details, entitlements, pending claims
# - claims.py: Provenance claims and work lookups for claim forms
# - profiles.py: Public profile artworks by persona tab
# - people.py: People recommendations and search
# - likes.py: Like / unlike artworks
# - tasks.py: Background task status
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import feed
from . import me
from . import claims
from . import profiles
from . import people
from . import likes
from . import tasks

__all__ = [
    "health",
    "feed",
    "me",
    "claims",
    "profiles",
    "people",
    "likes",
    "tasks",
]
