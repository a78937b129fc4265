# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain layer:
# - models/: Pydantic schemas (artworks, feed, claims, profiles, plans)
# - services/: Supabase-backed operations called by routers and workers
#
# Code in this package should NOT import from FastAPI or Celery, apart from
# the lazy task enqueue in like_service.
# =============================================================================
