# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# Celery configuration and tasks for taste-profile bookkeeping.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (taste updates, artwork embeddings)
# - config.py: Worker-specific settings
#
# Usage:
#   # Start worker
#   celery -A workers.celery_app worker -Q default,taste --loglevel=info
#
#   # Submit task (from API)
#   from workers.tasks import update_taste_from_like
#   result = update_taste_from_like.delay(user_id, artwork_id)
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
