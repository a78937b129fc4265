# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Health checks for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

import redis
from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings

router = APIRouter()

VERSION = "0.1.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    database: str
    storage: str
    broker: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _unhealthy(error: Exception) -> str:
    return f"unhealthy: {str(error)[:50]}"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check.

    Verifies the profiles table, the artworks storage bucket and the Redis
    broker are reachable. "degraded" means requests may partly fail.
    """
    from lib.supabase_client import SupabaseClient

    checks = ChecksResponse(database="unknown", storage="unknown", broker="unknown")

    try:
        client = SupabaseClient.get_client()
        client.table("profiles").select("id").limit(1).execute()
        checks.database = "healthy"
    except Exception as e:
        checks.database = _unhealthy(e)

    try:
        client = SupabaseClient.get_client()
        client.storage.get_bucket(settings.ARTWORKS_BUCKET)
        checks.storage = "healthy"
    except Exception as e:
        checks.storage = _unhealthy(e)

    try:
        redis.Redis.from_url(settings.REDIS_URL, socket_timeout=2).ping()
        checks.broker = "healthy"
    except Exception as e:
        checks.broker = _unhealthy(e)

    all_healthy = all(value == "healthy" for value in checks.model_dump().values())
    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Process liveness, for container restart decisions."""
    return LivenessResponse(status="alive", timestamp=_now())
