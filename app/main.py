# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Abstract API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    AbstractAPIException,
    abstract_exception_handler,
    supabase_exception_handler,
)
from app.routers import claims, feed, health, likes, me, people, profiles, tasks
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Abstract API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.embeddings_enabled:
        logger.info("OPENAI_API_KEY not set; artwork embeddings disabled")

    yield

    logger.info("Shutting down Abstract API")


app = FastAPI(
    title="Abstract API",
    description="""
## Art Social Platform API

Feeds, provenance claims and profiles for artists, collectors, curators
and galleries.

### Highlights

- **Feed**: artworks grouped into per-artist threads, with recommended
  people interleaved
- **Lanes**: For You, Expand and Signals discovery lanes
- **Provenance**: claims linking profiles to works (collected, curated,
  exhibited, ...) with artist confirmation
- **Profiles**: role-based completeness score and profile details
""",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Feed", "description": "Threaded feed and discovery lanes"},
        {"name": "Me", "description": "The signed-in user's profile, plan and badges"},
        {"name": "Claims", "description": "Provenance claims and moderation"},
        {"name": "Profiles", "description": "Public profile artworks"},
        {"name": "People", "description": "People recommendations and search"},
        {"name": "Likes", "description": "Like and unlike artworks"},
        {"name": "Tasks", "description": "Track background task status"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(AbstractAPIException, abstract_exception_handler)
app.add_exception_handler(SupabaseClientError, supabase_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(feed.router, prefix=API_PREFIX, tags=["Feed"])
app.include_router(me.router, prefix=f"{API_PREFIX}/me", tags=["Me"])
app.include_router(claims.router, prefix=API_PREFIX, tags=["Claims"])
app.include_router(profiles.router, prefix=f"{API_PREFIX}/profiles", tags=["Profiles"])
app.include_router(people.router, prefix=f"{API_PREFIX}/people", tags=["People"])
app.include_router(likes.router, prefix=f"{API_PREFIX}/artworks", tags=["Likes"])
app.include_router(tasks.router, prefix=f"{API_PREFIX}/tasks", tags=["Tasks"])


@app.get("/", tags=["Root"])
async def root():
    return {
        "name": "Abstract API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
