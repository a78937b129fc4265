# =============================================================================
# app/routers/people.py - People Discovery Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import OptionalUser
from core.models.people import PeoplePage, PeopleRecMode
from core.services.people_service import DEFAULT_LIMIT, PeopleService

router = APIRouter()


@router.get("/recs", response_model=PeoplePage)
async def get_people_recs(
    user: OptionalUser,
    mode: PeopleRecMode = PeopleRecMode.FOLLOW_GRAPH,
    roles: Annotated[list[str] | None, Query(description="artist, curator, gallerist, collector")] = None,
    limit: Annotated[int, Query(ge=1, le=50)] = DEFAULT_LIMIT,
    cursor: str | None = None,
):
    """Recommended people, one page at a time."""
    return PeopleService.get_people_recs(
        mode,
        roles=roles,
        limit=limit,
        cursor=cursor,
        access_token=user.access_token if user else None,
    )


@router.get("/search", response_model=PeoplePage)
async def search_people(
    user: OptionalUser,
    q: Annotated[str, Query(description="Name or username")] = "",
    roles: Annotated[list[str] | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=50)] = DEFAULT_LIMIT,
    cursor: str | None = None,
):
    return PeopleService.search_people(
        q,
        roles=roles,
        limit=limit,
        cursor=cursor,
        access_token=user.access_token if user else None,
    )
