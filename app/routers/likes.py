# =============================================================================
# app/routers/likes.py - Artwork Like Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status
from pydantic import BaseModel

from app.dependencies import CurrentUser
from core.services.like_service import LikeService

router = APIRouter()


class LikeResponse(BaseModel):
    artwork_id: str
    liked: bool
    task_id: str | None = None


@router.post("/{artwork_id}/like", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
async def like_artwork(
    artwork_id: Annotated[str, Path(description="Artwork id")],
    user: CurrentUser,
):
    """
    Like an artwork.

    The viewer's taste profile is updated in the background; task_id can be
    polled at /tasks/{task_id}.
    """
    task_id = LikeService.like(user.user_id, artwork_id)
    return LikeResponse(artwork_id=artwork_id, liked=True, task_id=task_id)


@router.delete("/{artwork_id}/like", response_model=LikeResponse)
async def unlike_artwork(
    artwork_id: Annotated[str, Path(description="Artwork id")],
    user: CurrentUser,
):
    LikeService.unlike(user.user_id, artwork_id)
    return LikeResponse(artwork_id=artwork_id, liked=False)
