# =============================================================================
# app/routers/profiles.py - Public Profile Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, Field

from core.models.artwork import Artwork
from core.models.claim import PersonaCounts, PersonaTab
from core.services.artwork_service import ArtworkService
from lib.provenance import filter_artworks_by_persona, get_persona_counts

router = APIRouter()


class ProfileArtworksResponse(BaseModel):
    tab: PersonaTab
    artworks: list[Artwork] = Field(default_factory=list)
    counts: PersonaCounts


@router.get("/{profile_id}/artworks", response_model=ProfileArtworksResponse)
async def list_profile_artworks(
    profile_id: Annotated[str, Path(description="Profile id")],
    tab: Annotated[PersonaTab, Query(description="all, CREATED, OWNS, INVENTORY or CURATED")] = PersonaTab.ALL,
):
    """
    Artworks on a profile, filtered by persona tab.

    Counts cover every tab so the UI can hide empty ones.
    """
    artworks = ArtworkService.list_profile_artworks(profile_id)
    return ProfileArtworksResponse(
        tab=tab,
        artworks=filter_artworks_by_persona(artworks, profile_id, tab),
        counts=get_persona_counts(artworks, profile_id),
    )
