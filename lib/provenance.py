# =============================================================================
# lib/provenance.py - Claim Display and Persona Rules
# =============================================================================
# Pure helpers over provenance claims:
# - Claim type -> display label ("Collected", "Curated in <project>")
# - Claim type -> "by" phrase ("collected by", "secured by")
# - Primary claim of an artwork
# - Persona tabs: which of a profile's artworks it made, owns, holds, curated
# =============================================================================

from __future__ import annotations

from typing import Iterable

from core.models.artwork import Artwork, ArtworkClaim
from core.models.claim import ClaimType, ClaimTypeInfo, PersonaCounts, PersonaTab

DEFAULT_LABEL = "Work"

_LABELS: dict[ClaimType, str] = {
    ClaimType.CREATED: "Work",
    ClaimType.OWNS: "Collected",
    ClaimType.INVENTORY: "Inventory",
    ClaimType.EXHIBITED: "Exhibited",
    ClaimType.CURATED: "Curated",
    ClaimType.INCLUDES_WORK: "Included",
    ClaimType.HOSTS_PROJECT: "Hosts",
}

# Label templates used when the claim points at a titled project
_PROJECT_LABELS: dict[ClaimType, str] = {
    ClaimType.CURATED: "Curated in {title}",
    ClaimType.INCLUDES_WORK: "In {title}",
}

# CREATED has no phrase: the artist is already shown as "by {artist}"
_BY_PHRASES: dict[ClaimType, str | None] = {
    ClaimType.CREATED: None,
    ClaimType.OWNS: "collected by",
    ClaimType.INVENTORY: "secured by",
    ClaimType.EXHIBITED: "exhibited by",
    ClaimType.CURATED: "curated by",
    ClaimType.INCLUDES_WORK: "included by",
    ClaimType.HOSTS_PROJECT: "hosted by",
}


def _as_claim_type(value: ClaimType | str) -> ClaimType | None:
    try:
        return ClaimType(value)
    except ValueError:
        return None


def claim_type_to_label(claim_type: ClaimType | str, project_title: str | None = None) -> str:
    """
    Display label for a claim type.

    Unknown claim types fall back to "Work".

    Example:
        claim_type_to_label(ClaimType.CURATED, "Spring Show")  # "Curated in Spring Show"
        claim_type_to_label(ClaimType.OWNS)                     # "Collected"
    """
    parsed = _as_claim_type(claim_type)
    if parsed is None:
        return DEFAULT_LABEL
    if project_title and parsed in _PROJECT_LABELS:
        return _PROJECT_LABELS[parsed].format(title=project_title)
    return _LABELS[parsed]


def claim_type_to_by_phrase(claim_type: ClaimType | str) -> str | None:
    """The "<verb> by" phrase for a claim type, or None."""
    parsed = _as_claim_type(claim_type)
    if parsed is None:
        return None
    return _BY_PHRASES[parsed]


def describe_claim_types() -> list[ClaimTypeInfo]:
    """Label and phrase for every claim type, in enum order."""
    return [
        ClaimTypeInfo(
            claim_type=claim_type,
            label=claim_type_to_label(claim_type),
            by_phrase=claim_type_to_by_phrase(claim_type),
        )
        for claim_type in ClaimType
    ]


def get_primary_claim(artwork: Artwork) -> ArtworkClaim | None:
    """The claim to show on a card: CREATED if present, else the first."""
    claims = artwork.claims or []
    for claim in claims:
        if claim.claim_type == ClaimType.CREATED.value:
            return claim
    return claims[0] if claims else None


# =============================================================================
# Persona Tabs
# =============================================================================

def _has_claim(artwork: Artwork, profile_id: str, claim_type: str) -> bool:
    return any(
        claim.subject_profile_id == profile_id and claim.claim_type == claim_type
        for claim in artwork.claims or []
    )


def filter_artworks_by_persona(
    artworks: Iterable[Artwork],
    profile_id: str,
    tab: PersonaTab,
) -> list[Artwork]:
    """
    Artworks where the profile holds a claim of the tab's type.

    The "all" tab returns everything unchanged.
    """
    if tab == PersonaTab.ALL:
        return list(artworks)
    return [a for a in artworks if _has_claim(a, profile_id, tab.value)]


def get_persona_counts(artworks: list[Artwork], profile_id: str) -> PersonaCounts:
    def count(tab: PersonaTab) -> int:
        return sum(1 for a in artworks if _has_claim(a, profile_id, tab.value))

    return PersonaCounts(
        all=len(artworks),
        created=count(PersonaTab.CREATED),
        owns=count(PersonaTab.OWNS),
        inventory=count(PersonaTab.INVENTORY),
        curated=count(PersonaTab.CURATED),
    )
