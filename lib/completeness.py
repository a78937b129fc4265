# =============================================================================
# lib/completeness.py - Profile Completeness Score
# =============================================================================
# Role-based 0-100 score: a core section worth 50 plus the best-scoring
# module for the roles the profile holds, worth another 50. Collectors,
# artists and curators each get a module that fits what they fill in.
#
#   core (6 checks)        username, display name, avatar, bio, role, location
#   artist (any 3 of 4)    themes>=3, mediums>=1, styles>=1, education>=1
#   collector (3 checks)   themes>=2, price band, acquisition channels>=1
#   curator (2 checks)     affiliation, program focus>=2  (also gallerists)
#
# Usage:
#   from lib.completeness import compute_completeness
#   result = compute_completeness(ProfileForCompleteness(**merged))
# =============================================================================

from __future__ import annotations

import math
from typing import Any, Mapping

from core.models.profile import CompletenessResult, MissingSection, ProfileForCompleteness

CORE_WEIGHT = 50
MODULE_WEIGHT = 50
MAX_SCORE = 100


def _filled(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def _count(values: list[Any] | None) -> int:
    return len(values) if isinstance(values, list) else 0


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upward
    return int(math.floor(value + 0.5))


def _holds_role(profile: ProfileForCompleteness, role: str) -> bool:
    return role in (profile.roles or []) or profile.main_role == role


# =============================================================================
# Sections
# =============================================================================

def core_score(profile: ProfileForCompleteness) -> float:
    checks = [
        profile.username is not None and len(profile.username.strip()) >= 3,
        _filled(profile.display_name),
        _filled(profile.avatar_url),
        _filled(profile.bio),
        _filled(profile.main_role) or _count(profile.roles) > 0,
        _filled(profile.city) or _filled(profile.region) or _filled(profile.country),
    ]
    return sum(checks) / len(checks) * CORE_WEIGHT


def artist_module_score(profile: ProfileForCompleteness) -> float:
    # Four signals, but any three complete the module
    total = 3
    hits = sum([
        _count(profile.themes) >= 3,
        _count(profile.mediums) >= 1,
        _count(profile.styles) >= 1,
        _count(profile.education) >= 1,
    ])
    return min(hits, total) / total * MODULE_WEIGHT


def collector_module_score(profile: ProfileForCompleteness) -> float:
    price_band = profile.price_band
    has_price_band = (
        any(_filled(v) for v in price_band) if isinstance(price_band, list) else _filled(price_band)
    )
    checks = [
        _count(profile.themes) >= 2,
        has_price_band,
        _count(profile.acquisition_channels) >= 1,
    ]
    return sum(checks) / len(checks) * MODULE_WEIGHT


def curator_module_score(profile: ProfileForCompleteness) -> float:
    checks = [
        _filled(profile.affiliation),
        _count(profile.program_focus) >= 2,
    ]
    return sum(checks) / len(checks) * MODULE_WEIGHT


# =============================================================================
# Score
# =============================================================================

def compute_completeness(
    profile: ProfileForCompleteness,
    details_loaded: bool = True,
) -> CompletenessResult:
    """
    Compute the completeness score for a profile.

    Args:
        profile: Base profile merged with profile_details
        details_loaded: False when profile_details could not be read; the
            score is still computed but marked low confidence

    Returns:
        CompletenessResult with score, missing sections and confidence
    """
    is_artist = _holds_role(profile, "artist")
    is_collector = _holds_role(profile, "collector")
    is_curator = _holds_role(profile, "curator") or _holds_role(profile, "gallerist")

    core = core_score(profile)
    module_scores: dict[MissingSection, float] = {}
    if is_artist:
        module_scores[MissingSection.ARTIST_MODULE] = artist_module_score(profile)
    if is_collector:
        module_scores[MissingSection.COLLECTOR_MODULE] = collector_module_score(profile)
    if is_curator:
        module_scores[MissingSection.CURATOR_MODULE] = curator_module_score(profile)

    best_module = max(module_scores.values(), default=0.0)
    score = min(MAX_SCORE, _round_half_up(core + best_module))

    missing: list[MissingSection] = []
    if core < CORE_WEIGHT:
        missing.append(MissingSection.CORE)
    missing.extend(section for section, value in module_scores.items() if value < MODULE_WEIGHT)

    return CompletenessResult(
        score=score,
        missing_recommendations=missing,
        confidence="high" if details_loaded else "low",
    )


def merge_profile_details(profile_row: Mapping[str, Any]) -> tuple[ProfileForCompleteness, bool]:
    """
    Merge a profiles row with its profile_details JSON.

    Detail keys win over base columns of the same name.

    Returns:
        (profile, details_loaded)
    """
    details = profile_row.get("profile_details")
    details_loaded = isinstance(details, dict)
    merged = {**profile_row, **(details if details_loaded else {})}
    return ProfileForCompleteness.model_validate(merged), details_loaded
