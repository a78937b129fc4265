# =============================================================================
# lib/profile_payload.py - Profile Payload Normalization
# =============================================================================
# Cleans profile form payloads before they reach the database, so
# placeholders ("", "Select", "https://") and empty lists are stored as null
# instead of failing constraints or polluting recommendations.
#
# Usage:
#   from lib.profile_payload import sanitize_profile_details, make_patch
#   clean = sanitize_profile_details(form)
#   patch = make_patch(existing, clean)
# =============================================================================

from __future__ import annotations

import json
import math
from typing import Any, Mapping
from urllib.parse import urlparse

MAIN_ROLES = ("artist", "collector", "curator", "gallerist")

# Caps applied by the details sanitizer
MAX_ITEMS = {
    "themes": 5,
    "mediums": 4,
    "styles": 6,
    "keywords": 10,
    "acquisition_channels": 4,
    "program_focus": 5,
}


# =============================================================================
# Scalars
# =============================================================================

def normalize_string(value: Any) -> str | None:
    """Trim; empty becomes None."""
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def normalize_url(value: Any) -> str | None:
    """
    Keep only absolute URLs.

    "", "http://", "https://" and anything without a scheme and host
    become None.
    """
    text = normalize_string(value)
    if text is None or text in ("http://", "https://"):
        return None
    parsed = urlparse(text)
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        return None
    if parsed.scheme in ("http", "https") and not parsed.netloc:
        return None
    return text


def normalize_optional_select(value: Any) -> str | None:
    """Select inputs: "" and the "Select" placeholder become None; else lower-cased."""
    text = normalize_string(value)
    if text is None or text.lower() == "select":
        return None
    return text.lower()


def parse_year(value: Any) -> int | None:
    """Leading-integer parse of a year; bools and garbage become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    text = str(value).strip()
    digits = ""
    for i, char in enumerate(text):
        if char.isdigit() or (i == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


# =============================================================================
# Lists
# =============================================================================

def normalize_string_list(values: Any, max_items: int | None = None) -> list[str] | None:
    """
    Trim, drop blanks and non-strings, dedupe keeping first occurrence.

    Returns None for missing or empty results.
    """
    if not isinstance(values, (list, tuple)):
        return None
    cleaned: list[str] = []
    for item in values:
        if not isinstance(item, str):
            continue
        stripped = item.strip()
        if stripped and stripped not in cleaned:
            cleaned.append(stripped)
    if max_items:
        cleaned = cleaned[:max_items]
    return cleaned or None


def normalize_price_band(value: Any) -> list[str] | None:
    """
    price_band as a lower-cased list.

    Older clients send a single select value, newer ones a list; both are
    stored as a list so readers see one shape.
    """
    if isinstance(value, (list, tuple)):
        items = [normalize_optional_select(item) for item in value if isinstance(item, str)]
    else:
        items = [normalize_optional_select(value)]
    return normalize_string_list([item for item in items if item])


def normalize_education(rows: Any) -> list[dict[str, Any]] | None:
    """Clean education rows; all-blank rows are dropped."""
    if not isinstance(rows, (list, tuple)):
        return None
    cleaned = []
    for row in rows:
        if hasattr(row, "model_dump"):
            row = row.model_dump()
        if not isinstance(row, Mapping):
            continue
        entry = {
            "school": normalize_string(row.get("school")),
            "program": normalize_string(row.get("program")),
            "year": parse_year(row.get("year")),
            "type": normalize_string(row.get("type")),
        }
        if any(v is not None for v in entry.values()):
            cleaned.append(entry)
    return cleaned or None


# =============================================================================
# Payloads
# =============================================================================

def normalize_profile_base(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize the base profile columns.

    main_role must be one of the four roles, otherwise the first listed role
    is used. At least one role is required; callers reject saves with none.
    """
    roles = normalize_string_list(data.get("roles")) or []
    main_role_raw = normalize_optional_select(data.get("main_role"))
    main_role = main_role_raw if main_role_raw in MAIN_ROLES else (roles[0] if roles else None)
    is_public = data.get("is_public")

    return {
        "display_name": normalize_string(data.get("display_name")),
        "bio": normalize_string(data.get("bio")),
        "location": normalize_string(data.get("location")),
        "website": normalize_url(data.get("website")),
        "main_role": main_role,
        "roles": roles,
        "is_public": True if is_public is None else bool(is_public),
        "education": normalize_education(data.get("education")),
    }


def normalize_profile_details(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize the profile_details JSON.

    Select-style fields are lower-cased; price_band is stored as a list.
    """
    return {
        "career_stage": normalize_optional_select(data.get("career_stage")),
        "age_band": normalize_optional_select(data.get("age_band")),
        "city": normalize_string(data.get("city")),
        "region": normalize_optional_select(data.get("region")),
        "country": normalize_string(data.get("country")),
        "themes": normalize_string_list(data.get("themes")),
        "mediums": normalize_string_list(data.get("mediums")),
        "styles": normalize_string_list(data.get("styles")),
        "keywords": normalize_string_list(data.get("keywords")),
        "price_band": normalize_price_band(data.get("price_band")),
        "acquisition_channels": normalize_string_list(data.get("acquisition_channels")),
        "affiliation": normalize_optional_select(data.get("affiliation")),
        "program_focus": normalize_string_list(data.get("program_focus")),
    }


_SANITIZED_STRINGS = (
    "display_name", "bio", "location", "website", "career_stage", "age_band",
    "city", "region", "country", "affiliation",
)


def sanitize_profile_details(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Sanitize the details form before save.

    Strings are trimmed (empty -> None), lists are cleaned and capped,
    education rows are parsed. Casing is preserved except for price_band,
    which always comes back as a lower-cased list.
    """
    result: dict[str, Any] = {key: normalize_string(data.get(key)) for key in _SANITIZED_STRINGS}
    for key, cap in MAX_ITEMS.items():
        result[key] = normalize_string_list(data.get(key), max_items=cap)
    result["education"] = normalize_education(data.get("education"))
    result["price_band"] = normalize_price_band(data.get("price_band"))
    return result


# =============================================================================
# Patches
# =============================================================================

def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def _value_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if isinstance(a, (list, dict)) and isinstance(b, (list, dict)):
        return _canonical(a) == _canonical(b)
    if type(a) is not type(b):
        return False
    return a == b


def make_patch(initial: Mapping[str, Any] | None, current: Mapping[str, Any]) -> dict[str, Any]:
    """
    Keys of `current` whose value differs from `initial`.

    Missing keys in `initial` count as None, so clearing an absent field is
    not a change.
    """
    base = initial or {}
    return {
        key: value
        for key, value in current.items()
        if not _value_equal(base.get(key), value)
    }

