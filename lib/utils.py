# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization for queries
# - Opaque pagination cursors
# - Backend error message extraction
# - Base error class with actionable suggestions
# =============================================================================

import base64
import math
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        profile_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        profile_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Cursor Utilities
# =============================================================================

def encode_cursor(value: str) -> str:
    """
    Encode a keyset value (e.g. the last row id) as an opaque page cursor.

    The RPCs expect standard base64 of the UTF-8 text.
    """
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


# =============================================================================
# Value Coercion
# =============================================================================

def to_int(value: Any) -> int:
    """
    Coerce a count-like value to int.

    PostgREST returns aggregate counts as numbers or numeric strings.
    Anything non-finite or unparsable becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO timestamp for sorting.

    Missing or malformed values sort as the Unix epoch.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not value:
        return EPOCH
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


# =============================================================================
# Backend Error Formatting
# =============================================================================

def format_supabase_error(error: Any, fallback: str) -> str:
    """
    Extract a human-readable message from a backend error.

    PostgREST often returns errors as plain objects ({message, code, details,
    hint}) rather than exceptions.

    Args:
        error: Exception, dict, string, or None
        fallback: Message to use when nothing better is available

    Returns:
        The most specific message available
    """
    if error is None:
        return fallback
    if isinstance(error, dict):
        message = error.get("message")
        return message if isinstance(message, str) else fallback
    if isinstance(error, str):
        return error
    if isinstance(error, Exception):
        message = getattr(error, "message", None)
        if isinstance(message, str):
            return message
        return str(error) or fallback
    return fallback


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
