# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# Annotated dependency aliases injected into route handlers.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_user, get_current_user_optional

# Signed-in viewer (401 otherwise)
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]

# Viewer or None for anonymous requests
OptionalUser = Annotated[AuthUser | None, Depends(get_current_user_optional)]


def viewer_id(user: AuthUser | None) -> str | None:
    """Viewer id for service calls, None when anonymous."""
    return user.user_id if user else None
