# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated viewer extracted from a Supabase JWT.

    Only what the token carries; profile data is loaded separately.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str | None = None
    role: str | None = None
    access_token: str | None = Field(default=None, repr=False, exclude=True)

    @property
    def user_id(self) -> str:
        """The id as stored in profiles / artwork_likes / claims."""
        return str(self.id)
