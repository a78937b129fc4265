# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where possible, a suggestion
# telling the client how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError


class AbstractAPIException(Exception):
    """
    Base exception for the Abstract API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "ABSTRACT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Profile Exceptions
# =============================================================================

class ProfileNotFoundError(AbstractAPIException):
    """Raised when a profile ID doesn't exist."""

    def __init__(self, profile_id: str):
        super().__init__(
            message=f"Profile not found: {profile_id}",
            code="PROFILE_NOT_FOUND",
            status_code=404,
            suggestion="Finish onboarding to create a profile, or check the profile id",
            details={"profile_id": profile_id}
        )


class MissingRolesError(AbstractAPIException):
    """Raised when a profile save would leave the user without any role."""

    def __init__(self):
        super().__init__(
            message="At least one role is required",
            code="ROLES_REQUIRED",
            status_code=400,
            suggestion="Pick one or more of artist, collector, curator, gallerist",
        )


# =============================================================================
# Claim Exceptions
# =============================================================================

class ClaimNotFoundError(AbstractAPIException):
    """Raised when a claim ID doesn't exist or is not visible to the caller."""

    def __init__(self, claim_id: str):
        super().__init__(
            message=f"Claim not found: {claim_id}",
            code="CLAIM_NOT_FOUND",
            status_code=404,
            suggestion="Check that the claim_id is correct and still pending",
            details={"claim_id": claim_id}
        )


class ClaimPermissionError(AbstractAPIException):
    """Raised when the caller may not change a claim."""

    def __init__(self, claim_id: str):
        super().__init__(
            message=f"Not allowed to change claim {claim_id}",
            code="CLAIM_FORBIDDEN",
            status_code=403,
            suggestion="Artists moderate claims on their works; claimants edit their own claims",
            details={"claim_id": claim_id}
        )


class ClaimTargetMissingError(AbstractAPIException):
    """Raised when a claim names neither a work nor a project."""

    def __init__(self):
        super().__init__(
            message="A claim must reference a work or a project",
            code="CLAIM_TARGET_REQUIRED",
            status_code=400,
            suggestion="Provide work_id or project_id",
        )


# =============================================================================
# Work Exceptions
# =============================================================================

class WorkNotFoundError(AbstractAPIException):
    """Raised when an artwork ID doesn't exist."""

    def __init__(self, work_id: str):
        super().__init__(
            message=f"Work not found: {work_id}",
            code="WORK_NOT_FOUND",
            status_code=404,
            suggestion="Check that the work_id is correct",
            details={"work_id": work_id}
        )


class WorkPermissionError(AbstractAPIException):
    """Raised when the caller is not the artist of a work."""

    def __init__(self, work_id: str):
        super().__init__(
            message=f"Only the artist can review claims on work {work_id}",
            code="WORK_FORBIDDEN",
            status_code=403,
            details={"work_id": work_id}
        )


# =============================================================================
# Backend Exceptions
# =============================================================================

class BackendError(AbstractAPIException):
    """Raised when a Supabase call fails; the backend message is surfaced."""

    def __init__(self, error: SupabaseClientError):
        super().__init__(
            message=error.message,
            code=error.code,
            status_code=502,
            suggestion=error.suggestion or "Try again later or contact support if the issue persists",
            details=error.details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def abstract_exception_handler(
    request: Request,
    exc: AbstractAPIException
) -> JSONResponse:
    """
    Convert AbstractAPIException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Surface backend errors that reached a route unwrapped."""
    return await abstract_exception_handler(request, BackendError(exc))
