"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Any, Optional

from shared.exceptions import (
    PortalError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    detail: Optional[str] = None
    code: Optional[str] = None
    details: dict[str, Any] = {}


def status_code_for(error: PortalError) -> int:
    """HTTP status for a portal exception."""
    if error.code == "INVALID_TRANSITION":
        return 409
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 422
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, ExternalServiceError):
        return 502
    return 500


def error_response_for(error: PortalError) -> ErrorResponse:
    return ErrorResponse(
        error=error.__class__.__name__,
        detail=error.message,
        code=error.code,
        details=error.details,
    )
