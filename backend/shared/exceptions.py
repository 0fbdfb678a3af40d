"""
Base exception classes for the Prime Portal backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class PortalError(Exception):
    """
    Base exception for all portal errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(PortalError):
    """Resource not found."""

    pass


class ValidationError(PortalError):
    """Input validation failed."""

    pass


class AuthenticationError(PortalError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(PortalError):
    """Authorization failed (insufficient permissions)."""

    pass


class StorageError(PortalError):
    """Durable client-side storage could not be read or written."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, code or "STORAGE_ERROR", {"key": key} if key else None)
        self.key = key


class ExternalServiceError(PortalError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
