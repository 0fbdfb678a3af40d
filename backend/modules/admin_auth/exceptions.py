"""
Admin authentication module exceptions.

The service converts these into boolean or tagged results; only
InvalidTransitionError reaches callers, since it signals a caller bug.
"""

from shared.exceptions import (
    PortalError,
    NotFoundError,
    ValidationError,
)


class AdminAuthError(PortalError):
    """Base exception for admin authentication errors."""

    pass


class AdminNotFoundError(NotFoundError):
    """Raised when no admin_users row matches an email."""

    def __init__(self, email: str):
        super().__init__(
            "Admin account not found",
            code="ADMIN_NOT_FOUND",
            details={"email": email},
        )


class AmbiguousRecordError(AdminAuthError):
    """Raised when a lookup that must be unique matches several rows."""

    def __init__(self, table: str, email: str, count: int):
        super().__init__(
            f"Expected one {table} row, found {count}",
            code="AMBIGUOUS_RECORD",
            details={"table": table, "email": email, "count": count},
        )


class AdminAuthConfigError(AdminAuthError):
    """Raised when the OTP login cannot reach the identity provider as configured."""

    def __init__(self, setting: str):
        super().__init__(
            f"Admin authentication is not configured: {setting} is empty",
            code="ADMIN_AUTH_NOT_CONFIGURED",
            details={"setting": setting},
        )


class InvalidTransitionError(ValidationError):
    """Raised when a login flow action is invoked from the wrong step."""

    def __init__(self, action: str, step: str):
        super().__init__(
            f"Cannot {action} while in the {step} step",
            code="INVALID_TRANSITION",
            details={"action": action, "step": step},
        )
