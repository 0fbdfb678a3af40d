"""
Admin authentication module.

Email + one-time-passcode login for the back-office roles.

Public API:
- IAdminAuthService: Interface for email verification and OTP login
- IOTPDelivery: Outbound channel for issued codes
- AdminIdentity, OTPRecord, EmailVerification, LoginResult: data models
- AuthStep, FlowError, FlowResult: login flow state and results
- Admin auth exceptions: AdminNotFoundError, InvalidTransitionError, etc.

The flow itself lives in modules.admin_auth.flow, which depends on the
portal module and is imported from there directly.
"""

from .interfaces import IAdminAuthService, IOTPDelivery
from .models import (
    AdminIdentity,
    AdminRole,
    AuthStep,
    EmailVerification,
    FlowError,
    FlowResult,
    LoginFailure,
    LoginResult,
    OTPRecord,
)
from .exceptions import (
    AdminAuthError,
    AdminAuthConfigError,
    AdminNotFoundError,
    AmbiguousRecordError,
    InvalidTransitionError,
)

__all__ = [
    # Interfaces
    "IAdminAuthService",
    "IOTPDelivery",
    # Models
    "AdminIdentity",
    "AdminRole",
    "AuthStep",
    "EmailVerification",
    "FlowError",
    "FlowResult",
    "LoginFailure",
    "LoginResult",
    "OTPRecord",
    # Exceptions
    "AdminAuthError",
    "AdminAuthConfigError",
    "AdminNotFoundError",
    "AmbiguousRecordError",
    "InvalidTransitionError",
]
