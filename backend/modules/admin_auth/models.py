"""
Admin authentication data models.

These models cover the admin_users and admin_auth_otp tables, the results
returned by the admin auth service, and the state of the two-step login flow.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from modules.identity.models import AuthSession


class AdminRole(str, Enum):
    """Privileged roles provisioned in admin_users."""

    SUPER_ADMIN = "super_admin"
    SALES = "sales"
    SUPPORT = "support"


class AdminIdentity(BaseModel):
    """
    Row from admin_users.

    role is kept as the stored string: rows are provisioned outside this
    service and may carry roles the portal does not know about.
    """

    id: Optional[str] = Field(None, description="Row ID (UUID)")
    email: str = Field(..., description="Admin email, unique")
    name: str = Field(default="", description="Display name")
    role: str = Field(..., description="Privileged role")
    permissions: list[str] = Field(default_factory=list)
    profile_image: Optional[str] = Field(None, description="Avatar URL")
    last_login: Optional[datetime] = Field(None, description="Last successful login")
    created_at: Optional[datetime] = Field(None, description="Provisioning time")


class OTPRecord(BaseModel):
    """Row from admin_auth_otp. At most one exists per email."""

    email: str = Field(..., description="Email the code was issued to")
    code: str = Field(..., description="6-digit numeric code")
    expires_at: datetime = Field(..., description="Absolute expiry instant")

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class EmailVerification(BaseModel):
    """Outcome of checking an email against admin_users."""

    valid: bool
    role: Optional[str] = None


class LoginFailure(str, Enum):
    """Why an OTP login did not complete."""

    INVALID_OTP = "invalid_otp"        # Wrong, expired or missing code
    SESSION_FAILED = "session_failed"  # Any later step failed


class LoginResult(BaseModel):
    """Outcome of login_admin_with_otp."""

    success: bool
    message: str
    failure: Optional[LoginFailure] = None
    admin: Optional[AdminIdentity] = None
    auth_session: Optional[AuthSession] = None


class AuthStep(str, Enum):
    """States of the admin login flow."""

    EMAIL = "email"
    OTP = "otp"
    COMPLETE = "complete"


class FlowError(str, Enum):
    """Failure kinds surfaced by the admin login flow."""

    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    DELIVERY_FAILED = "delivery_failed"
    VERIFICATION_FAILED = "verification_failed"
    LOGIN_FAILED = "login_failed"


class FlowResult(BaseModel):
    """Result of a single flow transition."""

    step: AuthStep
    success: bool
    message: str
    error: Optional[FlowError] = None
    redirect_to: Optional[str] = None


class EmailSubmission(BaseModel):
    """Request body for the email step."""

    email: EmailStr


class OTPSubmission(BaseModel):
    """Request body for the code step."""

    otp: str = Field(..., min_length=6, max_length=6, description="6-character code")
