"""
Admin authentication module interfaces.

The login flow and API depend on IAdminAuthService, not the concrete
implementation. IOTPDelivery is the outbound channel for issued codes.
"""

from typing import Protocol, runtime_checkable

from .models import EmailVerification, LoginResult


@runtime_checkable
class IOTPDelivery(Protocol):
    """Channel that gets an issued code to the admin."""

    async def deliver(self, email: str, code: str) -> bool:
        """
        Send the code to the email address.

        Returns:
            True if the channel accepted the message
        """
        ...


@runtime_checkable
class IAdminAuthService(Protocol):
    """
    Interface for admin email + OTP authentication.

    None of these methods raise for expected failures; they report them
    through their return values.
    """

    async def verify_admin_email(self, email: str) -> EmailVerification:
        """
        Check whether an email belongs to a provisioned admin.

        Not-found and lookup errors both yield valid=False so callers
        cannot tell registered emails from transient failures.
        """
        ...

    async def send_otp_email(self, email: str) -> bool:
        """
        Issue a fresh code for the email, replacing any previous one.

        Returns:
            True once the code is persisted, False if persistence failed
        """
        ...

    async def verify_otp(self, email: str, code: str) -> bool:
        """
        Check a submitted code against the stored one.

        Expired codes are rejected but not deleted.
        """
        ...

    async def login_admin_with_otp(self, email: str, code: str) -> LoginResult:
        """
        Redeem a code and establish the identity-provider session.

        On success the code is consumed and last_login is updated.
        """
        ...

    async def logout_admin(self) -> bool:
        """
        End the identity-provider session.

        Returns:
            True on success, False if the provider call failed
        """
        ...
