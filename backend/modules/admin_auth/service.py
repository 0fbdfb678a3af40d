"""
Admin authentication service implementation.

Verifies admin emails against admin_users, issues and redeems one-time
codes stored in admin_auth_otp, and signs the admin in to Supabase Auth.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from shared.clock import Clock, utc_now
from shared.exceptions import PortalError
from shared.log_utils import redact_email
from modules.identity.exceptions import IdentityNotFoundError
from modules.identity.interfaces import IIdentityProvider
from modules.identity.models import AuthSession

from .exceptions import AdminAuthConfigError, AdminNotFoundError
from .interfaces import IAdminAuthService, IOTPDelivery
from .models import (
    AdminIdentity,
    EmailVerification,
    LoginFailure,
    LoginResult,
    OTPRecord,
)
from .repository import AdminUserRepository, OTPRepository

logger = logging.getLogger(__name__)

# Fixed contracts of the admin login, not per-call options
OTP_LENGTH = 6
OTP_TTL = timedelta(minutes=10)

LOGIN_FAILED_MESSAGE = "Authentication failed. Please try again."


def generate_otp_code() -> str:
    """Uniform 6-digit code in [100000, 999999]."""
    return str(100000 + secrets.randbelow(900000))


class AdminAuthService(IAdminAuthService):
    """
    Implementation of the admin authentication service.

    Table access goes through the repositories; session establishment goes
    through the identity provider bound to the caller's browsing context.
    """

    def __init__(
        self,
        admin_users: AdminUserRepository,
        otps: OTPRepository,
        identity: IIdentityProvider,
        delivery: IOTPDelivery,
        admin_password: str,
        clock: Optional[Clock] = None,
    ):
        self._admin_users = admin_users
        self._otps = otps
        self._identity = identity
        self._delivery = delivery
        self._admin_password = admin_password
        self._clock = clock or utc_now

    async def verify_admin_email(self, email: str) -> EmailVerification:
        try:
            admin = self._admin_users.get_by_email(email)
        except PortalError as e:
            logger.warning(f"Admin lookup failed for {redact_email(email)}: {e.message}")
            return EmailVerification(valid=False)

        if admin is None:
            logger.info(f"Rejected non-admin email {redact_email(email)}")
            return EmailVerification(valid=False)

        return EmailVerification(valid=True, role=admin.role)

    async def send_otp_email(self, email: str) -> bool:
        code = generate_otp_code()
        record = OTPRecord(email=email, code=code, expires_at=self._clock() + OTP_TTL)

        try:
            self._otps.delete_for_email(email)
            self._otps.insert(record)
        except PortalError as e:
            logger.warning(f"Could not store OTP for {redact_email(email)}: {e.message}")
            return False

        # Delivery is fire-and-forget once the code is stored
        try:
            accepted = await self._delivery.deliver(email, code)
        except Exception as e:
            logger.warning(f"OTP delivery to {redact_email(email)} failed: {e}")
        else:
            if not accepted:
                logger.warning(f"OTP delivery to {redact_email(email)} was not accepted")

        return True

    async def verify_otp(self, email: str, code: str) -> bool:
        try:
            record = self._otps.get_for_email(email)
        except PortalError as e:
            logger.warning(f"OTP lookup failed for {redact_email(email)}: {e.message}")
            return False

        if record is None:
            return False
        if record.is_expired(self._clock()):
            return False

        return secrets.compare_digest(record.code.encode(), code.encode())

    async def login_admin_with_otp(self, email: str, code: str) -> LoginResult:
        if not await self.verify_otp(email, code):
            return LoginResult(
                success=False,
                message="Invalid or expired OTP",
                failure=LoginFailure.INVALID_OTP,
            )

        # Code is consumed only after every earlier step succeeded
        try:
            admin = self._admin_users.get_by_email(email)
            if admin is None:
                raise AdminNotFoundError(email)

            auth_session = await self._establish_session(admin)
            self._admin_users.touch_last_login(email, self._clock())
            self._otps.delete_for_email(email)
        except PortalError as e:
            logger.warning(f"OTP login failed for {redact_email(email)}: {e.code} {e.message}")
            return LoginResult(
                success=False,
                message=LOGIN_FAILED_MESSAGE,
                failure=LoginFailure.SESSION_FAILED,
            )

        logger.info(f"Admin {redact_email(email)} signed in as {admin.role}")
        return LoginResult(
            success=True,
            message="Login successful",
            admin=admin,
            auth_session=auth_session,
        )

    async def logout_admin(self) -> bool:
        try:
            await self._identity.sign_out()
        except PortalError as e:
            logger.warning(f"Admin sign-out failed: {e.message}")
            return False
        return True

    async def _establish_session(self, admin: AdminIdentity) -> AuthSession:
        """
        Sign the admin in, provisioning the identity on first login.

        IdentityNotFound provisions and retries exactly once; every other
        provider error propagates.
        """
        if not self._admin_password:
            raise AdminAuthConfigError("admin_default_password")

        try:
            return await self._identity.sign_in_with_password(admin.email, self._admin_password)
        except IdentityNotFoundError:
            logger.info(f"No identity for {redact_email(admin.email)}, provisioning")

        await self._identity.sign_up(
            admin.email,
            self._admin_password,
            metadata={"role": admin.role},
        )
        return await self._identity.sign_in_with_password(admin.email, self._admin_password)
