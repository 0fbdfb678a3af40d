"""
Two-step admin login flow.

    EMAIL --submit_email--> OTP --submit_otp--> COMPLETE
      ^                      |  \
      +-----back_to_email----+   resend_otp (stays in OTP)

Failures never move the flow: a rejected email stays in EMAIL, a rejected
or failed code stays in OTP and can be retried or re-sent.
"""

import logging
from typing import Optional

from modules.portal.context import PortalContext
from modules.portal.navigation import (
    Navigator,
    landing_route_for_admin,
    session_role_for_admin,
)

from .exceptions import InvalidTransitionError
from .interfaces import IAdminAuthService
from .models import AuthStep, FlowError, FlowResult, LoginFailure
from .service import OTP_LENGTH

logger = logging.getLogger(__name__)


class AdminAuthFlow:
    """
    Login state machine for one browsing context.

    The email is expected to be syntactically valid already; the code is
    checked for length here because the step must not call the backend
    with anything but a 6-character code.
    """

    def __init__(
        self,
        service: IAdminAuthService,
        portal: PortalContext,
        navigate: Optional[Navigator] = None,
    ):
        self._service = service
        self._portal = portal
        self._navigate = navigate
        self._step = AuthStep.EMAIL
        self._pending_email: Optional[str] = None
        self._pending_role: Optional[str] = None

    @property
    def step(self) -> AuthStep:
        return self._step

    @property
    def pending_email(self) -> Optional[str]:
        return self._pending_email

    @property
    def pending_role(self) -> Optional[str]:
        return self._pending_role

    async def submit_email(self, email: str) -> FlowResult:
        self._require(AuthStep.EMAIL, "submit an email")

        verification = await self._service.verify_admin_email(email)
        if not verification.valid:
            return self._failure(
                FlowError.UNAUTHORIZED,
                "Invalid email. Only admin staff can access this panel",
            )

        self._pending_email = email
        self._pending_role = verification.role

        if not await self._service.send_otp_email(email):
            return self._failure(
                FlowError.DELIVERY_FAILED,
                "Failed to send OTP. Please try again later",
            )

        self._step = AuthStep.OTP
        return FlowResult(step=self._step, success=True, message="OTP sent to your email")

    async def resend_otp(self) -> FlowResult:
        """Issue a new code; any earlier code for the email stops working."""
        self._require(AuthStep.OTP, "resend a code")

        if not await self._service.send_otp_email(self._pending_email):
            return self._failure(
                FlowError.DELIVERY_FAILED,
                "Failed to resend OTP. Please try again later",
            )
        return FlowResult(step=self._step, success=True, message="OTP resent to your email")

    async def submit_otp(self, code: str) -> FlowResult:
        self._require(AuthStep.OTP, "submit a code")

        if len(code) != OTP_LENGTH:
            return self._failure(FlowError.INVALID_INPUT, "OTP must be 6 characters")

        result = await self._service.login_admin_with_otp(self._pending_email, code)
        if not result.success:
            error = (
                FlowError.VERIFICATION_FAILED
                if result.failure == LoginFailure.INVALID_OTP
                else FlowError.LOGIN_FAILED
            )
            return self._failure(error, result.message)

        admin = result.admin
        auth_session = result.auth_session
        self._portal.sessions.store_session(
            session_role_for_admin(admin.role),
            auth_session.user,
            auth_session.access_token,
            auth_session.refresh_token,
            auth_session.expires_in,
        )
        self._portal.admin.set(admin)

        route = landing_route_for_admin(admin.role)
        self._step = AuthStep.COMPLETE
        self._pending_role = admin.role
        if self._navigate is not None:
            self._navigate(route)

        return FlowResult(
            step=self._step,
            success=True,
            message="Authentication successful",
            redirect_to=route,
        )

    def back_to_email(self) -> FlowResult:
        """Return to the email step. The issued code stays valid."""
        self._require(AuthStep.OTP, "go back to the email step")
        self._step = AuthStep.EMAIL
        return FlowResult(step=self._step, success=True, message="Enter your admin email")

    def reset(self) -> None:
        """Start over from the email step, e.g. after logout."""
        self._step = AuthStep.EMAIL
        self._pending_email = None
        self._pending_role = None

    def _require(self, step: AuthStep, action: str) -> None:
        if self._step != step:
            raise InvalidTransitionError(action, self._step.value)

    def _failure(self, error: FlowError, message: str) -> FlowResult:
        logger.debug(f"Admin login flow stayed in {self._step.value}: {error.value}")
        return FlowResult(step=self._step, success=False, message=message, error=error)
