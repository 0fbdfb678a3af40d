"""
Client account operations.

Password sign-in, registration and password recovery for the client side of
the portal. A successful sign-in records the client session and sets the
client identity context.
"""

import logging
from typing import Optional

from shared.clock import Clock, utc_now
from shared.exceptions import PortalError
from shared.log_utils import redact_email
from modules.identity.exceptions import IdentityNotFoundError, IdentityProviderError
from modules.identity.interfaces import IIdentityProvider
from modules.sessions.models import Role

from .context import PortalContext
from .models import AuthResult, ClientIdentity, ClientProfile
from .navigation import CLIENT_LOGIN, landing_route_for_role
from .repository import ClientProfileRepository

logger = logging.getLogger(__name__)

# Supabase Auth error code for an email that is already registered
USER_EXISTS_CODE = "user_already_exists"


class ClientAuthService:
    """Client authentication for one browsing context."""

    def __init__(
        self,
        identity: IIdentityProvider,
        portal: PortalContext,
        profiles: Optional[ClientProfileRepository] = None,
        reset_redirect_url: str = "",
        clock: Optional[Clock] = None,
    ):
        self._identity = identity
        self._portal = portal
        self._profiles = profiles
        self._reset_redirect_url = reset_redirect_url
        self._clock = clock or utc_now

    async def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            auth_session = await self._identity.sign_in_with_password(email, password)
        except IdentityNotFoundError:
            return AuthResult(success=False, error="Invalid login credentials")
        except PortalError as e:
            logger.warning(f"Client sign-in failed for {redact_email(email)}: {e.message}")
            return AuthResult(success=False, error="An unexpected error occurred")

        self._portal.sessions.store_session(
            Role.CLIENT,
            auth_session.user,
            auth_session.access_token,
            auth_session.refresh_token,
            auth_session.expires_in,
        )
        self._portal.client.set(ClientIdentity.from_user(auth_session.user))

        return AuthResult(success=True, redirect_to=landing_route_for_role(Role.CLIENT))

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        selected_services: Optional[list[str]] = None,
    ) -> AuthResult:
        """
        Create a client account and sign it in.

        A failed profile insert is logged but does not fail registration.
        When the provider will not sign the new account in yet (for example
        while the email is unconfirmed) the result points at the login page.
        """
        try:
            user = await self._identity.sign_up(email, password, {"name": name})
        except IdentityProviderError as e:
            if e.provider_code == USER_EXISTS_CODE:
                return AuthResult(success=False, error="Email already in use")
            logger.warning(f"Client registration failed for {redact_email(email)}: {e.message}")
            return AuthResult(success=False, error="Registration failed")

        if user is not None and self._profiles is not None:
            profile = ClientProfile(
                id=str(user.get("id", "")),
                name=name,
                email=email,
                selected_services=selected_services or [],
            )
            try:
                self._profiles.create(profile, self._clock())
            except PortalError as e:
                logger.warning(f"Could not create client profile for {redact_email(email)}: {e.message}")

        signed_in = await self.sign_in(email, password)
        if signed_in.success:
            return signed_in
        return AuthResult(success=True, redirect_to=CLIENT_LOGIN)

    async def reset_password(self, email: str) -> AuthResult:
        """Ask the provider to email a reset link. Unknown emails look the same."""
        try:
            await self._identity.reset_password_for_email(email, self._reset_redirect_url)
        except PortalError as e:
            logger.warning(f"Password reset failed for {redact_email(email)}: {e.message}")
            return AuthResult(success=False, error="Password reset failed")
        return AuthResult(success=True)

    async def update_password(self, password: str) -> AuthResult:
        """
        Change the signed-in client's password.

        Refused while an admin is signed in, since the provider session is
        shared between both sides of the browsing context.
        """
        if self._portal.admin.is_authenticated:
            return AuthResult(
                success=False,
                error="Sign out of the admin portal before changing your password",
            )
        if not self._portal.sessions.has_valid_session(Role.CLIENT):
            return AuthResult(success=False, error="Sign in to change your password")

        try:
            await self._identity.update_password(password)
        except PortalError as e:
            logger.warning(f"Password update failed: {e.message}")
            return AuthResult(success=False, error="Failed to update password")
        return AuthResult(success=True)

    async def sign_out(self) -> AuthResult:
        """
        Sign out of the identity provider and drop the client session.

        The local session is dropped even if the provider call fails.
        """
        error = None
        try:
            await self._identity.sign_out()
        except PortalError as e:
            logger.warning(f"Client sign-out failed: {e.message}")
            error = "Failed to log out. Please try again."

        route = self._portal.logout(Role.CLIENT)
        return AuthResult(success=error is None, error=error, redirect_to=route)
