"""
Supabase Auth identity provider.

Wraps ``client.auth`` and converts supabase-auth errors into portal
exceptions keyed on the structured error code, never on message text.
"""

import logging
from typing import Any, Optional

import httpx
from supabase import AuthError, Client

from shared.log_utils import redact_email

from .exceptions import IdentityNotFoundError, IdentityProviderError
from .interfaces import IIdentityProvider
from .models import AuthSession

logger = logging.getLogger(__name__)

# Supabase Auth error code for an unknown email or a wrong password
INVALID_CREDENTIALS_CODE = "invalid_credentials"


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    The client passed in holds the signed-in session, so each browsing
    context should get its own client (see get_supabase_auth_client).
    """

    def __init__(self, client: Client):
        self._client = client

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            if getattr(e, "code", None) == INVALID_CREDENTIALS_CODE:
                raise IdentityNotFoundError(email) from e
            raise IdentityProviderError(
                f"Sign-in failed: {e.message}",
                operation="sign_in_with_password",
                provider_code=getattr(e, "code", None),
            ) from e
        except httpx.HTTPError as e:
            raise IdentityProviderError(
                f"Identity provider unreachable: {e}",
                operation="sign_in_with_password",
            ) from e

        session = response.session
        if session is None or response.user is None:
            raise IdentityProviderError(
                "Sign-in returned no session",
                operation="sign_in_with_password",
            )

        logger.info(f"Signed in {redact_email(email)}")
        return AuthSession(
            user=response.user.model_dump(mode="json"),
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
        )

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[dict[str, Any]]:
        credentials: dict[str, Any] = {"email": email, "password": password}
        if metadata:
            credentials["options"] = {"data": metadata}

        try:
            response = self._client.auth.sign_up(credentials)
        except AuthError as e:
            raise IdentityProviderError(
                f"Sign-up failed: {e.message}",
                operation="sign_up",
                provider_code=getattr(e, "code", None),
            ) from e
        except httpx.HTTPError as e:
            raise IdentityProviderError(
                f"Identity provider unreachable: {e}",
                operation="sign_up",
            ) from e

        logger.info(f"Provisioned identity for {redact_email(email)}")
        if response.user is None:
            return None
        return response.user.model_dump(mode="json")

    async def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except AuthError as e:
            raise IdentityProviderError(
                f"Sign-out failed: {e.message}",
                operation="sign_out",
                provider_code=getattr(e, "code", None),
            ) from e
        except httpx.HTTPError as e:
            raise IdentityProviderError(
                f"Identity provider unreachable: {e}",
                operation="sign_out",
            ) from e

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        try:
            self._client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except AuthError as e:
            raise IdentityProviderError(
                f"Password reset failed: {e.message}",
                operation="reset_password_for_email",
                provider_code=getattr(e, "code", None),
            ) from e
        except httpx.HTTPError as e:
            raise IdentityProviderError(
                f"Identity provider unreachable: {e}",
                operation="reset_password_for_email",
            ) from e

        logger.info(f"Requested password reset for {redact_email(email)}")

    async def update_password(self, password: str) -> None:
        try:
            self._client.auth.update_user({"password": password})
        except AuthError as e:
            raise IdentityProviderError(
                f"Password update failed: {e.message}",
                operation="update_password",
                provider_code=getattr(e, "code", None),
            ) from e
        except httpx.HTTPError as e:
            raise IdentityProviderError(
                f"Identity provider unreachable: {e}",
                operation="update_password",
            ) from e
