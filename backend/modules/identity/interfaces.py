"""
Identity provider interface.

The admin OTP login and the client sign-in both establish sessions through
IIdentityProvider; tests substitute an AsyncMock.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import AuthSession


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for password-based identity provider operations.
    """

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Sign in and return the issued session.

        Raises:
            IdentityNotFoundError: If the provider reports invalid credentials
            IdentityProviderError: For any other provider failure
        """
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[dict[str, Any]]:
        """
        Provision a new identity.

        Returns:
            The created user record, or None if the provider returned none.

        Raises:
            IdentityProviderError: If provisioning fails
        """
        ...

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        """
        Ask the provider to email a password reset link.

        Raises:
            IdentityProviderError: If the provider call fails
        """
        ...

    async def update_password(self, password: str) -> None:
        """
        Change the password of the signed-in identity.

        Raises:
            IdentityProviderError: If there is no session or the call fails
        """
        ...

    async def sign_out(self) -> None:
        """
        End the provider session.

        Raises:
            IdentityProviderError: If the provider call fails
        """
        ...
