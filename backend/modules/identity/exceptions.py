"""
Identity provider exceptions.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ExternalServiceError


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider rejects or fails a request."""

    def __init__(
        self,
        message: str,
        operation: str,
        provider_code: Optional[str] = None,
    ):
        super().__init__(
            message,
            service="supabase_auth",
            code="IDENTITY_PROVIDER_ERROR",
            details={"operation": operation, "provider_code": provider_code},
        )
        self.operation = operation
        self.provider_code = provider_code


class IdentityNotFoundError(AuthenticationError):
    """
    Raised when sign-in fails because no matching identity exists.

    Supabase reports unknown accounts and wrong passwords with the same
    ``invalid_credentials`` code, so callers that provision on demand
    must be prepared for the retry to fail as well.
    """

    def __init__(self, email: str):
        super().__init__(
            "No identity matches these credentials",
            code="IDENTITY_NOT_FOUND",
            details={"email": email},
        )
        self.email = email
