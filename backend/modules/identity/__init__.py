"""
Identity provider module.

Establishes and ends password-based sessions with Supabase Auth.

Public API:
- IIdentityProvider: Interface for sign-in, sign-up and sign-out
- AuthSession: Session material returned by a sign-in
- IdentityProviderError, IdentityNotFoundError: provider failures
"""

from .interfaces import IIdentityProvider
from .models import AuthSession
from .exceptions import IdentityProviderError, IdentityNotFoundError

__all__ = [
    "IIdentityProvider",
    "AuthSession",
    "IdentityProviderError",
    "IdentityNotFoundError",
]
