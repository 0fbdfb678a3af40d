"""
Shared infrastructure for the Prime Portal backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- repository: Base class for Supabase-backed repositories
- exceptions: Base exception classes
- clock: Injectable time source

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, get_supabase_auth_client, reset_client_cache
from .exceptions import (
    PortalError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    StorageError,
    ExternalServiceError,
)
from .clock import Clock, utc_now

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_supabase_auth_client",
    "reset_client_cache",
    "PortalError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "StorageError",
    "ExternalServiceError",
    "Clock",
    "utc_now",
]
