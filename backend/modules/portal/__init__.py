"""
Portal module.

Per-browsing-context state and the account switching built on it.

Public API:
- PortalContext, IdentityContext: browsing context state
- RoleSwitcher, SessionIndicator: polling views over active roles
- ClientAuthService: client sign-in, registration, password recovery, sign-out
- ClientProfileRepository: rows in the clients table
- PortalContextRegistry: server-side map of browsing contexts
- navigation helpers: landing routes and admin role mapping
"""

from .context import IdentityContext, PortalContext
from .client_auth import ClientAuthService
from .models import (
    AuthResult,
    ClientIdentity,
    RoleOption,
    SessionOverview,
)
from .navigation import (
    Navigator,
    RouteRecorder,
    landing_route_for_admin,
    landing_route_for_role,
    session_role_for_admin,
)
from .repository import ClientProfileRepository
from .registry import PortalContextRegistry
from .switcher import RoleSwitcher, SessionIndicator

__all__ = [
    "IdentityContext",
    "PortalContext",
    "ClientAuthService",
    "AuthResult",
    "ClientIdentity",
    "RoleOption",
    "SessionOverview",
    "Navigator",
    "RouteRecorder",
    "landing_route_for_admin",
    "landing_route_for_role",
    "session_role_for_admin",
    "ClientProfileRepository",
    "PortalContextRegistry",
    "RoleSwitcher",
    "SessionIndicator",
]
