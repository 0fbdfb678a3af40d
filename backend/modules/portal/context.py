"""
Browsing context state.

A PortalContext owns everything one browser holds: the per-role session
store and the two identity contexts (client and admin). It starts empty and
is discarded when the browsing context goes away; nothing here is global.
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from modules.admin_auth.models import AdminIdentity
from modules.sessions.models import Role
from modules.sessions.service import SessionStore

from .models import ClientIdentity
from .navigation import ADMIN_SESSION_ROLES, logout_route_for_role

T = TypeVar("T")


class IdentityContext(Generic[T]):
    """Holds the identity currently signed in for one side of the portal."""

    def __init__(self) -> None:
        self._current: Optional[T] = None

    @property
    def current(self) -> Optional[T]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def set(self, identity: T) -> None:
        self._current = identity

    def clear(self) -> None:
        self._current = None


class PortalContext:
    """State of a single browsing context."""

    def __init__(
        self,
        context_id: str,
        sessions: SessionStore,
        created_at: Optional[datetime] = None,
    ) -> None:
        self.context_id = context_id
        self.sessions = sessions
        self.client: IdentityContext[ClientIdentity] = IdentityContext()
        self.admin: IdentityContext[AdminIdentity] = IdentityContext()
        self.created_at = created_at

    def current_role(self) -> Optional[Role]:
        """
        Role the browsing context is currently acting as.

        Derived from the identity contexts, not from the session store:
        a known admin role wins, then a signed-in client.
        """
        admin = self.admin.current
        if admin is not None and admin.role in ADMIN_SESSION_ROLES:
            return ADMIN_SESSION_ROLES[admin.role]
        if self.client.current is not None:
            return Role.CLIENT
        return None

    def logout(self, role: Role) -> str:
        """
        Drop the session for a role and the matching identity context.

        Returns:
            The login route to send the browser to.
        """
        self.sessions.clear_session(role)

        if role == Role.CLIENT:
            self.client.clear()
        else:
            admin = self.admin.current
            if admin is not None and ADMIN_SESSION_ROLES.get(admin.role, Role.ADMIN) == role:
                self.admin.clear()

        return logout_route_for_role(role)
