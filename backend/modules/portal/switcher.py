"""
Role switcher and active-session indicator.

Both read the session store by polling: a session stored or cleared
elsewhere becomes visible here within one poll interval. A change of the
signed-in client or admin identity forces an immediate re-read.
"""

import time
from typing import Callable, Optional

from modules.sessions.models import Role

from .context import PortalContext
from .models import RoleOption
from .navigation import Navigator, landing_route_for_role

ROLE_LABELS: dict[Role, str] = {
    Role.CLIENT: "Client",
    Role.ADMIN: "Admin",
    Role.SALES: "Sales",
    Role.SUPPORT: "Support",
}


class _ActiveRolesPoller:
    POLL_INTERVAL_SECONDS: float = 10.0

    def __init__(
        self,
        portal: PortalContext,
        monotonic: Optional[Callable[[], float]] = None,
    ) -> None:
        self._portal = portal
        self._monotonic = monotonic or time.monotonic
        self._active_roles: list[Role] = []
        self._last_refresh: Optional[float] = None
        self._identity_key: tuple = ()

    @property
    def active_roles(self) -> list[Role]:
        return list(self._active_roles)

    def mount(self) -> None:
        """Initial read."""
        self.refresh()

    def refresh(self) -> None:
        self._active_roles = self._portal.sessions.get_active_roles()
        self._last_refresh = self._monotonic()
        self._identity_key = self._current_identity_key()

    def tick(self) -> bool:
        """
        Re-read the store if the poll interval elapsed or the signed-in
        identities changed.

        Returns:
            True if a refresh happened
        """
        if (
            self._last_refresh is None
            or self._monotonic() - self._last_refresh >= self.POLL_INTERVAL_SECONDS
            or self._identity_key != self._current_identity_key()
        ):
            self.refresh()
            return True
        return False

    def _current_identity_key(self) -> tuple:
        client = self._portal.client.current
        admin = self._portal.admin.current
        return (
            client.id if client is not None else None,
            (admin.email, admin.role) if admin is not None else None,
        )


class RoleSwitcher(_ActiveRolesPoller):
    """Lists active roles and moves the browsing context between them."""

    POLL_INTERVAL_SECONDS = 10.0

    def __init__(
        self,
        portal: PortalContext,
        navigate: Navigator,
        monotonic: Optional[Callable[[], float]] = None,
    ) -> None:
        super().__init__(portal, monotonic)
        self._navigate = navigate

    def current_role(self) -> Optional[Role]:
        return self._portal.current_role()

    def is_visible(self) -> bool:
        """Hidden with no active roles, or when the only one is already current."""
        if not self._active_roles:
            return False
        if len(self._active_roles) == 1 and self._active_roles[0] == self.current_role():
            return False
        return True

    def options(self) -> list[RoleOption]:
        current = self.current_role()
        options = []
        for role in self._active_roles:
            is_active = role == current
            options.append(
                RoleOption(
                    role=role,
                    label=ROLE_LABELS[role],
                    is_active=is_active,
                    display_name=self._display_name(role) if is_active else None,
                )
            )
        return options

    def switch_to_role(self, role: Role) -> bool:
        """
        Navigate to the landing route of a role.

        Returns:
            False without navigating if the role is already current
        """
        if self.current_role() == role:
            return False
        self._navigate(landing_route_for_role(role))
        return True

    def _display_name(self, role: Role) -> str:
        if role == Role.CLIENT:
            client = self._portal.client.current
            return (client.name if client else "") or "Client User"
        admin = self._portal.admin.current
        return (admin.name if admin else "") or "Admin User"


class SessionIndicator(_ActiveRolesPoller):
    """Badge with the number of active roles, shown when there are several."""

    POLL_INTERVAL_SECONDS = 5.0

    @property
    def count(self) -> int:
        return len(self._active_roles)

    def is_visible(self) -> bool:
        return self.count > 1
