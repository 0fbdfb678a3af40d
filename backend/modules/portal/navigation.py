"""
Landing routes and role mapping.

Fixed tables shared by the admin login flow, the role switcher and logout.
"""

from typing import Callable, Optional

from modules.admin_auth.models import AdminRole
from modules.sessions.models import Role

Navigator = Callable[[str], None]

CLIENT_DASHBOARD = "/dashboard"
ADMIN_DASHBOARD = "/admin/dashboard"
SALES_DASHBOARD = "/admin/sales/dashboard"
SUPPORT_DASHBOARD = "/admin/support/dashboard"
CLIENT_LOGIN = "/login"
ADMIN_LOGIN = "/admin/login"

ROLE_LANDING_ROUTES: dict[Role, str] = {
    Role.CLIENT: CLIENT_DASHBOARD,
    Role.ADMIN: ADMIN_DASHBOARD,
    Role.SALES: SALES_DASHBOARD,
    Role.SUPPORT: SUPPORT_DASHBOARD,
}

ADMIN_LANDING_ROUTES: dict[str, str] = {
    AdminRole.SUPER_ADMIN.value: ADMIN_DASHBOARD,
    AdminRole.SALES.value: SALES_DASHBOARD,
    AdminRole.SUPPORT.value: SUPPORT_DASHBOARD,
}

ADMIN_SESSION_ROLES: dict[str, Role] = {
    AdminRole.SUPER_ADMIN.value: Role.ADMIN,
    AdminRole.SALES.value: Role.SALES,
    AdminRole.SUPPORT.value: Role.SUPPORT,
}


def landing_route_for_role(role: Role) -> str:
    return ROLE_LANDING_ROUTES[role]


def landing_route_for_admin(admin_role: Optional[str]) -> str:
    """Dashboard for an admin_users role; unknown roles land on the admin dashboard."""
    return ADMIN_LANDING_ROUTES.get(admin_role or "", ADMIN_DASHBOARD)


def session_role_for_admin(admin_role: Optional[str]) -> Role:
    """Session scope an admin login is stored under; unknown roles use admin."""
    return ADMIN_SESSION_ROLES.get(admin_role or "", Role.ADMIN)


def logout_route_for_role(role: Role) -> str:
    return CLIENT_LOGIN if role == Role.CLIENT else ADMIN_LOGIN


class RouteRecorder:
    """
    Navigator that remembers the most recently requested route.

    The API has no browser to redirect, so it records the route and
    returns it to the client as redirect_to.
    """

    def __init__(self) -> None:
        self.last: Optional[str] = None

    def __call__(self, route: str) -> None:
        self.last = route
