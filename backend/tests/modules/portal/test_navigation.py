"""Tests for landing routes and admin role mapping."""

from modules.portal.navigation import (
    RouteRecorder,
    landing_route_for_admin,
    landing_route_for_role,
    logout_route_for_role,
    session_role_for_admin,
)
from modules.sessions.models import Role


class TestRoleRoutes:
    def test_landing_routes(self):
        assert landing_route_for_role(Role.CLIENT) == "/dashboard"
        assert landing_route_for_role(Role.ADMIN) == "/admin/dashboard"
        assert landing_route_for_role(Role.SALES) == "/admin/sales/dashboard"
        assert landing_route_for_role(Role.SUPPORT) == "/admin/support/dashboard"

    def test_logout_routes(self):
        assert logout_route_for_role(Role.CLIENT) == "/login"
        for role in (Role.ADMIN, Role.SALES, Role.SUPPORT):
            assert logout_route_for_role(role) == "/admin/login"


class TestAdminRoles:
    def test_session_roles(self):
        assert session_role_for_admin("super_admin") == Role.ADMIN
        assert session_role_for_admin("sales") == Role.SALES
        assert session_role_for_admin("support") == Role.SUPPORT

    def test_unknown_admin_role_defaults_to_admin(self):
        assert session_role_for_admin("auditor") == Role.ADMIN
        assert session_role_for_admin(None) == Role.ADMIN
        assert landing_route_for_admin("auditor") == "/admin/dashboard"

    def test_admin_landing_routes(self):
        assert landing_route_for_admin("super_admin") == "/admin/dashboard"
        assert landing_route_for_admin("sales") == "/admin/sales/dashboard"
        assert landing_route_for_admin("support") == "/admin/support/dashboard"


class TestRouteRecorder:
    def test_keeps_only_latest_route(self):
        recorder = RouteRecorder()
        assert recorder.last is None

        recorder("/dashboard")
        recorder("/admin/dashboard")

        assert recorder.last == "/admin/dashboard"
