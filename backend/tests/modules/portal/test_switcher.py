"""Tests for the role switcher and session indicator."""

import pytest

from modules.admin_auth.models import AdminIdentity
from modules.portal.models import ClientIdentity
from modules.portal.navigation import RouteRecorder
from modules.portal.switcher import RoleSwitcher, SessionIndicator
from modules.sessions.models import Role


CLIENT = ClientIdentity(id="user-1", email="client@example.com", name="Casey")
SUPER_ADMIN = AdminIdentity(email="root@example.com", role="super_admin", name="Root")


@pytest.fixture
def navigator():
    return RouteRecorder()


@pytest.fixture
def switcher(portal, navigator, monotonic):
    return RoleSwitcher(portal, navigator, monotonic=monotonic)


@pytest.fixture
def indicator(portal, monotonic):
    return SessionIndicator(portal, monotonic=monotonic)


def sign_in_client(portal):
    portal.sessions.store_session(Role.CLIENT, {"id": "user-1"}, "client-token", None, 3600)
    portal.client.set(CLIENT)


def sign_in_admin(portal):
    portal.sessions.store_session(Role.ADMIN, {"id": "admin-1"}, "admin-token", None, 3600)
    portal.admin.set(SUPER_ADMIN)


class TestRoleSwitcher:
    def test_hidden_without_sessions(self, switcher):
        switcher.mount()

        assert switcher.active_roles == []
        assert not switcher.is_visible()
        assert switcher.options() == []

    def test_client_and_admin_listed(self, switcher, portal):
        """Both roles show up; the admin is current and carries the display name."""
        sign_in_client(portal)
        sign_in_admin(portal)
        switcher.mount()

        options = switcher.options()

        assert switcher.is_visible()
        assert [o.role for o in options] == [Role.CLIENT, Role.ADMIN]
        assert [o.label for o in options] == ["Client", "Admin"]
        assert [o.is_active for o in options] == [False, True]
        assert options[0].display_name is None
        assert options[1].display_name == "Root"

    def test_switch_to_current_role_is_noop(self, switcher, portal, navigator):
        sign_in_client(portal)
        sign_in_admin(portal)
        switcher.mount()

        assert switcher.switch_to_role(Role.ADMIN) is False
        assert navigator.last is None

    def test_switch_to_other_role_navigates(self, switcher, portal, navigator):
        sign_in_client(portal)
        sign_in_admin(portal)
        switcher.mount()

        assert switcher.switch_to_role(Role.CLIENT) is True
        assert navigator.last == "/dashboard"

    def test_single_current_role_hidden(self, switcher, portal):
        sign_in_client(portal)
        switcher.mount()

        assert switcher.active_roles == [Role.CLIENT]
        assert not switcher.is_visible()

    def test_single_non_current_role_visible(self, switcher, portal):
        """A session nobody is acting as is still offered."""
        portal.sessions.store_session(Role.SUPPORT, {"id": "admin-2"}, "tok", None)
        switcher.mount()

        assert switcher.is_visible()
        assert switcher.current_role() is None

    def test_display_name_fallbacks(self, switcher, portal):
        portal.sessions.store_session(Role.CLIENT, {"id": "user-2"}, "tok", None)
        portal.client.set(ClientIdentity(id="user-2", email="x@example.com"))
        switcher.mount()

        assert switcher.options()[0].display_name == "Client User"

    def test_admin_display_name_fallback(self, switcher, portal):
        portal.sessions.store_session(Role.SALES, {"id": "admin-3"}, "tok", None)
        portal.admin.set(AdminIdentity(email="s@example.com", role="sales"))
        switcher.mount()

        assert switcher.options()[0].display_name == "Admin User"


class TestPolling:
    def test_change_seen_after_poll_interval(self, switcher, portal, monotonic):
        switcher.mount()
        portal.sessions.store_session(Role.SUPPORT, {"id": "admin-2"}, "tok", None)

        monotonic.advance(9.9)
        assert switcher.tick() is False
        assert switcher.active_roles == []

        monotonic.advance(0.1)
        assert switcher.tick() is True
        assert switcher.active_roles == [Role.SUPPORT]

    def test_identity_change_refreshes_immediately(self, switcher, portal):
        switcher.mount()

        sign_in_client(portal)

        assert switcher.tick() is True
        assert switcher.active_roles == [Role.CLIENT]

    def test_tick_before_mount_refreshes(self, switcher, portal):
        sign_in_client(portal)
        assert switcher.tick() is True
        assert switcher.active_roles == [Role.CLIENT]

    def test_expired_session_drops_on_next_poll(self, switcher, portal, clock, monotonic):
        sign_in_client(portal)
        sign_in_admin(portal)
        switcher.mount()

        clock.advance(hours=2)
        monotonic.advance(10)
        switcher.tick()

        assert switcher.active_roles == []
        assert not switcher.is_visible()


class TestSessionIndicator:
    def test_hidden_with_one_session(self, indicator, portal):
        sign_in_client(portal)
        indicator.mount()

        assert indicator.count == 1
        assert not indicator.is_visible()

    def test_visible_with_several_sessions(self, indicator, portal):
        sign_in_client(portal)
        sign_in_admin(portal)
        indicator.mount()

        assert indicator.count == 2
        assert indicator.is_visible()

    def test_polls_every_five_seconds(self, indicator, portal, monotonic):
        indicator.mount()
        portal.sessions.store_session(Role.SALES, {"id": "a"}, "tok", None)
        portal.sessions.store_session(Role.SUPPORT, {"id": "b"}, "tok", None)

        monotonic.advance(4.9)
        indicator.tick()
        assert indicator.count == 0

        monotonic.advance(0.1)
        indicator.tick()
        assert indicator.count == 2
