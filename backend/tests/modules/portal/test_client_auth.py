"""Tests for client sign-in, registration, password recovery and sign-out."""

import pytest

from shared.exceptions import ExternalServiceError
from modules.identity.exceptions import IdentityProviderError
from modules.admin_auth.models import AdminIdentity
from modules.portal.client_auth import ClientAuthService
from modules.sessions.models import Role


@pytest.fixture
def client_auth(identity, portal):
    identity.accounts["client@example.com"] = "hunter2"
    identity.metadata["client@example.com"] = {"name": "Casey"}
    return ClientAuthService(identity, portal)


RESET_URL = "http://localhost:5173/reset-password"


@pytest.fixture
def accounts(identity, portal, client_profiles, clock):
    """Client service with a profile repository and reset link configured."""
    return ClientAuthService(
        identity,
        portal,
        profiles=client_profiles,
        reset_redirect_url=RESET_URL,
        clock=clock,
    )


class TestSignIn:
    @pytest.mark.asyncio
    async def test_success(self, client_auth, portal):
        result = await client_auth.sign_in("client@example.com", "hunter2")

        assert result.success is True
        assert result.redirect_to == "/dashboard"
        assert portal.sessions.has_valid_session(Role.CLIENT)
        assert portal.client.current.name == "Casey"
        assert portal.current_role() == Role.CLIENT

    @pytest.mark.asyncio
    async def test_bad_credentials(self, client_auth, portal):
        result = await client_auth.sign_in("client@example.com", "wrong")

        assert result.success is False
        assert result.error == "Invalid login credentials"
        assert portal.sessions.get_active_roles() == []

    @pytest.mark.asyncio
    async def test_provider_error(self, client_auth, identity, portal):
        identity.sign_in_error = IdentityProviderError("down", operation="sign_in_with_password")

        result = await client_auth.sign_in("client@example.com", "hunter2")

        assert result.success is False
        assert result.error == "An unexpected error occurred"
        assert portal.client.current is None

    @pytest.mark.asyncio
    async def test_does_not_touch_admin_session(self, client_auth, portal):
        portal.sessions.store_session(Role.ADMIN, {"id": "admin-1"}, "tok", None)

        await client_auth.sign_in("client@example.com", "hunter2")

        assert portal.sessions.get_active_roles() == [Role.CLIENT, Role.ADMIN]


class TestSignOut:
    @pytest.mark.asyncio
    async def test_success(self, client_auth, portal, identity):
        await client_auth.sign_in("client@example.com", "hunter2")

        result = await client_auth.sign_out()

        assert result.success is True
        assert result.redirect_to == "/login"
        assert identity.calls[-1] == "sign_out"
        assert not portal.sessions.has_valid_session(Role.CLIENT)
        assert portal.client.current is None

    @pytest.mark.asyncio
    async def test_provider_failure_still_clears_locally(self, client_auth, portal, identity):
        await client_auth.sign_in("client@example.com", "hunter2")
        identity.sign_out_error = IdentityProviderError("down", operation="sign_out")

        result = await client_auth.sign_out()

        assert result.success is False
        assert result.error == "Failed to log out. Please try again."
        assert result.redirect_to == "/login"
        assert not portal.sessions.has_valid_session(Role.CLIENT)


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_identity_profile_and_session(self, accounts, identity, client_profiles, portal):
        result = await accounts.register("new@example.com", "s3cret!", "Nia", ["web-hosting"])

        assert result.success is True
        assert result.redirect_to == "/dashboard"
        assert identity.metadata["new@example.com"] == {"name": "Nia"}
        profile = client_profiles.rows[0]
        assert profile.id == "user-new@example.com"
        assert profile.name == "Nia"
        assert profile.selected_services == ["web-hosting"]
        assert portal.client.current.name == "Nia"
        assert portal.sessions.has_valid_session(Role.CLIENT)

    @pytest.mark.asyncio
    async def test_existing_email(self, accounts, identity, client_profiles):
        identity.sign_up_error = IdentityProviderError(
            "Sign-up failed: User already registered",
            operation="sign_up",
            provider_code="user_already_exists",
        )

        result = await accounts.register("taken@example.com", "s3cret!", "Nia")

        assert result.success is False
        assert result.error == "Email already in use"
        assert client_profiles.rows == []

    @pytest.mark.asyncio
    async def test_other_provider_failure(self, accounts, identity):
        identity.sign_up_error = IdentityProviderError("Signups not allowed", operation="sign_up")

        result = await accounts.register("new@example.com", "s3cret!", "Nia")

        assert result.success is False
        assert result.error == "Registration failed"

    @pytest.mark.asyncio
    async def test_profile_failure_does_not_block(self, accounts, client_profiles, portal):
        client_profiles.error = ExternalServiceError("insert denied", service="supabase")

        result = await accounts.register("new@example.com", "s3cret!", "Nia")

        assert result.success is True
        assert portal.sessions.has_valid_session(Role.CLIENT)

    @pytest.mark.asyncio
    async def test_unconfirmed_account_goes_to_login(self, accounts, identity, portal):
        identity.sign_in_error = IdentityProviderError(
            "Email not confirmed", operation="sign_in_with_password", provider_code="email_not_confirmed"
        )

        result = await accounts.register("new@example.com", "s3cret!", "Nia")

        assert result.success is True
        assert result.redirect_to == "/login"
        assert portal.sessions.get_active_roles() == []


class TestResetPassword:
    @pytest.mark.asyncio
    async def test_requests_reset_link(self, accounts, identity):
        result = await accounts.reset_password("client@example.com")

        assert result.success is True
        assert identity.reset_requests == [("client@example.com", RESET_URL)]

    @pytest.mark.asyncio
    async def test_provider_failure(self, accounts, identity):
        identity.reset_error = IdentityProviderError("rate limited", operation="reset_password_for_email")

        result = await accounts.reset_password("client@example.com")

        assert result.success is False
        assert result.error == "Password reset failed"


class TestUpdatePassword:
    @pytest.mark.asyncio
    async def test_signed_in_client(self, accounts, identity):
        identity.accounts["client@example.com"] = "hunter2"
        await accounts.sign_in("client@example.com", "hunter2")

        result = await accounts.update_password("n3w-secret")

        assert result.success is True
        assert identity.accounts["client@example.com"] == "n3w-secret"

    @pytest.mark.asyncio
    async def test_requires_client_session(self, accounts, identity):
        result = await accounts.update_password("n3w-secret")

        assert result.success is False
        assert result.error == "Sign in to change your password"
        assert "update_password" not in identity.calls

    @pytest.mark.asyncio
    async def test_refused_while_admin_signed_in(self, accounts, identity, portal):
        identity.accounts["client@example.com"] = "hunter2"
        await accounts.sign_in("client@example.com", "hunter2")
        portal.admin.set(AdminIdentity(id="a1", email="ops@example.com", name="Ops", role="sales"))

        result = await accounts.update_password("n3w-secret")

        assert result.success is False
        assert identity.accounts["client@example.com"] == "hunter2"

    @pytest.mark.asyncio
    async def test_provider_failure(self, accounts, identity, portal):
        portal.sessions.store_session(Role.CLIENT, {"id": "u1"}, "tok", None)

        result = await accounts.update_password("n3w-secret")

        assert result.success is False
        assert result.error == "Failed to update password"
