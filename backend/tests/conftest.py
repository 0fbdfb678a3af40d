"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import ServiceContainer, get_container, reset_container
from modules.admin_auth.interfaces import IOTPDelivery
from modules.admin_auth.models import AdminIdentity, OTPRecord
from modules.admin_auth.service import AdminAuthService
from modules.identity.exceptions import IdentityNotFoundError, IdentityProviderError
from modules.identity.interfaces import IIdentityProvider
from modules.identity.models import AuthSession
from modules.portal.context import PortalContext
from modules.portal.models import ClientProfile
from modules.sessions.service import SessionStore
from modules.sessions.storage import MemoryStorage
from shared.config import Settings, get_settings
from shared.exceptions import PortalError


class FakeClock:
    """Controllable UTC clock for expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeMonotonic:
    """Controllable monotonic clock for polling tests."""

    def __init__(self):
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and cached settings around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock frozen at a fixed instant."""
    return FakeClock()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    """Provide a controllable monotonic clock."""
    return FakeMonotonic()


# =============================================================================
# In-memory collaborators for the admin login and identity provider
# =============================================================================


class FakeAdminUsers:
    """Stands in for AdminUserRepository."""

    def __init__(self):
        self.rows: dict[str, AdminIdentity] = {}
        self.touched: list[tuple[str, datetime]] = []
        self.error: PortalError | None = None

    def add(self, email: str, role: str, name: str = "") -> AdminIdentity:
        admin = AdminIdentity(id=f"admin-{len(self.rows) + 1}", email=email, name=name, role=role)
        self.rows[email] = admin
        return admin

    def get_by_email(self, email: str):
        if self.error is not None:
            raise self.error
        return self.rows.get(email)

    def touch_last_login(self, email: str, at: datetime) -> None:
        if self.error is not None:
            raise self.error
        self.touched.append((email, at))


class FakeOTPs:
    """Stands in for OTPRepository, one record per email."""

    def __init__(self):
        self.records: dict[str, OTPRecord] = {}
        self.error: PortalError | None = None

    def get_for_email(self, email: str):
        if self.error is not None:
            raise self.error
        return self.records.get(email)

    def delete_for_email(self, email: str) -> None:
        if self.error is not None:
            raise self.error
        self.records.pop(email, None)

    def insert(self, record: OTPRecord) -> None:
        if self.error is not None:
            raise self.error
        self.records[record.email] = record


class FakeClientProfiles:
    """In-memory stand-in for ClientProfileRepository."""

    def __init__(self):
        self.rows: list[ClientProfile] = []
        self.error: PortalError | None = None

    def create(self, profile: ClientProfile, at: datetime) -> None:
        if self.error is not None:
            raise self.error
        self.rows.append(profile)


class FakeIdentityProvider(IIdentityProvider):
    """Identity provider that knows a fixed set of email/password pairs."""

    def __init__(self):
        self.accounts: dict[str, str] = {}
        self.metadata: dict[str, dict] = {}
        self.calls: list[str] = []
        self.sign_in_error: PortalError | None = None
        self.sign_up_error: PortalError | None = None
        self.sign_out_error: PortalError | None = None
        self.reset_error: PortalError | None = None
        self.reset_requests: list[tuple[str, str]] = []
        self.signed_in: str | None = None

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        self.calls.append("sign_in")
        if self.sign_in_error is not None:
            raise self.sign_in_error
        if self.accounts.get(email) != password:
            raise IdentityNotFoundError(email)
        self.signed_in = email
        return AuthSession(
            user={"id": f"user-{email}", "email": email, "user_metadata": self.metadata.get(email, {})},
            access_token=f"access-{email}",
            refresh_token=f"refresh-{email}",
            expires_in=3600,
        )

    async def sign_up(self, email: str, password: str, metadata=None):
        self.calls.append("sign_up")
        if self.sign_up_error is not None:
            raise self.sign_up_error
        self.accounts[email] = password
        self.metadata[email] = metadata or {}
        return {"id": f"user-{email}", "email": email, "user_metadata": self.metadata[email]}

    async def sign_out(self) -> None:
        self.calls.append("sign_out")
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self.signed_in = None

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        self.calls.append("reset_password")
        if self.reset_error is not None:
            raise self.reset_error
        self.reset_requests.append((email, redirect_to))

    async def update_password(self, password: str) -> None:
        self.calls.append("update_password")
        if self.signed_in is None:
            raise IdentityProviderError("Auth session missing!", operation="update_password")
        self.accounts[self.signed_in] = password


class RecordingDelivery(IOTPDelivery):
    """OTP delivery that keeps the codes it was asked to send."""

    def __init__(self, accept: bool = True):
        self.sent: list[tuple[str, str]] = []
        self.accept = accept
        self.error: Exception | None = None

    async def deliver(self, email: str, code: str) -> bool:
        self.sent.append((email, code))
        if self.error is not None:
            raise self.error
        return self.accept

    def last_code(self, email: str) -> str:
        return [code for sent_to, code in self.sent if sent_to == email][-1]


ADMIN_PASSWORD = "shared-admin-password"


@pytest.fixture
def admin_users() -> FakeAdminUsers:
    return FakeAdminUsers()


@pytest.fixture
def otps() -> FakeOTPs:
    return FakeOTPs()


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def delivery() -> RecordingDelivery:
    return RecordingDelivery()


@pytest.fixture
def client_profiles() -> FakeClientProfiles:
    return FakeClientProfiles()


@pytest.fixture
def admin_service(admin_users, otps, identity, delivery, clock) -> AdminAuthService:
    """AdminAuthService wired to the in-memory collaborators."""
    return AdminAuthService(
        admin_users=admin_users,
        otps=otps,
        identity=identity,
        delivery=delivery,
        admin_password=ADMIN_PASSWORD,
        clock=clock,
    )


@pytest.fixture
def portal(clock) -> PortalContext:
    """Empty browsing context backed by memory storage."""
    return PortalContext("ctx-test", SessionStore(MemoryStorage(), clock=clock))


@pytest.fixture
def container(admin_users, otps, identity, delivery, client_profiles) -> ServiceContainer:
    """Service container that never touches Supabase."""
    settings = Settings(_env_file=None, admin_default_password=ADMIN_PASSWORD)
    return ServiceContainer(
        settings=settings,
        identity_factory=lambda: identity,
        admin_users=admin_users,
        otps=otps,
        otp_delivery=delivery,
        client_profiles=client_profiles,
    )


@pytest.fixture
def api_client(container):
    """TestClient with the container dependency overridden."""
    app = create_app()
    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def context_headers() -> dict[str, str]:
    """Headers identifying a single browsing context."""
    return {"X-Portal-Context": "browser-context-0001"}
