"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Shared collaborators (repositories, OTP delivery) are
created once; everything scoped to a browsing context is built by
build_context() and kept in the context registry.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from modules.admin_auth.flow import AdminAuthFlow
from modules.admin_auth.service import AdminAuthService
from modules.portal.client_auth import ClientAuthService
from modules.portal.context import PortalContext
from modules.portal.navigation import RouteRecorder
from modules.portal.registry import PortalContextRegistry
from modules.portal.switcher import RoleSwitcher, SessionIndicator
from modules.sessions.interfaces import IKeyValueStorage
from modules.sessions.service import SessionStore
from modules.sessions.storage import JsonFileStorage, MemoryStorage
from shared.clock import utc_now
from shared.config import Settings, get_settings
from shared.exceptions import StorageError

# Type checking imports for interfaces (avoids import cost at startup)
if TYPE_CHECKING:
    from modules.admin_auth.interfaces import IOTPDelivery
    from modules.admin_auth.repository import AdminUserRepository, OTPRepository
    from modules.identity.interfaces import IIdentityProvider
    from modules.portal.repository import ClientProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class BrowsingContext:
    """Everything the API keeps for one browsing context."""

    portal: PortalContext
    navigator: RouteRecorder
    admin_auth: AdminAuthService
    admin_flow: AdminAuthFlow
    client_auth: ClientAuthService
    switcher: RoleSwitcher
    indicator: SessionIndicator
    storage: IKeyValueStorage


class ServiceContainer:
    """
    Container for all service instances.

    Shared services are created lazily on first access and cached.
    Tests pass their own identity factory and repositories to avoid
    touching Supabase. Use reset() to drop everything.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        identity_factory: "Optional[Callable[[], IIdentityProvider]]" = None,
        admin_users: "Optional[AdminUserRepository]" = None,
        otps: "Optional[OTPRepository]" = None,
        otp_delivery: "Optional[IOTPDelivery]" = None,
        client_profiles: "Optional[ClientProfileRepository]" = None,
    ) -> None:
        self._settings = settings
        self._identity_factory = identity_factory
        self._admin_users = admin_users
        self._otps = otps
        self._otp_delivery = otp_delivery
        self._client_profiles = client_profiles
        self._contexts: "PortalContextRegistry[BrowsingContext] | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def admin_users(self) -> "AdminUserRepository":
        """Get the admin_users repository."""
        if self._admin_users is None:
            from modules.admin_auth.repository import AdminUserRepository
            from shared.database import get_supabase_client
            self._admin_users = AdminUserRepository(get_supabase_client())
        return self._admin_users

    @property
    def otps(self) -> "OTPRepository":
        """Get the admin_auth_otp repository."""
        if self._otps is None:
            from modules.admin_auth.repository import OTPRepository
            from shared.database import get_supabase_client
            self._otps = OTPRepository(get_supabase_client())
        return self._otps

    @property
    def client_profiles(self) -> "ClientProfileRepository":
        """Get the clients table repository."""
        if self._client_profiles is None:
            from modules.portal.repository import ClientProfileRepository
            from shared.database import get_supabase_client
            self._client_profiles = ClientProfileRepository(get_supabase_client())
        return self._client_profiles

    @property
    def otp_delivery(self) -> "IOTPDelivery":
        if self._otp_delivery is None:
            from modules.admin_auth.delivery import LoggingOTPDelivery
            self._otp_delivery = LoggingOTPDelivery()
        return self._otp_delivery

    @property
    def contexts(self) -> "PortalContextRegistry[BrowsingContext]":
        """Get the browsing context registry."""
        if self._contexts is None:
            self._contexts = PortalContextRegistry(
                factory=self.build_context,
                idle_ttl=timedelta(seconds=self.settings.context_idle_ttl_seconds),
                sweep_interval=timedelta(seconds=self.settings.context_sweep_interval_seconds),
                on_evict=self._teardown_context,
            )
        return self._contexts

    def new_identity_provider(self) -> "IIdentityProvider":
        """Identity provider with its own Supabase Auth client."""
        if self._identity_factory is not None:
            return self._identity_factory()
        from modules.identity.service import SupabaseIdentityProvider
        from shared.database import get_supabase_auth_client
        return SupabaseIdentityProvider(get_supabase_auth_client())

    def build_context(self, context_id: str) -> BrowsingContext:
        """Create the state for a browsing context seen for the first time."""
        settings = self.settings
        storage: IKeyValueStorage
        if settings.session_storage_dir:
            storage = JsonFileStorage(Path(settings.session_storage_dir) / f"{context_id}.json")
        else:
            storage = MemoryStorage()

        sessions = SessionStore(storage, namespace=settings.session_namespace)
        portal = PortalContext(context_id, sessions, created_at=utc_now())
        identity = self.new_identity_provider()
        navigator = RouteRecorder()

        admin_auth = AdminAuthService(
            admin_users=self.admin_users,
            otps=self.otps,
            identity=identity,
            delivery=self.otp_delivery,
            admin_password=settings.admin_default_password,
        )
        switcher = RoleSwitcher(portal, navigator)
        indicator = SessionIndicator(portal)
        switcher.mount()
        indicator.mount()

        return BrowsingContext(
            portal=portal,
            navigator=navigator,
            admin_auth=admin_auth,
            admin_flow=AdminAuthFlow(admin_auth, portal, navigator),
            client_auth=ClientAuthService(
                identity,
                portal,
                profiles=self.client_profiles,
                reset_redirect_url=settings.password_reset_url,
            ),
            switcher=switcher,
            indicator=indicator,
            storage=storage,
        )

    def _teardown_context(self, context: BrowsingContext) -> None:
        if isinstance(context.storage, JsonFileStorage):
            try:
                context.storage.delete_file()
            except StorageError as e:
                logger.warning(f"Could not remove sessions of {context.portal.context_id}: {e.message}")

    def reset(self) -> None:
        """
        Reset all cached services and browsing contexts.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        if self._contexts is not None:
            self._contexts.clear()
        self._contexts = None
        self._admin_users = None
        self._otps = None
        self._otp_delivery = None
        self._client_profiles = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None
