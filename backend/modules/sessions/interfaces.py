"""
Sessions module interfaces.

ISessionStore is what the admin auth flow, the client sign-in and the role
switcher depend on. IKeyValueStorage is the durable client-side store the
session store persists into.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from .models import Role, StoredSession


SessionListener = Callable[[Role, Optional[StoredSession]], None]


@runtime_checkable
class IKeyValueStorage(Protocol):
    """
    Durable string key/value storage.

    Implementations raise StorageError when the backing medium fails.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete key. Removing a missing key is not an error."""
        ...


@runtime_checkable
class ISessionStore(Protocol):
    """
    Interface for per-role session bookkeeping.

    All methods are synchronous; none of them raise on storage failures.
    """

    def store_session(
        self,
        role: Role,
        identity: Optional[dict[str, Any]],
        access_token: Optional[str],
        refresh_token: Optional[str],
        ttl_seconds: Optional[int] = None,
    ) -> StoredSession:
        """
        Record the session for a role, overwriting any previous one.

        Args:
            role: Role the session belongs to
            identity: User record returned by the identity provider
            access_token: Access credential
            refresh_token: Refresh credential
            ttl_seconds: Lifetime from now; None means no expiry

        Returns:
            The session as stored
        """
        ...

    def get_session(self, role: Role) -> Optional[StoredSession]:
        """Return the stored session for a role, or None."""
        ...

    def has_valid_session(self, role: Role) -> bool:
        """Whether the role has a complete, unexpired session."""
        ...

    def clear_session(self, role: Role) -> None:
        """Remove the session for a role. Idempotent."""
        ...

    def get_active_roles(self) -> list[Role]:
        """Roles with a valid session, in Role listing order."""
        ...

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        ...
