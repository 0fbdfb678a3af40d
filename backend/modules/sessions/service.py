"""
Session store implementation.

Keeps one session per role for a single browsing context, in an in-process
cache backed by durable key/value storage. Expiry is enforced lazily when a
session is read.
"""

import logging
from datetime import timedelta
from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from shared.clock import Clock, utc_now
from shared.exceptions import StorageError

from .interfaces import IKeyValueStorage, ISessionStore, SessionListener
from .models import ROLE_ORDER, Role, StoredSession

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "savannah_prime"


class SessionStore(ISessionStore):
    """
    Per-role session bookkeeping for one browsing context.

    The in-process cache is authoritative for the lifetime of the object.
    Durable storage only exists so sessions survive a reload; failures
    reading or writing it are logged and otherwise ignored.
    """

    def __init__(
        self,
        storage: IKeyValueStorage,
        namespace: str = DEFAULT_NAMESPACE,
        clock: Optional[Clock] = None,
    ) -> None:
        self._storage = storage
        self._namespace = namespace
        self._clock = clock or utc_now
        self._sessions: dict[Role, StoredSession] = {}
        self._listeners: list[SessionListener] = []

    def storage_key(self, role: Role) -> str:
        """Durable storage key for a role, e.g. 'savannah_prime_admin'."""
        return f"{self._namespace}_{role.value}"

    def store_session(
        self,
        role: Role,
        identity: Optional[dict[str, Any]],
        access_token: Optional[str],
        refresh_token: Optional[str],
        ttl_seconds: Optional[int] = None,
    ) -> StoredSession:
        expires_at = self._clock() + timedelta(seconds=ttl_seconds) if ttl_seconds else None
        session = StoredSession(
            identity=identity,
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=expires_at,
        )
        self._sessions[role] = session

        try:
            self._storage.set(self.storage_key(role), session.model_dump_json())
        except StorageError as e:
            logger.warning(f"Failed to persist {role.value} session: {e.message}")

        self._notify(role, session)
        return session

    def get_session(self, role: Role) -> Optional[StoredSession]:
        cached = self._sessions.get(role)
        if cached is not None:
            return cached

        try:
            raw = self._storage.get(self.storage_key(role))
        except StorageError as e:
            logger.warning(f"Failed to read {role.value} session: {e.message}")
            return None
        if raw is None:
            return None

        try:
            session = StoredSession.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning(f"Discarding unreadable {role.value} session record")
            return None

        self._sessions[role] = session
        return session

    def has_valid_session(self, role: Role) -> bool:
        session = self.get_session(role)
        if session is None or not session.is_complete():
            return False

        if session.is_expired(self._clock()):
            logger.debug(f"{role.value} session expired, clearing")
            self.clear_session(role)
            return False

        return True

    def clear_session(self, role: Role) -> None:
        had_session = self._sessions.pop(role, None) is not None
        try:
            self._storage.remove(self.storage_key(role))
        except StorageError as e:
            logger.warning(f"Failed to remove {role.value} session: {e.message}")

        if had_session:
            self._notify(role, None)

    def get_active_roles(self) -> list[Role]:
        return [role for role in ROLE_ORDER if self.has_valid_session(role)]

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, role: Role, session: Optional[StoredSession]) -> None:
        for listener in list(self._listeners):
            try:
                listener(role, session)
            except Exception:
                logger.exception(f"Session listener failed for {role.value}")
