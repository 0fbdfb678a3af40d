"""
Sessions module.

Tracks which roles are authenticated in a browsing context.

Public API:
- ISessionStore: Interface for per-role session bookkeeping
- SessionStore: Cache + durable storage implementation
- IKeyValueStorage, MemoryStorage, JsonFileStorage: durable storage backends
- Role, StoredSession: data models
"""

from .interfaces import IKeyValueStorage, ISessionStore, SessionListener
from .models import Role, ROLE_ORDER, StoredSession
from .service import SessionStore
from .storage import MemoryStorage, JsonFileStorage

__all__ = [
    # Interfaces
    "IKeyValueStorage",
    "ISessionStore",
    "SessionListener",
    # Models
    "Role",
    "ROLE_ORDER",
    "StoredSession",
    # Implementations
    "SessionStore",
    "MemoryStorage",
    "JsonFileStorage",
]
