"""
Registry of browsing contexts held by the API process.

Sessions are evicted lazily, but the contexts themselves live on the server,
so abandoned ones are swept once they have been idle for longer than the
configured TTL.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Generic, Optional, TypeVar

from shared.clock import Clock, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Entry(Generic[T]):
    value: T
    last_seen: datetime


class PortalContextRegistry(Generic[T]):
    """
    Maps browsing context IDs to their state objects.

    The factory builds a fresh state object the first time an ID is seen;
    on_evict is called for every object removed by discard() or sweep().
    """

    def __init__(
        self,
        factory: Callable[[str], T],
        idle_ttl: timedelta,
        sweep_interval: timedelta,
        on_evict: Optional[Callable[[T], None]] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._factory = factory
        self._idle_ttl = idle_ttl
        self._sweep_interval = sweep_interval
        self._on_evict = on_evict
        self._clock = clock or utc_now
        self._entries: dict[str, _Entry[T]] = {}
        self._lock = threading.Lock()
        self._last_sweep = self._clock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, context_id: str) -> bool:
        return context_id in self._entries

    def get_or_create(self, context_id: str) -> T:
        """Return the state for a context, creating it on first use."""
        self.maybe_sweep()
        now = self._clock()
        with self._lock:
            entry = self._entries.get(context_id)
            if entry is None:
                entry = _Entry(value=self._factory(context_id), last_seen=now)
                self._entries[context_id] = entry
                logger.debug(f"Created browsing context {context_id}")
            else:
                entry.last_seen = now
            return entry.value

    def discard(self, context_id: str) -> bool:
        with self._lock:
            entry = self._entries.pop(context_id, None)
        if entry is None:
            return False
        self._evict(entry.value)
        return True

    def maybe_sweep(self) -> int:
        """Sweep if the sweep interval has passed since the last sweep."""
        if self._clock() - self._last_sweep < self._sweep_interval:
            return 0
        return self.sweep()

    def sweep(self) -> int:
        """
        Evict contexts idle for longer than the idle TTL.

        Returns:
            Number of contexts evicted
        """
        now = self._clock()
        with self._lock:
            self._last_sweep = now
            expired = [
                context_id
                for context_id, entry in self._entries.items()
                if now - entry.last_seen > self._idle_ttl
            ]
            evicted = [self._entries.pop(context_id).value for context_id in expired]

        for value in evicted:
            self._evict(value)
        if evicted:
            logger.info(f"Swept {len(evicted)} idle browsing contexts")
        return len(evicted)

    def clear(self) -> None:
        with self._lock:
            values = [entry.value for entry in self._entries.values()]
            self._entries.clear()
        for value in values:
            self._evict(value)

    def _evict(self, value: T) -> None:
        if self._on_evict is not None:
            self._on_evict(value)
