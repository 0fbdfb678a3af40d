"""
Time sources.

Services take a ``clock`` callable instead of calling ``datetime.now``
directly so tests can move time forward deterministically.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
