"""
Sessions module data models.

A browsing context holds at most one StoredSession per Role. Sessions for
different roles are fully independent.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    """Authentication scopes a browsing context can hold at the same time."""

    CLIENT = "client"
    ADMIN = "admin"
    SALES = "sales"
    SUPPORT = "support"


# Listing order for active roles; not a priority order
ROLE_ORDER: tuple[Role, ...] = (Role.CLIENT, Role.ADMIN, Role.SALES, Role.SUPPORT)


class StoredSession(BaseModel):
    """
    Authentication material recorded for one role.

    expires_at is None when no TTL was supplied at store time; such a
    session never expires on its own.
    """

    identity: Optional[dict[str, Any]] = Field(None, description="Opaque user record")
    access_token: Optional[str] = Field(None, description="Access credential")
    refresh_token: Optional[str] = Field(None, description="Refresh credential")
    expires_at: Optional[datetime] = Field(None, description="Absolute expiry instant")

    @field_validator("expires_at")
    @classmethod
    def expiry_must_be_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            raise ValueError("expires_at must carry a UTC offset")
        return v

    def is_complete(self) -> bool:
        """Whether both identity and access token are present."""
        return self.identity is not None and bool(self.access_token)

    def is_expired(self, now: datetime) -> bool:
        """Whether expires_at is set and lies in the past."""
        return self.expires_at is not None and self.expires_at < now
