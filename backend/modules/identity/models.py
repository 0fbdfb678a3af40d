"""
Identity provider data models.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class AuthSession(BaseModel):
    """
    Session issued by the identity provider after a successful sign-in.

    user is kept as the provider's raw record; the portal treats it as
    opaque and only reads display fields from it.
    """

    user: dict[str, Any] = Field(..., description="Provider user record")
    access_token: str = Field(..., description="Access credential")
    refresh_token: Optional[str] = Field(None, description="Refresh credential")
    expires_in: Optional[int] = Field(None, description="Lifetime in seconds")

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id")

    @property
    def email(self) -> Optional[str]:
        return self.user.get("email")
