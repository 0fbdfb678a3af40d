"""
Portal data models.

Identity records held by the browsing context, role switcher entries and
the request/response shapes of the session endpoints.
"""

from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field

from modules.sessions.models import Role


class ClientIdentity(BaseModel):
    """Signed-in client as tracked by the client identity context."""

    id: str = Field(..., description="Identity provider user ID")
    email: str = Field(..., description="Client email")
    name: str = Field(default="", description="Display name")

    model_config = {"frozen": True}

    @classmethod
    def from_user(cls, user: dict[str, Any]) -> "ClientIdentity":
        """Build from an identity provider user record."""
        metadata = user.get("user_metadata") or {}
        return cls(
            id=str(user.get("id", "")),
            email=user.get("email") or "",
            name=metadata.get("name") or "",
        )


class RoleOption(BaseModel):
    """One entry in the role switcher."""

    role: Role
    label: str
    is_active: bool = False
    display_name: Optional[str] = Field(None, description="Shown only for the active role")


class SessionOverview(BaseModel):
    """What the account switcher and its indicator show."""

    active_roles: list[Role]
    current_role: Optional[Role] = None
    options: list[RoleOption] = Field(default_factory=list)
    switcher_visible: bool
    indicator_visible: bool
    indicator_count: int


class SwitchRoleRequest(BaseModel):
    role: Role


class SwitchRoleResponse(BaseModel):
    switched: bool
    redirect_to: Optional[str] = None


class LogoutResponse(BaseModel):
    success: bool
    redirect_to: str
    error: Optional[str] = None


class ClientLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """Outcome of a client sign-in or sign-out."""

    success: bool
    error: Optional[str] = None
    redirect_to: Optional[str] = None


class ClientProfile(BaseModel):
    """Row written to the clients table at registration."""

    id: str = Field(..., description="Identity provider user ID")
    name: str = Field(default="", description="Display name")
    email: str = Field(..., description="Client email")
    selected_services: list[str] = Field(default_factory=list)


class ClientRegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    selected_services: list[str] = Field(default_factory=list)


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordUpdateRequest(BaseModel):
    password: str = Field(..., min_length=6)
