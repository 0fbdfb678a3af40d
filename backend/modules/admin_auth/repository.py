"""
Admin authentication repositories.

Encapsulates Supabase queries for the two tables the admin login touches:
- admin_users (read, plus the last_login column)
- admin_auth_otp (delete / insert / select by email)
"""

from datetime import datetime
from typing import Optional, Any

from supabase import Client

from shared.repository import BaseRepository
from .exceptions import AmbiguousRecordError
from .models import AdminIdentity, OTPRecord


ADMIN_USERS_TABLE = "admin_users"
OTP_TABLE = "admin_auth_otp"


class AdminUserRepository(BaseRepository[AdminIdentity]):
    """
    Repository for admin_users.

    Rows are provisioned outside the portal; the only write performed
    here is the last_login touch after a successful login.
    """

    def get_by_email(self, email: str) -> Optional[AdminIdentity]:
        """
        Get the admin row for an exact email match.

        Returns:
            AdminIdentity, or None if no row matches.

        Raises:
            AmbiguousRecordError: If more than one row matches.
            ExternalServiceError: If the query fails.
        """
        result = self._execute(
            self._db.table(ADMIN_USERS_TABLE).select("*").eq("email", email).limit(2),
            "get_admin_by_email",
        )

        if not result.data:
            return None
        if len(result.data) > 1:
            raise AmbiguousRecordError(ADMIN_USERS_TABLE, email, len(result.data))

        return self._map_to_identity(result.data[0])

    def touch_last_login(self, email: str, at: datetime) -> None:
        """Set last_login for the admin with this email."""
        self._execute(
            self._db.table(ADMIN_USERS_TABLE)
            .update({"last_login": at.isoformat()})
            .eq("email", email),
            "touch_last_login",
        )

    def _map_to_identity(self, data: dict[str, Any]) -> AdminIdentity:
        """Map database row to AdminIdentity model."""
        return AdminIdentity(
            id=str(data["id"]) if data.get("id") is not None else None,
            email=data["email"],
            name=data.get("name") or "",
            role=data["role"],
            permissions=data.get("permissions") or [],
            profile_image=data.get("profile_image"),
            last_login=data.get("last_login"),
            created_at=data.get("created_at"),
        )


class OTPRepository(BaseRepository[OTPRecord]):
    """
    Repository for admin_auth_otp.

    Records are never updated in place: a new code replaces the old row
    via delete + insert.
    """

    def get_for_email(self, email: str) -> Optional[OTPRecord]:
        """
        Get the live code record for an email.

        Raises:
            AmbiguousRecordError: If more than one row matches.
            ExternalServiceError: If the query fails.
        """
        result = self._execute(
            self._db.table(OTP_TABLE).select("email, otp, expires_at").eq("email", email).limit(2),
            "get_otp_for_email",
        )

        if not result.data:
            return None
        if len(result.data) > 1:
            raise AmbiguousRecordError(OTP_TABLE, email, len(result.data))

        row = result.data[0]
        return OTPRecord(email=row["email"], code=row["otp"], expires_at=row["expires_at"])

    def delete_for_email(self, email: str) -> None:
        """Delete every code record for an email."""
        self._execute(
            self._db.table(OTP_TABLE).delete().eq("email", email),
            "delete_otp_for_email",
        )

    def insert(self, record: OTPRecord) -> None:
        """Insert a new code record."""
        self._execute(
            self._db.table(OTP_TABLE).insert(
                {
                    "email": record.email,
                    "otp": record.code,
                    "expires_at": record.expires_at.isoformat(),
                }
            ),
            "insert_otp",
        )
