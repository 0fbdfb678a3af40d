"""
Client profile repository.

Registration creates the Supabase Auth identity first and then a matching
row in the clients table.
"""

from datetime import datetime

from shared.repository import BaseRepository
from .models import ClientProfile


CLIENTS_TABLE = "clients"


class ClientProfileRepository(BaseRepository[ClientProfile]):
    """Repository for the clients table."""

    def create(self, profile: ClientProfile, at: datetime) -> None:
        """
        Insert the profile row for a newly registered client.

        Raises:
            ExternalServiceError: If the insert fails.
        """
        self._execute(
            self._db.table(CLIENTS_TABLE).insert(
                {
                    "id": profile.id,
                    "name": profile.name,
                    "email": profile.email,
                    "selected_services": profile.selected_services,
                    "created_at": at.isoformat(),
                }
            ),
            "create_client_profile",
        )
