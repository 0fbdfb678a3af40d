"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ExternalServiceError


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() which turns PostgREST and transport failures into
      ExternalServiceError so services only handle portal exceptions

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class AdminUserRepository(BaseRepository[AdminIdentity]):
            def get_by_email(self, email: str) -> Optional[AdminIdentity]:
                result = self._execute(
                    self._db.table("admin_users").select("*").eq("email", email),
                    "get_by_email",
                )
                if not result.data:
                    return None
                return self._map_to_identity(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, operation: str) -> Any:
        """
        Execute a query builder and normalize failures.

        Args:
            query: A PostgREST request builder (anything with .execute()).
            operation: Short name used in the error details.

        Returns:
            The APIResponse from PostgREST.

        Raises:
            ExternalServiceError: If the request fails for any reason.
        """
        try:
            return query.execute()
        except APIError as e:
            raise ExternalServiceError(
                f"Database request failed during {operation}: {e.message}",
                service="supabase",
                code="DATABASE_ERROR",
                details={"operation": operation, "postgrest_code": e.code},
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                f"Database unreachable during {operation}: {e}",
                service="supabase",
                code="DATABASE_UNAVAILABLE",
                details={"operation": operation},
            ) from e
