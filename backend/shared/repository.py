"""
Base repository class for database access.

Provides a common abstraction layer for Supabase-backed repositories,
encapsulating client access.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Subclasses implement domain-specific data access methods and handle
    row-to-model mapping internally.

    Example:
        class IdentityRepository(BaseRepository[IdentityRecord]):
            def find_by_id(self, subject_id: str) -> Optional[IdentityRecord]:
                result = self._db.table("identities").select("*").eq("id", subject_id).execute()
                if not result.data:
                    return None
                return self._map_to_record(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db
