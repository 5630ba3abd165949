"""
Identity module interfaces.

Repositories are synchronous (the store client blocks); the synchronizer
is async and moves repository calls off the event loop.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from shared.models import Principal

from .models import IdentityRecord, SyncResult


@runtime_checkable
class IIdentityRepository(Protocol):
    """Single-statement access to the identity store."""

    def upsert(
        self,
        subject_id: str,
        email: str,
        phone: Optional[str],
        now: datetime,
    ) -> SyncResult:
        """
        Insert or update the row keyed by ``subject_id`` atomically.

        Raises:
            IdentityConflictError: If email or phone belongs to another subject
            IdentityStoreError: On any other store failure
        """
        ...

    def find_by_id(self, subject_id: str) -> Optional[IdentityRecord]:
        ...

    def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        """Find by email, case-insensitively."""
        ...

    def touch_last_active(self, subject_id: str, now: datetime) -> int:
        """Set last_active_at and updated_at; return rows affected."""
        ...

    def delete(self, subject_id: str) -> int:
        """Hard delete; return rows affected."""
        ...


@runtime_checkable
class IIdentitySynchronizer(Protocol):
    """Keeps the local identity row in step with verified principals."""

    async def create_or_update(
        self,
        subject_id: str,
        email: str,
        phone: Optional[str] = None,
    ) -> SyncResult:
        ...

    async def sync_principal(self, principal: Principal) -> SyncResult:
        ...

    async def find_by_id(self, subject_id: str) -> Optional[IdentityRecord]:
        ...

    async def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        ...

    async def touch_last_active(self, subject_id: str) -> int:
        ...

    async def delete(self, subject_id: str) -> int:
        ...
