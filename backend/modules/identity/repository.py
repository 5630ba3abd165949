"""
Identity repository for Supabase.

Encapsulates all queries against the ``identities`` table. The upsert goes
through the ``sync_identity`` SQL function (migrations/001_identities.sql)
so that insert-or-update is one statement with the primary key as the
conflict target.

Note: This repository does NOT pre-check uniqueness. It attempts the write
and classifies the constraint violation the database reports.
"""

from datetime import datetime
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import IdentityConflictError, IdentityStoreError
from .models import IdentityRecord, SyncResult

TABLE = "identities"
UNIQUE_VIOLATION = "23505"
PHONE_CONSTRAINT = "identities_phone_key"


class SupabaseIdentityRepository(BaseRepository[IdentityRecord]):
    """Identity store backed by Supabase Postgres."""

    def upsert(
        self,
        subject_id: str,
        email: str,
        phone: Optional[str],
        now: datetime,
    ) -> SyncResult:
        try:
            result = self._db.rpc(
                "sync_identity",
                {
                    "p_id": subject_id,
                    "p_email": email,
                    "p_phone": phone,
                    "p_now": now.isoformat(),
                },
            ).execute()
        except APIError as e:
            raise self._classify(e) from e

        rows = result.data if isinstance(result.data, list) else [result.data]
        if not rows or not rows[0]:
            raise IdentityStoreError("sync_identity returned no row")

        row = rows[0]
        return SyncResult(
            record=self._map_to_record(row),
            was_created=bool(row.get("was_created")),
        )

    def find_by_id(self, subject_id: str) -> Optional[IdentityRecord]:
        try:
            result = self._db.table(TABLE).select("*").eq("id", subject_id).execute()
        except APIError as e:
            raise self._classify(e) from e
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        # Emails are stored lower-cased, backed by the unique lower(email) index
        try:
            result = self._db.table(TABLE).select("*").eq("email", email.strip().lower()).execute()
        except APIError as e:
            raise self._classify(e) from e
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def touch_last_active(self, subject_id: str, now: datetime) -> int:
        try:
            result = self._db.table(TABLE).update(
                {
                    "last_active_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            ).eq("id", subject_id).execute()
        except APIError as e:
            raise self._classify(e) from e
        return len(result.data or [])

    def delete(self, subject_id: str) -> int:
        try:
            result = self._db.table(TABLE).delete().eq("id", subject_id).execute()
        except APIError as e:
            raise self._classify(e) from e
        return len(result.data or [])

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _classify(error: APIError) -> Exception:
        """Map a PostgREST error to a conflict or a generic store failure."""
        if error.code == UNIQUE_VIOLATION:
            # The message names the violated index; details echo the offending value
            field = "phone" if PHONE_CONSTRAINT in (error.message or "") else "email"
            return IdentityConflictError(field)
        return IdentityStoreError(
            f"Identity store error: {error.message}",
            details={"pg_code": error.code, "pg_details": error.details, "pg_hint": error.hint},
        )

    @staticmethod
    def _map_to_record(row: dict[str, Any]) -> IdentityRecord:
        return IdentityRecord(
            id=row["id"],
            email=row["email"],
            phone=row.get("phone"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            last_active_at=row.get("last_active_at"),
        )
