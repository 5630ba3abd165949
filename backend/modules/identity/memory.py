"""
In-process identity repository.

For testing and local development. Mirrors the Postgres contract: the
upsert is one critical section keyed by subject ID, email uniqueness is
case-insensitive, and phone uniqueness applies only to non-null values.
"""

import threading
from datetime import datetime
from typing import Optional

from .exceptions import IdentityConflictError
from .interfaces import IIdentityRepository
from .models import IdentityRecord, SyncResult


class InMemoryIdentityRepository(IIdentityRepository):
    """Identity store held in memory, guarded by a single lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[str, IdentityRecord] = {}
        self._by_email: dict[str, str] = {}
        self._by_phone: dict[str, str] = {}

    def upsert(
        self,
        subject_id: str,
        email: str,
        phone: Optional[str],
        now: datetime,
    ) -> SyncResult:
        email_key = email.lower()
        with self._lock:
            if self._by_email.get(email_key, subject_id) != subject_id:
                raise IdentityConflictError("email")
            if phone is not None and self._by_phone.get(phone, subject_id) != subject_id:
                raise IdentityConflictError("phone")

            existing = self._records.get(subject_id)
            if existing is None:
                record = IdentityRecord(
                    id=subject_id,
                    email=email,
                    phone=phone,
                    created_at=now,
                    updated_at=now,
                )
            else:
                self._unindex(existing)
                record = existing.model_copy(
                    update={"email": email, "phone": phone, "updated_at": now}
                )

            self._records[subject_id] = record
            self._index(record)
            return SyncResult(record=record, was_created=existing is None)

    def find_by_id(self, subject_id: str) -> Optional[IdentityRecord]:
        with self._lock:
            return self._records.get(subject_id)

    def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        with self._lock:
            subject_id = self._by_email.get(email.strip().lower())
            return self._records.get(subject_id) if subject_id else None

    def touch_last_active(self, subject_id: str, now: datetime) -> int:
        with self._lock:
            existing = self._records.get(subject_id)
            if existing is None:
                return 0
            self._records[subject_id] = existing.model_copy(
                update={"last_active_at": now, "updated_at": now}
            )
            return 1

    def delete(self, subject_id: str) -> int:
        with self._lock:
            existing = self._records.pop(subject_id, None)
            if existing is None:
                return 0
            self._unindex(existing)
            return 1

    def _index(self, record: IdentityRecord) -> None:
        self._by_email[record.email.lower()] = record.id
        if record.phone is not None:
            self._by_phone[record.phone] = record.id

    def _unindex(self, record: IdentityRecord) -> None:
        self._by_email.pop(record.email.lower(), None)
        if record.phone is not None:
            self._by_phone.pop(record.phone, None)
