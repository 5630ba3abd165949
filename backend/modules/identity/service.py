"""
Identity synchronization service.

Reconciles verified principals with the local identity row. Input is
normalized and gated by the validation engine, then written with a
single atomic repository call run in a worker thread.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel

from shared.models import Principal
from modules.validation.engine import FieldRule, RuleSet, optional
from modules.validation.models import ValidationPolicy
from modules.validation.validators import EmailValidator, PhoneValidator

from .exceptions import IdentityConflictError, MissingEmailError
from .interfaces import IIdentityRepository, IIdentitySynchronizer
from .models import IdentityRecord, SyncResult

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Trim and lower-case an email. Lookups and uniqueness are case-insensitive."""
    if email is None:
        return None
    return email.strip().lower()


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    if phone is None:
        return None
    return PhoneValidator.normalize(phone.strip()) or None


class IdentityInput(BaseModel):
    """Normalized fields about to be written to the identity row."""

    email: Optional[str] = None
    phone: Optional[str] = None


class IdentitySynchronizer(IIdentitySynchronizer):
    """
    Implementation of the identity synchronizer.

    Email and phone formats are checked before the write; uniqueness is
    left to the store, which reports it as IdentityConflictError.
    """

    def __init__(
        self,
        repository: IIdentityRepository,
        policy: Optional[ValidationPolicy] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        policy = policy or ValidationPolicy()
        self._repository = repository
        self._clock = clock
        self._rules = RuleSet(
            FieldRule("email", EmailValidator().validate),
            FieldRule(
                "phone",
                optional(PhoneValidator(policy.phone_min_digits, policy.phone_max_digits).validate),
            ),
        )

    async def create_or_update(
        self,
        subject_id: str,
        email: str,
        phone: Optional[str] = None,
    ) -> SyncResult:
        """
        Upsert the identity row keyed by ``subject_id``.

        Raises:
            ValidationError: If email or phone is malformed
            IdentityConflictError: If email or phone belongs to another subject
        """
        data = IdentityInput(email=normalize_email(email), phone=normalize_phone(phone))
        self._rules.validate(data).raise_for_errors()

        try:
            result = await asyncio.to_thread(
                self._repository.upsert,
                subject_id,
                data.email,
                data.phone,
                self._clock(),
            )
        except IdentityConflictError as e:
            logger.info("Identity sync conflict for %s on %s", subject_id, e.field)
            raise

        logger.info(
            "Identity %s %s",
            subject_id,
            "created" if result.was_created else "updated",
        )
        return result

    async def sync_principal(self, principal: Principal) -> SyncResult:
        """
        Synchronize a verified principal.

        Raises:
            MissingEmailError: If the provider asserted no email
        """
        if not principal.email:
            raise MissingEmailError()
        return await self.create_or_update(
            principal.subject_id,
            principal.email,
            principal.phone_number,
        )

    async def find_by_id(self, subject_id: str) -> Optional[IdentityRecord]:
        return await asyncio.to_thread(self._repository.find_by_id, subject_id)

    async def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        return await asyncio.to_thread(self._repository.find_by_email, normalized)

    async def touch_last_active(self, subject_id: str) -> int:
        return await asyncio.to_thread(
            self._repository.touch_last_active, subject_id, self._clock()
        )

    async def delete(self, subject_id: str) -> int:
        rows = await asyncio.to_thread(self._repository.delete, subject_id)
        if rows:
            logger.info("Identity deleted: %s", subject_id)
        return rows
