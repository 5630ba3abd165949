"""Tests for the identity synchronizer."""

import asyncio
import pytest
from datetime import timedelta

from shared.exceptions import ValidationError
from shared.models import Principal
from modules.identity.exceptions import IdentityConflictError, MissingEmailError
from modules.identity.service import IdentitySynchronizer, normalize_email, normalize_phone
from modules.validation.errors import ErrorCode
from modules.validation.models import ValidationPolicy


class TestNormalization:
    def test_normalize_email(self):
        assert normalize_email("  Ada@Example.COM ") == "ada@example.com"
        assert normalize_email(None) is None

    def test_normalize_phone(self):
        assert normalize_phone(" +1 (415) 555-2671 ") == "+14155552671"
        assert normalize_phone("   ") is None
        assert normalize_phone(None) is None


class TestCreateOrUpdate:
    @pytest.mark.asyncio
    async def test_first_sync_creates(self, synchronizer, clock):
        result = await synchronizer.create_or_update("user-1", "ada@example.com", "+14155552671")

        assert result.was_created is True
        assert result.record.id == "user-1"
        assert result.record.email == "ada@example.com"
        assert result.record.phone == "+14155552671"
        assert result.record.created_at == clock.now
        assert result.record.updated_at == clock.now
        assert result.record.last_active_at is None

    @pytest.mark.asyncio
    async def test_second_sync_updates(self, synchronizer, clock):
        first = await synchronizer.create_or_update("user-1", "ada@example.com")
        clock.advance(minutes=5)
        second = await synchronizer.create_or_update("user-1", "ada@example.com")

        assert second.was_created is False
        assert second.record.created_at == first.record.created_at
        assert second.record.updated_at == first.record.updated_at + timedelta(minutes=5)

    @pytest.mark.asyncio
    async def test_update_changes_fields(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com", "+14155552671")
        result = await synchronizer.create_or_update("user-1", "lovelace@example.com", None)

        assert result.record.email == "lovelace@example.com"
        assert result.record.phone is None
        assert await synchronizer.find_by_email("ada@example.com") is None

    @pytest.mark.asyncio
    async def test_stores_normalized_email(self, synchronizer):
        result = await synchronizer.create_or_update("user-1", " Ada@Example.com ")
        assert result.record.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_email_conflict(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com")

        with pytest.raises(IdentityConflictError) as exc_info:
            await synchronizer.create_or_update("user-2", "ADA@example.com")

        assert exc_info.value.field == "email"
        assert exc_info.value.code == "IDENTITY_EMAIL_TAKEN"
        assert await synchronizer.find_by_id("user-2") is None

    @pytest.mark.asyncio
    async def test_phone_conflict_leaves_both_records_untouched(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com", "+14155552671")
        before = await synchronizer.create_or_update("user-2", "grace@example.com")

        with pytest.raises(IdentityConflictError) as exc_info:
            await synchronizer.create_or_update("user-2", "grace@example.com", "+14155552671")

        assert exc_info.value.field == "phone"
        assert await synchronizer.find_by_id("user-2") == before.record
        assert (await synchronizer.find_by_id("user-1")).phone == "+14155552671"

    @pytest.mark.asyncio
    async def test_null_phones_do_not_conflict(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com", None)
        result = await synchronizer.create_or_update("user-2", "grace@example.com", None)
        assert result.was_created is True

    @pytest.mark.asyncio
    async def test_invalid_email_rejected_before_write(self, synchronizer, identity_repository):
        with pytest.raises(ValidationError) as exc_info:
            await synchronizer.create_or_update("user-1", "not-an-email", "12345")

        assert exc_info.value.errors == [ErrorCode.EMAIL_INVALID, ErrorCode.PHONE_PLUS_MISSING]
        assert identity_repository.find_by_id("user-1") is None

    @pytest.mark.asyncio
    async def test_concurrent_first_syncs_create_once(self, synchronizer):
        results = await asyncio.gather(
            *[synchronizer.create_or_update("user-1", "ada@example.com") for _ in range(10)]
        )

        assert sum(result.was_created for result in results) == 1
        assert {result.record.id for result in results} == {"user-1"}


class TestSyncPrincipal:
    @pytest.mark.asyncio
    async def test_syncs_principal_fields(self, synchronizer):
        principal = Principal(subject_id="user-1", email="Ada@Example.com", phone_number="+14155552671")
        result = await synchronizer.sync_principal(principal)

        assert result.was_created
        assert result.record.email == "ada@example.com"
        assert result.record.phone == "+14155552671"

    @pytest.mark.asyncio
    async def test_missing_email(self, synchronizer):
        with pytest.raises(MissingEmailError) as exc_info:
            await synchronizer.sync_principal(Principal(subject_id="user-1"))
        assert exc_info.value.errors == [ErrorCode.IDENTITY_EMAIL_REQUIRED]


class TestLookupTouchDelete:
    @pytest.mark.asyncio
    async def test_find_by_email_is_case_insensitive(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com")

        found = await synchronizer.find_by_email("  ADA@Example.Com")
        assert found is not None
        assert found.id == "user-1"

    @pytest.mark.asyncio
    async def test_find_missing(self, synchronizer):
        assert await synchronizer.find_by_id("nobody") is None
        assert await synchronizer.find_by_email("nobody@example.com") is None
        assert await synchronizer.find_by_email("") is None

    @pytest.mark.asyncio
    async def test_touch_last_active(self, synchronizer, clock):
        created = await synchronizer.create_or_update("user-1", "ada@example.com")
        clock.advance(hours=1)

        assert await synchronizer.touch_last_active("user-1") == 1

        record = await synchronizer.find_by_id("user-1")
        assert record.last_active_at == clock.now
        assert record.updated_at == clock.now
        assert record.created_at == created.record.created_at
        assert record.email == created.record.email

    @pytest.mark.asyncio
    async def test_touch_missing_is_noop(self, synchronizer):
        assert await synchronizer.touch_last_active("nobody") == 0
        assert await synchronizer.find_by_id("nobody") is None

    @pytest.mark.asyncio
    async def test_delete(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com")

        assert await synchronizer.delete("user-1") == 1
        assert await synchronizer.find_by_id("user-1") is None
        assert await synchronizer.delete("user-1") == 0

    @pytest.mark.asyncio
    async def test_delete_frees_email_and_phone(self, synchronizer):
        await synchronizer.create_or_update("user-1", "ada@example.com", "+14155552671")
        await synchronizer.delete("user-1")

        result = await synchronizer.create_or_update("user-2", "ada@example.com", "+14155552671")
        assert result.was_created


class TestPolicy:
    @pytest.mark.asyncio
    async def test_phone_bounds_from_policy(self, identity_repository):
        synchronizer = IdentitySynchronizer(
            identity_repository, policy=ValidationPolicy(phone_min_digits=8)
        )
        with pytest.raises(ValidationError) as exc_info:
            await synchronizer.create_or_update("user-1", "ada@example.com", "+1234")
        assert exc_info.value.errors == [ErrorCode.PHONE_TOO_SHORT]
