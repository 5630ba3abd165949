"""Tests for shared/repository.py."""

from typing import Optional
from unittest.mock import MagicMock

from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_query_through_db(self):
        """Subclass should be able to reach tables through _db."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            {"id": "user-1", "email": "a@example.com"}
        ]

        class RowRepository(BaseRepository[dict]):
            def find(self, row_id: str) -> Optional[dict]:
                result = self._db.table("identities").select("*").eq("id", row_id).execute()
                return result.data[0] if result.data else None

        repo = RowRepository(mock_db)

        assert repo.find("user-1") == {"id": "user-1", "email": "a@example.com"}
        mock_db.table.assert_called_once_with("identities")
