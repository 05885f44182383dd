"""Tests for shared/repository.py."""

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import MagicMock

from shared.repository import BaseRepository, ilike_any


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123", "name": "test"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                return self._db.table("test").select("*").execute().data

        assert TestRepository(mock_db).get_all() == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")

    def test_serialize_converts_datetimes(self):
        moment = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
        data = BaseRepository._serialize({"at": moment, "name": "x", "none": None})
        assert data == {"at": "2026-01-15T12:00:00+00:00", "name": "x", "none": None}

    def test_serialize_leaves_input_untouched(self):
        moment = datetime(2026, 1, 15, tzinfo=timezone.utc)
        original = {"at": moment}
        BaseRepository._serialize(original)
        assert original["at"] is moment


class TestIlikeAny:
    def test_one_clause_per_column(self):
        assert ilike_any(("email", "name"), "ali") == "email.ilike.*ali*,name.ilike.*ali*"

    def test_filter_syntax_is_stripped(self):
        assert ilike_any(("title",), 'a,b(c)%*"d\\') == "title.ilike.*abcd*"
