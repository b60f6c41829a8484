"""
Tests for connection setup and schema initialization.
"""

import pytest

from filmstore.database.connection import DatabaseManager
from filmstore.database.errors import StoreConnectionError
from filmstore.database.init_db import init_database, verify_schema


class TestDatabaseManager:

    def test_ping_in_memory(self):
        manager = DatabaseManager("sqlite://")
        manager.ping()
        manager.close()

    def test_invalid_url(self):
        with pytest.raises(StoreConnectionError):
            DatabaseManager("not a database url")

    def test_unreachable_store(self, tmp_path):
        manager = DatabaseManager(f"sqlite:///{tmp_path / 'missing' / 'films.db'}")

        with pytest.raises(StoreConnectionError) as excinfo:
            manager.ping()
        assert excinfo.value.__cause__ is not None

    def test_safe_url_hides_password(self):
        manager = DatabaseManager("sqlite://")
        assert "sqlite" in manager.safe_url


class TestInitDatabase:

    def test_creates_schema(self):
        manager = init_database("sqlite://", create_tables=True)
        assert verify_schema(manager)
        manager.close()

    def test_without_tables(self):
        manager = init_database("sqlite://")
        assert not verify_schema(manager)
        manager.close()

    def test_reset(self):
        manager = init_database("sqlite://", create_tables=True)
        manager = init_database(manager.database_url, reset=True)
        assert verify_schema(manager)

    def test_unreachable(self, tmp_path):
        with pytest.raises(StoreConnectionError):
            init_database(f"sqlite:///{tmp_path / 'missing' / 'films.db'}")
