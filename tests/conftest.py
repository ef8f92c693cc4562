"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import random
import pytest
from unittest.mock import patch
from datetime import datetime
from typing import Callable, Generator, Optional

from utils.synthetic_ids import SyntheticIdGenerator

# 2024-03-15 12:00:00 UTC
FIXED_EPOCH_SECONDS = 1710504000.0

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, client: "MockSupabaseClient", table_name: str):
        self._client = client
        self._table_name = table_name
        self._data = list(client.rows(table_name))
        self._pending_insert: Optional[list] = None

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        if isinstance(data, dict):
            data = [data]
        self._pending_insert = [dict(item) for item in data]
        return self

    def limit(self, count):
        self._data = self._data[:count]
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._pending_insert is None:
            return MockSupabaseResponse(
                data=self._data,
                count=len(self._client.rows(self._table_name))
            )

        stored = []
        for item in self._pending_insert:
            if self._client.fail_insert_when and self._client.fail_insert_when(item):
                raise RuntimeError("insert rejected by mock")
            item["id"] = f"test-uuid-{len(self._client.rows(self._table_name)) + 1}"
            item["created_at"] = datetime.utcnow().isoformat() + "Z"
            self._client.rows(self._table_name).append(item)
            stored.append(item)
        return MockSupabaseResponse(data=stored)


class MockSupabaseTable:
    """Mock Supabase table."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self._client = client
        self._name = name

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self._client, self._name).select(*args, **kwargs)

    def insert(self, data):
        return MockSupabaseQuery(self._client, self._name).insert(data)


class MockSupabaseClient:
    """Mock Supabase client that keeps inserted rows in memory."""

    def __init__(self):
        self._tables: dict[str, list] = {}
        self.fail_insert_when: Optional[Callable[[dict], bool]] = None

    def set_table_data(self, table_name: str, data: list):
        """Configure existing rows for a table."""
        self._tables[table_name] = list(data)

    def rows(self, table_name: str) -> list:
        """Rows currently stored in a table."""
        return self._tables.setdefault(table_name, [])

    def table(self, name: str) -> MockSupabaseTable:
        return MockSupabaseTable(self, name)


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("it_assets", [{"id": "1"}])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Any code using get_supabase_client() gets the mock.
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.asset_store_service.get_supabase_client", return_value=mock_supabase):
            yield mock_supabase


@pytest.fixture
def id_generator() -> SyntheticIdGenerator:
    """Id generator with a frozen clock and seeded randomness."""
    return SyntheticIdGenerator(
        clock=lambda: FIXED_EPOCH_SECONDS,
        rng=random.Random(42)
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
