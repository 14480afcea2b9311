"""Fixtures for use case tests."""

from unittest.mock import AsyncMock

import pytest

from stock_ledger.core.services import RecordLocks
from stock_ledger.infrastructure.storage.memory import InMemoryActivityLog


@pytest.fixture
def mock_inventory_store():
    return AsyncMock()


@pytest.fixture
def activity_log():
    return InMemoryActivityLog(max_entries=200)


@pytest.fixture
def record_locks():
    return RecordLocks()


@pytest.fixture
def ledger_deps(mock_inventory_store, activity_log, record_locks, clock):
    """Keyword arguments shared by every ledger use case."""
    return {
        "inventory_store": mock_inventory_store,
        "activity_log": activity_log,
        "record_locks": record_locks,
        "clock": clock,
    }
