"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import stock_ledger.infrastructure.storage.sqlite.connection as conn_module
from stock_ledger.infrastructure.storage.sqlite.connection import close_database
from stock_ledger.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "ledger.db"


@pytest.fixture
async def ledger_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database with the ledger connections pointed at it."""
    await initialize_database(temp_db_path)

    conn_module._database = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = temp_db_path
    mock_settings.storage.read_connections = 2
    mock_settings.storage.busy_timeout = 5000

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_database()
