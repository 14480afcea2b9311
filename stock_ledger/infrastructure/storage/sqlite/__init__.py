"""SQLite storage implementations."""

from stock_ledger.infrastructure.storage.sqlite.activity_log_store import SQLiteActivityLog
from stock_ledger.infrastructure.storage.sqlite.connection import (
    LedgerDatabase,
    close_database,
    get_connection,
    get_database,
    get_transaction,
)
from stock_ledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore

__all__ = [
    # Connection
    "LedgerDatabase",
    "get_database",
    "close_database",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteActivityLog",
]
