"""Storage infrastructure implementations."""

from stock_ledger.infrastructure.storage.http import HttpInventoryStore
from stock_ledger.infrastructure.storage.memory import InMemoryActivityLog
from stock_ledger.infrastructure.storage.sqlite import (
    SQLiteActivityLog,
    SQLiteInventoryStore,
    close_database,
    get_connection,
    get_database,
    get_transaction,
)

__all__ = [
    # Inventory stores
    "HttpInventoryStore",
    "SQLiteInventoryStore",
    # Activity logs
    "InMemoryActivityLog",
    "SQLiteActivityLog",
    # Ledger database
    "get_database",
    "close_database",
    "get_connection",
    "get_transaction",
]
