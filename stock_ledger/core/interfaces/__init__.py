"""Core interfaces (ports) for dependency injection."""

from stock_ledger.core.interfaces.activity_log import IActivityLog
from stock_ledger.core.interfaces.inventory_store import IInventoryStore

__all__ = [
    "IActivityLog",
    "IInventoryStore",
]
