"""In-memory storage implementations."""

from stock_ledger.infrastructure.storage.memory.activity_log import InMemoryActivityLog

__all__ = ["InMemoryActivityLog"]
