"""
Service factory functions for dependency injection.

This module wires the configured infrastructure implementations to the
ledger use cases. Use cases and API dependencies should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from stock_ledger.config import get_logger, get_settings
from stock_ledger.core.exceptions import ConfigurationError
from stock_ledger.core.services import RecordLocks

if TYPE_CHECKING:
    from stock_ledger.core.interfaces import IActivityLog, IInventoryStore

logger = get_logger(__name__)

# Singleton instances
_inventory_store: "IInventoryStore | None" = None
_activity_log: "IActivityLog | None" = None
_record_locks: RecordLocks | None = None


async def get_inventory_store() -> "IInventoryStore":
    """
    Get or create the configured inventory record store.

    ``STORE_BACKEND=http`` talks to the remote inventory API,
    ``STORE_BACKEND=sqlite`` keeps records in the local database.
    """
    global _inventory_store

    if _inventory_store is not None:
        return _inventory_store

    backend = get_settings().store.backend
    if backend == "http":
        # Lazy import infrastructure to avoid circular imports
        from stock_ledger.infrastructure.storage.http import HttpInventoryStore

        _inventory_store = HttpInventoryStore()
    elif backend == "sqlite":
        from stock_ledger.infrastructure.storage.sqlite import SQLiteInventoryStore

        _inventory_store = SQLiteInventoryStore()
    else:
        raise ConfigurationError(f"Unknown inventory store backend: {backend}")

    logger.info("inventory_store_selected", backend=backend)
    return _inventory_store


async def get_activity_log() -> "IActivityLog":
    """Get or create the configured activity log."""
    global _activity_log

    if _activity_log is not None:
        return _activity_log

    activity = get_settings().activity
    if activity.backend == "memory":
        from stock_ledger.infrastructure.storage.memory import InMemoryActivityLog

        _activity_log = InMemoryActivityLog(max_entries=activity.max_entries)
    elif activity.backend == "sqlite":
        from stock_ledger.infrastructure.storage.sqlite import SQLiteActivityLog

        _activity_log = SQLiteActivityLog(max_entries=activity.max_entries)
    else:
        raise ConfigurationError(f"Unknown activity log backend: {activity.backend}")

    logger.info(
        "activity_log_selected",
        backend=activity.backend,
        max_entries=activity.max_entries,
    )
    return _activity_log


def get_record_locks() -> RecordLocks:
    """Get the process-wide in-flight registry shared by all mutations."""
    global _record_locks
    if _record_locks is None:
        _record_locks = RecordLocks()
    return _record_locks


def reset_services() -> None:
    """Reset all singleton instances (for testing)."""
    global _inventory_store, _activity_log, _record_locks
    _inventory_store = None
    _activity_log = None
    _record_locks = None
