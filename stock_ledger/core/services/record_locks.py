"""
Per-record mutual exclusion for ledger mutations.

Only one issue, return or delete may be in flight for a given record. A
second request for a busy record is rejected rather than queued, which is the
service-side counterpart of disabling the row's button while its request is
outstanding. Different records never wait on each other.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from stock_ledger.config import get_logger
from stock_ledger.core.exceptions import OperationInProgressError

logger = get_logger(__name__)


class RecordLocks:
    """Registry of one asyncio.Lock per record id currently being mutated."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def is_busy(self, record_id: str) -> bool:
        lock = self._locks.get(record_id)
        return lock is not None and lock.locked()

    @property
    def in_flight(self) -> set[str]:
        """Record ids with an operation outstanding."""
        return {key for key, lock in self._locks.items() if lock.locked()}

    @asynccontextmanager
    async def hold(self, record_id: str, action: str) -> AsyncIterator[None]:
        """
        Hold the record's lock for the duration of one operation.

        Raises:
            OperationInProgressError: the record already has an operation running.
        """
        lock = self._locks.setdefault(record_id, asyncio.Lock())
        if lock.locked():
            logger.warning("record_busy", record_id=record_id, action=action)
            raise OperationInProgressError(record_id, action)

        async with lock:
            try:
                yield
            finally:
                self._locks.pop(record_id, None)
