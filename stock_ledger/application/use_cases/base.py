"""Shared plumbing for ledger mutation use cases."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, TypeVar

from stock_ledger.application.dto.responses import ActivityEntryResponse
from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityEntry, InventoryRecord, utc_now
from stock_ledger.core.exceptions import LedgerError, PersistenceFailureError, RecordNotFoundError
from stock_ledger.core.interfaces import IActivityLog, IInventoryStore
from stock_ledger.core.services import RecordLocks

logger = get_logger(__name__)

T = TypeVar("T")

ACTIVITY_NOT_RECORDED = "The change was saved but could not be written to the activity log"


def activity_fields(activity: ActivityEntry | None) -> dict[str, Any]:
    """Activity part of a mutation response; a lost entry becomes a warning."""
    if activity is None:
        return {"activity": None, "warning": ACTIVITY_NOT_RECORDED}
    return {"activity": ActivityEntryResponse.from_entry(activity), "warning": None}


class LedgerUseCase:
    """
    Base for use cases that mutate a lot and record the mutation.

    Dependencies are optional so tests can inject mocks; anything left out is
    resolved lazily from the application service factories.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        activity_log: IActivityLog | None = None,
        record_locks: RecordLocks | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._inventory_store = inventory_store
        self._activity_log = activity_log
        self._record_locks = record_locks
        self._clock = clock or utc_now

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stock_ledger.application.services import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stock_ledger.application.services import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    def _get_record_locks(self) -> RecordLocks:
        if self._record_locks is None:
            from stock_ledger.application.services import get_record_locks

            self._record_locks = get_record_locks()
        return self._record_locks

    def _now(self) -> datetime:
        return self._clock()

    async def _store_call(self, operation: str, call: Awaitable[T]) -> T:
        """Await a store call; foreign failures surface as PersistenceFailureError."""
        try:
            return await call
        except LedgerError:
            raise
        except Exception as e:
            logger.error("inventory_store_call_failed", operation=operation, error=str(e))
            raise PersistenceFailureError(operation, str(e) or e.__class__.__name__) from e

    async def load_record(self, record_id: str) -> InventoryRecord:
        """Fetch a lot or raise RecordNotFoundError."""
        store = await self._get_inventory_store()
        record = await self._store_call("get", store.get_record(record_id))
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    @asynccontextmanager
    async def locked_record(self, record_id: str, action: str) -> AsyncIterator[InventoryRecord]:
        """
        Hold the record's lock, then load it.

        The read, the validation and the write all happen under the same lock,
        so a concurrent mutation can never validate against a stale quantity.
        """
        async with self._get_record_locks().hold(record_id, action):
            yield await self.load_record(record_id)

    async def _record_activity(self, entry: ActivityEntry) -> ActivityEntry | None:
        """
        Append an entry once the store write has succeeded.

        The mutation is already durable at this point, so a failing log is
        reported and the entry dropped instead of failing the request.
        """
        activity_log = await self._get_activity_log()
        try:
            await activity_log.append(entry)
        except Exception as e:
            logger.error(
                "activity_append_failed",
                action=entry.action.value,
                record_id=entry.record_id,
                error=str(e),
            )
            return None
        return entry
