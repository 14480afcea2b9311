"""Return Stock Use Case: take a whole lot out of inventory."""

from dataclasses import dataclass

from stock_ledger.application.dto.responses import ReturnStockResponse
from stock_ledger.application.use_cases.base import LedgerUseCase, activity_fields
from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityEntry, InventoryRecord

logger = get_logger(__name__)


@dataclass
class ReturnStockResult:
    """Result of returning a lot."""

    record: InventoryRecord
    activity: ActivityEntry | None
    message: str = "Stock returned and removed"


class ReturnStockUseCase(LedgerUseCase):
    """
    Return a lot: the record is removed from the store entirely.

    Returns are not gated on status or quantity, so expired and empty lots
    can be cleared out too.
    """

    async def execute(self, record_id: str) -> ReturnStockResult:
        async with self.locked_record(record_id, "return") as record:
            logger.info("return_stock_started", record_id=record.id, quantity=record.quantity)

            store = await self._get_inventory_store()
            await self._store_call("remove", store.remove_record(record.id))
            activity = await self._record_activity(ActivityEntry.returned(record))

        logger.info("return_stock_complete", record_id=record.id, returned_qty=record.quantity)
        return ReturnStockResult(record=record, activity=activity)

    async def return_stock(self, record: InventoryRecord) -> ReturnStockResult:
        """Return the lot identified by ``record``, as stored at the time of the call."""
        return await self.execute(record.id)

    def to_response(self, result: ReturnStockResult) -> ReturnStockResponse:
        """Convert result to API response."""
        return ReturnStockResponse(
            message=result.message,
            record_id=result.record.id,
            returned_qty=result.record.quantity,
            **activity_fields(result.activity),
        )
