"""Delete Stock Use Case."""

from dataclasses import dataclass

from stock_ledger.application.dto.responses import DeleteStockResponse
from stock_ledger.application.use_cases.base import LedgerUseCase, activity_fields
from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityEntry, InventoryRecord

logger = get_logger(__name__)


@dataclass
class DeleteStockResult:
    """Result of deleting a lot."""

    record: InventoryRecord
    activity: ActivityEntry | None
    message: str = "Inventory deleted"


class DeleteStockUseCase(LedgerUseCase):
    """Delete a lot, e.g. one entered by mistake."""

    async def execute(self, record_id: str) -> DeleteStockResult:
        async with self.locked_record(record_id, "delete") as record:
            logger.info("delete_stock_started", record_id=record.id)

            store = await self._get_inventory_store()
            await self._store_call("remove", store.remove_record(record.id))
            activity = await self._record_activity(ActivityEntry.deleted(record))

        logger.info("delete_stock_complete", record_id=record.id, name=record.name)
        return DeleteStockResult(record=record, activity=activity)

    async def delete(self, record: InventoryRecord) -> DeleteStockResult:
        return await self.execute(record.id)

    def to_response(self, result: DeleteStockResult) -> DeleteStockResponse:
        """Convert result to API response."""
        return DeleteStockResponse(
            message=result.message,
            record_id=result.record.id,
            **activity_fields(result.activity),
        )
