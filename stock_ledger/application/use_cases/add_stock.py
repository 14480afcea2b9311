"""Add Stock Use Case: receive a new lot (RECEIVE movement)."""

from dataclasses import dataclass

from stock_ledger.application.dto.requests import AddStockRequest
from stock_ledger.application.dto.responses import AddStockResponse, InventoryRecordResponse
from stock_ledger.application.use_cases.base import LedgerUseCase, activity_fields
from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityEntry, InventoryRecord
from stock_ledger.core.services import prepare_new_stock

logger = get_logger(__name__)


@dataclass
class AddStockResult:
    """Result of receiving stock."""

    record: InventoryRecord
    activity: ActivityEntry | None
    message: str = "Stock added successfully"


class AddStockUseCase(LedgerUseCase):
    """
    Receive stock as a brand new lot.

    Lots are never merged: receiving an item name that already exists
    creates a second record with its own cost and dates.
    """

    async def execute(self, request: AddStockRequest) -> AddStockResult:
        """Execute add stock use case."""
        logger.info(
            "add_stock_started",
            name=request.name,
            quantity=request.quantity,
            unit_cost=request.unit_cost,
        )

        # 1. Validate and apply defaults
        draft = prepare_new_stock(
            request.name,
            request.quantity,
            request.unit_cost,
            category=request.category,
            description=request.description,
            location=request.location,
            purchase_date=request.purchase_date,
            expiry_date=request.expiry_date,
            inventory_code=request.inventory_code,
        )

        # 2. Create the lot
        store = await self._get_inventory_store()
        record = await self._store_call("create", store.create_record(draft))

        # 3. Record the receipt
        activity = await self._record_activity(ActivityEntry.stock_added(record))

        logger.info(
            "add_stock_complete",
            record_id=record.id,
            inventory_code=record.inventory_code,
            quantity=record.quantity,
        )
        return AddStockResult(record=record, activity=activity)

    def to_response(self, result: AddStockResult) -> AddStockResponse:
        """Convert result to API response."""
        return AddStockResponse(
            message=result.message,
            record=InventoryRecordResponse.from_record(result.record, self._now()),
            **activity_fields(result.activity),
        )
