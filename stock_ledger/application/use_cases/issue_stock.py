"""Issue Stock Use Case: decrement a lot after validating the amount."""

from dataclasses import dataclass
from typing import Any

from stock_ledger.application.dto.responses import InventoryRecordResponse, IssueStockResponse
from stock_ledger.application.use_cases.base import LedgerUseCase, activity_fields
from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityEntry, InventoryRecord
from stock_ledger.core.services import IssuePlan, prepare_issue

logger = get_logger(__name__)


@dataclass
class IssueStockResult:
    """Result of issuing stock."""

    record: InventoryRecord
    plan: IssuePlan
    activity: ActivityEntry | None

    @property
    def message(self) -> str:
        unit = "unit" if self.plan.qty == 1 else "units"
        return f"Issued {self.plan.qty:g} {unit}"


class IssueStockUseCase(LedgerUseCase):
    """
    Issue stock out of a lot.

    All validation happens before the store is written, so a rejected
    request changes neither the record nor the activity log.
    """

    async def execute(self, record_id: str, quantity: Any) -> IssueStockResult:
        """Issue ``quantity`` units from the lot ``record_id``."""
        logger.info("issue_stock_started", record_id=record_id, quantity=quantity)

        async with self.locked_record(record_id, "issue") as record:
            # 1. Validate amount, availability and status against the fresh read
            plan = prepare_issue(record, quantity, self._now())

            # 2. Persist the new quantity
            store = await self._get_inventory_store()
            updated = await self._store_call(
                "update",
                store.update_record(
                    record.id,
                    {"quantity": plan.new_qty, "status": plan.next_status.value},
                ),
            )

            # 3. Record the movement
            activity = await self._record_activity(
                ActivityEntry.issued(
                    updated, qty=plan.qty, prev_qty=plan.prev_qty, new_qty=plan.new_qty
                )
            )

        logger.info(
            "issue_stock_complete",
            record_id=record.id,
            issued=plan.qty,
            remaining_qty=plan.new_qty,
            status=plan.next_status.value,
        )
        return IssueStockResult(record=updated, plan=plan, activity=activity)

    async def issue(self, record: InventoryRecord, quantity: Any) -> IssueStockResult:
        """
        Issue ``quantity`` units from ``record``.

        The caller's copy only identifies the lot: the store is re-read under
        the lock and validation runs against that read.
        """
        return await self.execute(record.id, quantity)

    def to_response(self, result: IssueStockResult) -> IssueStockResponse:
        """Convert result to API response."""
        return IssueStockResponse(
            message=result.message,
            record=InventoryRecordResponse.from_record(result.record, self._now()),
            issued=result.plan.qty,
            prev_qty=result.plan.prev_qty,
            new_qty=result.plan.new_qty,
            **activity_fields(result.activity),
        )
