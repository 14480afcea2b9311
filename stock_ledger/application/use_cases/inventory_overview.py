"""Inventory Overview Use Case: listings, summary, report, export and activity."""

from dataclasses import dataclass, field

from stock_ledger.application.dto.responses import (
    ActivityEntryResponse,
    ActivityLogResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    InventoryReportResponse,
    InventorySummaryResponse,
    ReportLineResponse,
)
from stock_ledger.application.use_cases.base import LedgerUseCase
from stock_ledger.config import get_logger, get_settings
from stock_ledger.core.entities.inventory import (
    ActivityEntry,
    InventoryRecord,
    InventoryReport,
    InventorySummary,
    StockStatus,
)
from stock_ledger.core.exceptions import PersistenceFailureError
from stock_ledger.core.services import (
    build_inventory_report,
    filter_records,
    issuable_records,
    records_to_csv,
    sort_for_display,
    summarize,
)

logger = get_logger(__name__)


@dataclass
class InventorySnapshot:
    """Records read from the store, possibly empty because the read failed."""

    records: list[InventoryRecord] = field(default_factory=list)
    degraded: bool = False


class InventoryOverviewUseCase(LedgerUseCase):
    """
    Read-side views over the inventory.

    A failed store read degrades to an empty listing so the views still
    render; the failure is logged and flagged as ``degraded``.
    """

    async def snapshot(self) -> InventorySnapshot:
        store = await self._get_inventory_store()
        try:
            records = await self._store_call("list", store.list_records())
        except PersistenceFailureError as e:
            logger.warning("inventory_list_degraded", error=e.message)
            return InventorySnapshot(degraded=True)
        return InventorySnapshot(records=list(records))

    async def list_inventory(
        self,
        query: str | None = None,
        status: StockStatus | None = None,
        issuable: bool = False,
    ) -> InventoryListResponse:
        """List lots in display order, optionally filtered."""
        now = self._now()
        snapshot = await self.snapshot()
        if issuable:
            records = issuable_records(snapshot.records, now)
            records = filter_records(records, query, status, now)
        else:
            records = sort_for_display(filter_records(snapshot.records, query, status, now), now)

        return InventoryListResponse(
            items=[InventoryRecordResponse.from_record(r, now) for r in records],
            total=len(records),
            degraded=snapshot.degraded,
        )

    async def get_record(self, record_id: str) -> InventoryRecordResponse:
        record = await self.load_record(record_id)
        return InventoryRecordResponse.from_record(record, self._now())

    async def summary(self) -> InventorySummaryResponse:
        snapshot = await self.snapshot()
        summary: InventorySummary = summarize(snapshot.records, self._now())
        return InventorySummaryResponse(**summary.model_dump(), degraded=snapshot.degraded)

    async def report(self) -> InventoryReportResponse:
        settings = get_settings().report
        snapshot = await self.snapshot()
        activity = await self._activity_entries()
        report: InventoryReport = build_inventory_report(
            snapshot.records,
            activity,
            now=self._now(),
            expiring_within_days=settings.expiring_within_days,
            low_stock_threshold=settings.low_stock_threshold,
            limit=settings.top_n,
        )

        logger.info(
            "inventory_report_built",
            total_items=report.total_items,
            expiring_soon=report.expiring_soon,
            low_stock=report.low_stock_count,
        )
        return InventoryReportResponse(
            generated_at=report.generated_at,
            total_items=report.total_items,
            total_value=report.total_value,
            low_stock_count=report.low_stock_count,
            expiring_soon=report.expiring_soon,
            expiring_within_days=settings.expiring_within_days,
            soonest_to_expire=[ReportLineResponse(**line.model_dump()) for line in report.soonest_to_expire],
            out_of_stock_items=[ReportLineResponse(**line.model_dump()) for line in report.out_of_stock_items],
            fastest_moving=[ReportLineResponse(**line.model_dump()) for line in report.fastest_moving],
            degraded=snapshot.degraded,
        )

    async def export_csv(
        self,
        query: str | None = None,
        status: StockStatus | None = None,
    ) -> str:
        """CSV of the (filtered) listing in display order."""
        now = self._now()
        snapshot = await self.snapshot()
        records = sort_for_display(filter_records(snapshot.records, query, status, now), now)
        logger.info("inventory_exported", rows=len(records), degraded=snapshot.degraded)
        return records_to_csv(records, now)

    async def activity(self, limit: int | None = None) -> ActivityLogResponse:
        activity_log = await self._get_activity_log()
        entries = await activity_log.list_entries(limit)
        return ActivityLogResponse(
            entries=[ActivityEntryResponse.from_entry(e) for e in entries],
            total=len(entries),
            max_entries=activity_log.max_entries,
        )

    async def _activity_entries(self) -> list[ActivityEntry]:
        activity_log = await self._get_activity_log()
        try:
            return await activity_log.list_entries()
        except PersistenceFailureError as e:
            logger.warning("activity_list_degraded", error=e.message)
            return []
