"""Filtering and ordering of inventory records for display."""

from collections.abc import Iterable
from datetime import datetime

from stock_ledger.core.entities.inventory import (
    InventoryRecord,
    StockStatus,
    compute_status,
    utc_now,
)

# in_stock first, expired last
STATUS_DISPLAY_ORDER = {
    StockStatus.IN_STOCK: 0,
    StockStatus.OUT_OF_STOCK: 1,
    StockStatus.EXPIRED: 2,
}


def _haystack(record: InventoryRecord, status: StockStatus) -> str:
    parts = [
        record.inventory_code,
        record.name,
        record.category,
        record.description,
        record.location,
        status.value,
        f"{record.quantity:g}",
    ]
    return " ".join(p for p in parts if p).lower()


def filter_records(
    records: Iterable[InventoryRecord],
    query: str | None = None,
    status: StockStatus | None = None,
    now: datetime | None = None,
) -> list[InventoryRecord]:
    """Case-insensitive substring search plus an optional derived-status filter."""
    now = now or utc_now()
    term = (query or "").strip().lower()
    result = []
    for record in records:
        record_status = compute_status(record, now)
        if status is not None and record_status != status:
            continue
        if term and term not in _haystack(record, record_status):
            continue
        result.append(record)
    return result


def sort_for_display(
    records: Iterable[InventoryRecord],
    now: datetime | None = None,
) -> list[InventoryRecord]:
    """Order by derived status (in stock, out of stock, expired), then by name."""
    now = now or utc_now()
    return sorted(
        records,
        key=lambda r: (STATUS_DISPLAY_ORDER[compute_status(r, now)], r.name.lower()),
    )


def issuable_records(
    records: Iterable[InventoryRecord],
    now: datetime | None = None,
) -> list[InventoryRecord]:
    """Lots that may be issued right now, sorted by name."""
    now = now or utc_now()
    return sorted(
        (r for r in records if compute_status(r, now) == StockStatus.IN_STOCK),
        key=lambda r: r.name.lower(),
    )
