"""Summary statistics over inventory records."""

from collections.abc import Iterable
from datetime import datetime

from stock_ledger.core.entities.inventory import (
    InventoryRecord,
    InventorySummary,
    StockStatus,
    compute_status,
    utc_now,
)


def summarize(
    records: Iterable[InventoryRecord],
    now: datetime | None = None,
) -> InventorySummary:
    """
    Count records by derived status and total their value on hand.

    Every record falls in exactly one status bucket, so the three counts
    always add up to ``total``. Negative quantities contribute zero value.
    """
    now = now or utc_now()
    counts = {status: 0 for status in StockStatus}
    total = 0
    total_value = 0.0

    for record in records:
        total += 1
        counts[compute_status(record, now)] += 1
        total_value += record.stock_value

    return InventorySummary(
        total=total,
        in_stock=counts[StockStatus.IN_STOCK],
        out_of_stock=counts[StockStatus.OUT_OF_STOCK],
        expired=counts[StockStatus.EXPIRED],
        total_value=total_value,
    )
