"""
Inventory report aggregation.

Builds the figures shown on the inventory report page: totals, low stock,
lots expiring soon, out-of-stock lots, and the fastest moving items. Movement
speed comes from ISSUE entries in the activity log since the record store
keeps no movement history of its own.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from stock_ledger.core.entities.inventory import (
    ActivityAction,
    ActivityEntry,
    InventoryRecord,
    InventoryReport,
    ReportLine,
    StockStatus,
    as_utc,
    compute_status,
    utc_now,
)
from stock_ledger.core.services.inventory_summary import summarize


def _line(record: InventoryRecord, **extra) -> ReportLine:
    return ReportLine(
        record_id=record.id,
        inventory_code=record.inventory_code,
        name=record.name,
        category=record.category,
        quantity=record.quantity,
        expiry_date=record.expiry_date,
        **extra,
    )


def build_inventory_report(
    records: Iterable[InventoryRecord],
    activity: Iterable[ActivityEntry] = (),
    now: datetime | None = None,
    expiring_within_days: int = 30,
    low_stock_threshold: float = 10.0,
    limit: int = 5,
) -> InventoryReport:
    """
    Aggregate records and activity into an InventoryReport.

    Args:
        records: Current lots.
        activity: Activity log entries, any order.
        now: Reference time (defaults to now, UTC).
        expiring_within_days: Window for "expiring soon".
        low_stock_threshold: In-stock lots at or below this quantity count as low.
        limit: Maximum rows per report table.
    """
    now = as_utc(now) if now is not None else utc_now()
    today = now.date()
    records = list(records)
    summary = summarize(records, now)

    low_stock = 0
    expiring: list[tuple[int, InventoryRecord]] = []
    out_of_stock: list[InventoryRecord] = []

    for record in records:
        status = compute_status(record, now)
        if status == StockStatus.OUT_OF_STOCK:
            out_of_stock.append(record)
            continue
        if status == StockStatus.EXPIRED:
            continue
        if record.quantity <= low_stock_threshold:
            low_stock += 1
        if record.expiry_date is not None:
            days_left = (record.expiry_date - today).days
            if days_left <= expiring_within_days:
                expiring.append((days_left, record))

    expiring.sort(key=lambda pair: (pair[0], pair[1].name.lower()))
    out_of_stock.sort(key=lambda r: r.name.lower())

    issued: dict[str, float] = defaultdict(float)
    last_seen: dict[str, ActivityEntry] = {}
    for entry in activity:
        if entry.action != ActivityAction.ISSUE or not entry.qty:
            continue
        key = entry.name or entry.inventory_code or entry.record_id or ""
        issued[key] += entry.qty
        last_seen.setdefault(key, entry)

    fastest = sorted(issued.items(), key=lambda kv: (-kv[1], kv[0].lower()))[:limit]

    return InventoryReport(
        generated_at=now,
        total_items=summary.total,
        total_value=summary.total_value,
        low_stock_count=low_stock,
        expiring_soon=len(expiring),
        soonest_to_expire=[_line(r, days_to_expiry=days) for days, r in expiring[:limit]],
        out_of_stock_items=[_line(r) for r in out_of_stock[:limit]],
        fastest_moving=[
            ReportLine(
                record_id=last_seen[name].record_id,
                inventory_code=last_seen[name].inventory_code,
                name=name,
                issued_qty=qty,
            )
            for name, qty in fastest
        ],
    )
