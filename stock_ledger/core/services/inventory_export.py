"""CSV export of inventory records."""

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime

from stock_ledger.core.entities.inventory import InventoryRecord, compute_status, utc_now

CSV_COLUMNS = [
    "inventory_code",
    "name",
    "category",
    "quantity",
    "status",
    "location",
    "purchase_date",
    "expiry_date",
    "created_at",
]


def _iso(value: date | datetime | None) -> str:
    return value.isoformat() if value else ""


def records_to_csv(
    records: Iterable[InventoryRecord],
    now: datetime | None = None,
) -> str:
    """Render records as CSV with the derived status column."""
    now = now or utc_now()
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    writer.writerow(CSV_COLUMNS)
    for r in records:
        writer.writerow([
            r.inventory_code,
            r.name,
            r.category,
            f"{r.quantity:g}",
            compute_status(r, now).value,
            r.location,
            _iso(r.purchase_date),
            _iso(r.expiry_date),
            _iso(r.created_at),
        ])
    return output.getvalue()
