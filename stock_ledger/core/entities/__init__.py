"""Core domain entities."""

from stock_ledger.core.entities.inventory import (
    RECEIVE_MOVEMENT,
    ActivityAction,
    ActivityEntry,
    InventoryRecord,
    InventoryReport,
    InventorySummary,
    NewInventoryRecord,
    ReportLine,
    StockStatus,
    compute_status,
)

__all__ = [
    "RECEIVE_MOVEMENT",
    "ActivityAction",
    "ActivityEntry",
    "InventoryRecord",
    "InventoryReport",
    "InventorySummary",
    "NewInventoryRecord",
    "ReportLine",
    "StockStatus",
    "compute_status",
]
