"""
Core business logic services.

Layer-pure services that depend only on:
- stock_ledger/core/entities/*
- stock_ledger/core/interfaces/*
- stock_ledger/core/exceptions.py

NO infrastructure imports. All dependencies injected via arguments.
"""

from stock_ledger.core.services.inventory_export import CSV_COLUMNS, records_to_csv
from stock_ledger.core.services.inventory_query import (
    filter_records,
    issuable_records,
    sort_for_display,
)
from stock_ledger.core.services.inventory_report import build_inventory_report
from stock_ledger.core.services.inventory_summary import summarize
from stock_ledger.core.services.record_locks import RecordLocks
from stock_ledger.core.services.stock_ledger import (
    IssuePlan,
    coerce_positive_quantity,
    prepare_issue,
    prepare_new_stock,
)

__all__ = [
    # Ledger rules
    "IssuePlan",
    "coerce_positive_quantity",
    "prepare_issue",
    "prepare_new_stock",
    # Concurrency
    "RecordLocks",
    # Reporting
    "summarize",
    "build_inventory_report",
    "filter_records",
    "sort_for_display",
    "issuable_records",
    "records_to_csv",
    "CSV_COLUMNS",
]
