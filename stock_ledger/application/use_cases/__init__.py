"""Application use cases."""

from stock_ledger.application.use_cases.add_stock import AddStockResult, AddStockUseCase
from stock_ledger.application.use_cases.delete_stock import DeleteStockResult, DeleteStockUseCase
from stock_ledger.application.use_cases.inventory_overview import (
    InventoryOverviewUseCase,
    InventorySnapshot,
)
from stock_ledger.application.use_cases.issue_stock import IssueStockResult, IssueStockUseCase
from stock_ledger.application.use_cases.return_stock import ReturnStockResult, ReturnStockUseCase

__all__ = [
    "AddStockUseCase",
    "AddStockResult",
    "IssueStockUseCase",
    "IssueStockResult",
    "ReturnStockUseCase",
    "ReturnStockResult",
    "DeleteStockUseCase",
    "DeleteStockResult",
    "InventoryOverviewUseCase",
    "InventorySnapshot",
]
