"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers. Tests replace these through
``app.dependency_overrides``.
"""

from stock_ledger.application.use_cases import (
    AddStockUseCase,
    DeleteStockUseCase,
    InventoryOverviewUseCase,
    IssueStockUseCase,
    ReturnStockUseCase,
)


# Use case dependencies; stores are resolved lazily from application.services
def get_add_stock_use_case() -> AddStockUseCase:
    """Get add stock use case."""
    return AddStockUseCase()


def get_issue_stock_use_case() -> IssueStockUseCase:
    """Get issue stock use case."""
    return IssueStockUseCase()


def get_return_stock_use_case() -> ReturnStockUseCase:
    """Get return stock use case."""
    return ReturnStockUseCase()


def get_delete_stock_use_case() -> DeleteStockUseCase:
    """Get delete stock use case."""
    return DeleteStockUseCase()


def get_inventory_overview_use_case() -> InventoryOverviewUseCase:
    """Get read-side inventory use case."""
    return InventoryOverviewUseCase()
