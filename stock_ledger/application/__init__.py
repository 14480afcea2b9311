"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from stock_ledger.application.services import (
    get_activity_log,
    get_inventory_store,
    get_record_locks,
    reset_services,
)
from stock_ledger.application.use_cases import (
    AddStockUseCase,
    DeleteStockUseCase,
    InventoryOverviewUseCase,
    IssueStockUseCase,
    ReturnStockUseCase,
)

__all__ = [
    # Services
    "get_inventory_store",
    "get_activity_log",
    "get_record_locks",
    "reset_services",
    # Use cases
    "AddStockUseCase",
    "IssueStockUseCase",
    "ReturnStockUseCase",
    "DeleteStockUseCase",
    "InventoryOverviewUseCase",
]
