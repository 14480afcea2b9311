"""Data transfer objects for the API boundary."""

from stock_ledger.application.dto.requests import AddStockRequest, IssueStockRequest
from stock_ledger.application.dto.responses import (
    ActivityEntryResponse,
    ActivityLogResponse,
    AddStockResponse,
    DeleteStockResponse,
    ErrorResponse,
    HealthResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    InventoryReportResponse,
    InventorySummaryResponse,
    IssueStockResponse,
    ProviderHealthResponse,
    ReportLineResponse,
    ReturnStockResponse,
)

__all__ = [
    # Requests
    "AddStockRequest",
    "IssueStockRequest",
    # Responses
    "InventoryRecordResponse",
    "InventoryListResponse",
    "InventorySummaryResponse",
    "InventoryReportResponse",
    "ReportLineResponse",
    "ActivityEntryResponse",
    "ActivityLogResponse",
    "AddStockResponse",
    "IssueStockResponse",
    "ReturnStockResponse",
    "DeleteStockResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
