"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from stock_ledger.core.entities.inventory import (
    ActivityEntry,
    InventoryRecord,
    compute_status,
)


class InventoryRecordResponse(BaseModel):
    """One lot with its status derived at response time."""

    id: str = Field(..., description="Record ID")
    inventory_code: str = Field(..., description="Business inventory code")
    name: str = Field(..., description="Item name")
    category: str = Field(default="", description="Category")
    description: str = Field(default="", description="Notes")
    location: str = Field(default="", description="Storage location")
    quantity: float = Field(..., description="Quantity on hand")
    unit_cost: float = Field(default=0.0, description="Cost per unit")
    stock_value: float = Field(default=0.0, description="max(0, quantity) * unit_cost")
    status: str = Field(..., description="Derived status: in_stock, out_of_stock, expired")
    purchase_date: date | None = Field(default=None, description="Purchase date")
    expiry_date: date | None = Field(default=None, description="Expiry date")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(
        cls, record: InventoryRecord, now: datetime | None = None
    ) -> "InventoryRecordResponse":
        return cls(
            id=record.id,
            inventory_code=record.inventory_code,
            name=record.name,
            category=record.category,
            description=record.description,
            location=record.location,
            quantity=record.quantity,
            unit_cost=record.unit_cost,
            stock_value=record.stock_value,
            status=compute_status(record, now).value,
            purchase_date=record.purchase_date,
            expiry_date=record.expiry_date,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ActivityEntryResponse(BaseModel):
    """One activity log entry."""

    timestamp: datetime
    action: str = Field(..., description="ADD_STOCK, ISSUE, RETURN or DELETE")
    record_id: str | None = None
    inventory_code: str | None = None
    name: str = ""
    qty: float | None = None
    prev_qty: float | None = None
    new_qty: float | None = None
    removed: bool = False
    unit_cost: float | None = None
    category: str | None = None
    location: str | None = None
    summary: str = Field(default="", description="One-line description")

    @classmethod
    def from_entry(cls, entry: ActivityEntry) -> "ActivityEntryResponse":
        return cls(
            **entry.model_dump(exclude={"action"}),
            action=entry.action.value,
            summary=entry.describe(),
        )


class MutationResponse(BaseModel):
    """Common envelope for ledger mutations."""

    success: bool = True
    message: str = Field(..., description="Human-readable outcome")
    activity: ActivityEntryResponse | None = Field(
        default=None, description="Activity entry recorded for the mutation"
    )
    warning: str | None = Field(
        default=None, description="Set when the change was saved but its activity entry was lost"
    )


class IssueStockResponse(MutationResponse):
    """Response after issuing stock."""

    record: InventoryRecordResponse
    issued: float
    prev_qty: float
    new_qty: float


class ReturnStockResponse(MutationResponse):
    """Response after returning (removing) a lot."""

    record_id: str
    returned_qty: float
    removed: bool = True


class DeleteStockResponse(MutationResponse):
    """Response after deleting a lot."""

    record_id: str
    removed: bool = True


class AddStockResponse(MutationResponse):
    """Response after receiving a new lot."""

    record: InventoryRecordResponse


class InventoryListResponse(BaseModel):
    """Listing of lots."""

    items: list[InventoryRecordResponse] = Field(default_factory=list)
    total: int = 0
    degraded: bool = Field(
        default=False, description="True when the store could not be read"
    )


class InventorySummaryResponse(BaseModel):
    """Counts by derived status plus value on hand."""

    total: int
    in_stock: int
    out_of_stock: int
    expired: int
    total_value: float
    degraded: bool = False


class ReportLineResponse(BaseModel):
    """One row of a report table."""

    record_id: str | None = None
    inventory_code: str | None = None
    name: str
    category: str = ""
    quantity: float = 0.0
    expiry_date: date | None = None
    days_to_expiry: int | None = None
    issued_qty: float | None = None


class InventoryReportResponse(BaseModel):
    """Aggregated inventory report."""

    generated_at: datetime
    total_items: int
    total_value: float
    low_stock_count: int
    expiring_soon: int
    expiring_within_days: int
    soonest_to_expire: list[ReportLineResponse] = Field(default_factory=list)
    out_of_stock_items: list[ReportLineResponse] = Field(default_factory=list)
    fastest_moving: list[ReportLineResponse] = Field(default_factory=list)
    degraded: bool = False


class ActivityLogResponse(BaseModel):
    """Activity log, newest first."""

    entries: list[ActivityEntryResponse] = Field(default_factory=list)
    total: int = 0
    max_entries: int


class ProviderHealthResponse(BaseModel):
    """Health status of a backing service."""

    name: str
    available: bool
    details: dict = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    inventory_store: ProviderHealthResponse | None = None
    activity_log: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. RECORD_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
