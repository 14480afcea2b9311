"""Inventory domain entities."""

import math
from datetime import UTC, date, datetime, time
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class StockStatus(str, Enum):
    """Derived status of a lot. Never stored as ground truth."""

    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"
    EXPIRED = "expired"


class ActivityAction(str, Enum):
    """Kinds of ledger mutation recorded in the activity log."""

    ADD_STOCK = "ADD_STOCK"
    ISSUE = "ISSUE"
    RETURN = "RETURN"
    DELETE = "DELETE"


RECEIVE_MOVEMENT = "RECEIVE"


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def coerce_number(value: Any) -> float:
    """Coerce a loosely typed number; missing or non-numeric becomes 0."""
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_date(value: Any) -> date | None:
    """Parse an ISO date or datetime. Unparseable values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value).date() if value.tzinfo else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return as_utc(parsed).date() if parsed.tzinfo else parsed.date()


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO timestamp into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if not isinstance(value, str):
        return None
    try:
        return as_utc(datetime.fromisoformat(value.strip()))
    except ValueError:
        return None


def expiry_instant(expiry: date) -> datetime:
    """A date-only expiry takes effect at midnight UTC of that day."""
    return datetime.combine(expiry, time.min, tzinfo=UTC)


class InventoryRecord(BaseModel):
    """
    One physical stock lot.

    Accepts both the remote API's camelCase payloads (``_id``, ``inventoryID``,
    ``unitCost``, ``expiryDate``...) and snake_case field names, so callers
    never branch on which key was present.
    """

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    inventory_code: str = Field(
        default="",
        validation_alias=AliasChoices("inventoryID", "inventoryCode", "inventory_code"),
    )
    name: str = ""
    category: str = ""
    description: str = ""
    location: str = ""
    quantity: float = 0.0
    unit_cost: float = Field(default=0.0, validation_alias=AliasChoices("unitCost", "unit_cost"))
    purchase_date: date | None = Field(
        default=None, validation_alias=AliasChoices("purchaseDate", "purchase_date")
    )
    expiry_date: date | None = Field(
        default=None, validation_alias=AliasChoices("expiryDate", "expiry_date")
    )
    # Denormalized status persisted by the backend; a hint only.
    status_hint: str | None = Field(
        default=None, validation_alias=AliasChoices("status", "status_hint")
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updatedAt", "updated_at")
    )

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        if v is None or v == "":
            raise ValueError("record id is required")
        return str(v)

    @field_validator("inventory_code", "name", "category", "description", "location", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def loose_number(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("unit_cost", mode="before")
    @classmethod
    def non_negative_cost(cls, v: Any) -> float:
        return max(0.0, coerce_number(v))

    @field_validator("purchase_date", "expiry_date", mode="before")
    @classmethod
    def loose_date(cls, v: Any) -> date | None:
        return parse_date(v)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def loose_datetime(cls, v: Any) -> datetime | None:
        return parse_datetime(v)

    @model_validator(mode="after")
    def default_inventory_code(self) -> "InventoryRecord":
        if not self.inventory_code:
            self.inventory_code = self.id
        return self

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "InventoryRecord":
        """Normalize a raw store payload into a record."""
        return cls.model_validate(payload)

    def status(self, now: datetime | None = None) -> StockStatus:
        """Derived status at ``now``."""
        return compute_status(self, now)

    @property
    def stock_value(self) -> float:
        """Value on hand; negative quantities or costs contribute nothing."""
        return max(0.0, self.quantity) * max(0.0, self.unit_cost)


def compute_status(record: InventoryRecord, now: datetime | None = None) -> StockStatus:
    """
    Derive a lot's status from its quantity and expiry.

    Expiry takes precedence over quantity: a lot whose expiry date is strictly
    before ``now`` is expired even with stock left.
    """
    current = as_utc(now) if now is not None else utc_now()
    if record.expiry_date is not None and expiry_instant(record.expiry_date) < current:
        return StockStatus.EXPIRED
    if record.quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    return StockStatus.IN_STOCK


class NewInventoryRecord(BaseModel):
    """Fields for a freshly received lot, before the store assigns an id."""

    name: str
    category: str = "General"
    description: str = ""
    location: str = "Main Warehouse"
    quantity: float
    unit_cost: float
    purchase_date: date = Field(default_factory=date.today)
    expiry_date: date | None = None
    inventory_code: str | None = None
    movement_type: str = RECEIVE_MOVEMENT


class ActivityEntry(BaseModel):
    """Audit record of one ledger mutation."""

    timestamp: datetime = Field(default_factory=utc_now)
    action: ActivityAction
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

    @classmethod
    def issued(
        cls, record: InventoryRecord, qty: float, prev_qty: float, new_qty: float
    ) -> "ActivityEntry":
        return cls(
            action=ActivityAction.ISSUE,
            record_id=record.id,
            inventory_code=record.inventory_code,
            name=record.name,
            qty=qty,
            prev_qty=prev_qty,
            new_qty=new_qty,
        )

    @classmethod
    def returned(cls, record: InventoryRecord) -> "ActivityEntry":
        return cls(
            action=ActivityAction.RETURN,
            record_id=record.id,
            inventory_code=record.inventory_code,
            name=record.name,
            qty=record.quantity,
            removed=True,
        )

    @classmethod
    def deleted(cls, record: InventoryRecord) -> "ActivityEntry":
        return cls(
            action=ActivityAction.DELETE,
            record_id=record.id,
            inventory_code=record.inventory_code,
            name=record.name,
            removed=True,
        )

    @classmethod
    def stock_added(cls, record: InventoryRecord) -> "ActivityEntry":
        return cls(
            action=ActivityAction.ADD_STOCK,
            record_id=record.id,
            inventory_code=record.inventory_code,
            name=record.name,
            qty=record.quantity,
            unit_cost=record.unit_cost,
            category=record.category,
            location=record.location,
        )

    def describe(self) -> str:
        """One-line description for the activity view."""
        label = self.name or self.inventory_code or self.record_id or ""
        if self.action == ActivityAction.ISSUE:
            return f"{label}: qty {self.qty:g} (from {self.prev_qty:g} to {self.new_qty:g})"
        if self.action == ActivityAction.RETURN:
            return f"{label}: removed qty {self.qty:g}"
        if self.action == ActivityAction.ADD_STOCK:
            return f"{label}: added qty {self.qty:g} at {self.unit_cost:g} per unit"
        return f"{label}: deleted"


class InventorySummary(BaseModel):
    """Counts by derived status plus value on hand."""

    total: int = 0
    in_stock: int = 0
    out_of_stock: int = 0
    expired: int = 0
    total_value: float = 0.0


class ReportLine(BaseModel):
    """One row in an inventory report table."""

    record_id: str | None = None
    inventory_code: str | None = None
    name: str
    category: str = ""
    quantity: float = 0.0
    expiry_date: date | None = None
    days_to_expiry: int | None = None
    issued_qty: float | None = None


class InventoryReport(BaseModel):
    """Aggregated inventory report."""

    generated_at: datetime = Field(default_factory=utc_now)
    total_items: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    expiring_soon: int = 0
    soonest_to_expire: list[ReportLine] = Field(default_factory=list)
    out_of_stock_items: list[ReportLine] = Field(default_factory=list)
    fastest_moving: list[ReportLine] = Field(default_factory=list)
