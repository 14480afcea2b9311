"""
Stock ledger rules.

Pure validation and arithmetic for issuing and receiving stock. Nothing in
this module touches a store or the activity log; use cases call these
functions before any I/O so that a rejected request leaves no trace.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from typing import Any

from stock_ledger.core.entities.inventory import (
    InventoryRecord,
    NewInventoryRecord,
    StockStatus,
    compute_status,
)
from stock_ledger.core.exceptions import (
    ExceedsAvailableError,
    InvalidQuantityError,
    ItemNotIssuableError,
    ValidationError,
)


@dataclass(frozen=True)
class IssuePlan:
    """Outcome of a validated issue, before it is persisted."""

    record_id: str
    qty: float
    prev_qty: float
    new_qty: float
    next_status: StockStatus


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_positive_quantity(value: Any, field: str = "quantity") -> float:
    """Return ``value`` as a float, or raise InvalidQuantityError unless it is > 0."""
    number = _to_float(value)
    if number is None or number <= 0:
        raise InvalidQuantityError(value, field=field)
    return number


def prepare_issue(
    record: InventoryRecord,
    requested_qty: Any,
    now: datetime | None = None,
) -> IssuePlan:
    """
    Validate an issue request against a lot and compute the new quantity.

    Checks run in order: the amount must be a positive number, it must not
    exceed the quantity on hand, and the lot must currently derive to
    ``in_stock`` (an expired lot with stock left is not issuable).

    Raises:
        InvalidQuantityError: amount is zero, negative or not numeric.
        ExceedsAvailableError: amount is greater than the quantity on hand.
        ItemNotIssuableError: the lot is not in stock.
    """
    qty = coerce_positive_quantity(requested_qty)
    available = max(0.0, record.quantity)
    if qty > available:
        raise ExceedsAvailableError(record.id, requested=qty, available=available)

    status = compute_status(record, now)
    if status != StockStatus.IN_STOCK:
        raise ItemNotIssuableError(record.id, status.value)

    new_qty = available - qty
    next_status = compute_status(record.model_copy(update={"quantity": new_qty}), now)
    return IssuePlan(
        record_id=record.id,
        qty=qty,
        prev_qty=available,
        new_qty=new_qty,
        next_status=next_status,
    )


def prepare_new_stock(
    name: Any,
    quantity: Any,
    unit_cost: Any,
    **fields: Any,
) -> NewInventoryRecord:
    """
    Validate a received lot and build the draft to create.

    Text fields are stripped; ``purchase_date`` defaults to today and
    ``expiry_date`` stays optional.
    """
    clean_name = (name or "").strip() if isinstance(name, str) else ""
    if not clean_name:
        raise ValidationError(field="name", message="item name is required", value=name)

    qty = coerce_positive_quantity(quantity)

    cost = _to_float(unit_cost)
    if cost is None or cost < 0:
        raise ValidationError(
            field="unit_cost", message="must be a non-negative number", value=unit_cost
        )

    draft_fields = {k: v for k, v in fields.items() if v is not None}
    for key in ("category", "description", "location", "inventory_code"):
        if isinstance(draft_fields.get(key), str):
            draft_fields[key] = draft_fields[key].strip()
    for key in ("category", "location"):
        if draft_fields.get(key) == "":
            del draft_fields[key]

    return NewInventoryRecord(name=clean_name, quantity=qty, unit_cost=cost, **draft_fields)
