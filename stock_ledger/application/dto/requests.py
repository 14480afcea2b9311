"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Quantities and costs are accepted loosely typed here; the ledger rules
decide whether a value is usable so that a bad amount is reported as a
ledger error rather than a schema error.
"""

from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class AddStockRequest(BaseModel):
    """Request to receive a new lot into inventory."""

    name: str | None = Field(
        default=None,
        description="Item name",
        examples=["Rice"],
    )
    quantity: Any = Field(
        default=None,
        description="Quantity received, must be > 0",
        examples=[50],
    )
    unit_cost: Any = Field(
        default=None,
        validation_alias=AliasChoices("unit_cost", "unitCost"),
        description="Cost per unit, must be >= 0",
        examples=[2.5],
    )
    category: str | None = Field(
        default=None,
        description="Category (defaults to General)",
        examples=["Grains"],
    )
    description: str | None = Field(default=None, description="Free text notes")
    location: str | None = Field(
        default=None,
        description="Storage location (defaults to Main Warehouse)",
        examples=["Main Warehouse", "Cold Room"],
    )
    purchase_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("purchase_date", "purchaseDate"),
        description="Purchase date (defaults to today)",
    )
    expiry_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("expiry_date", "expiryDate"),
        description="Expiry date, if the lot perishes",
    )
    inventory_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("inventory_code", "inventoryID"),
        description="Business code; generated by the store when omitted",
    )


class IssueStockRequest(BaseModel):
    """Request to issue units out of a lot."""

    quantity: Any = Field(
        default=None,
        description="Units to issue, must be > 0 and <= quantity on hand",
        examples=[4],
    )
