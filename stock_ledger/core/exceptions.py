"""
Domain exceptions for the stock ledger.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(LedgerError):
    """Input validation failed."""

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code=code,
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidQuantityError(ValidationError):
    """Quantity is not a positive number."""

    def __init__(self, value: Any, field: str = "quantity"):
        super().__init__(
            field=field,
            message=f"{value!r} is not a positive number",
            value=value,
            code="INVALID_QUANTITY",
        )


class ExceedsAvailableError(ValidationError):
    """Requested issue quantity is greater than the stock on hand."""

    def __init__(self, record_id: str, requested: float, available: float):
        super().__init__(
            field="quantity",
            message=f"issue quantity {requested:g} exceeds available stock {available:g}",
            value=requested,
            code="EXCEEDS_AVAILABLE",
        )
        self.details.update(
            {
                "record_id": record_id,
                "requested": requested,
                "available": available,
            }
        )


class ItemNotIssuableError(ValidationError):
    """Lot cannot be issued in its current derived status."""

    def __init__(self, record_id: str, status: str):
        super().__init__(
            field="status",
            message=f"only in_stock items can be issued, item is {status}",
            value=status,
            code="ITEM_NOT_ISSUABLE",
        )
        self.details["record_id"] = record_id


# Concurrency Exceptions
class OperationInProgressError(LedgerError):
    """Another mutation on the same record has not finished yet."""

    def __init__(self, record_id: str, action: str):
        super().__init__(
            f"Another operation is already in progress for record {record_id}",
            code="OPERATION_IN_PROGRESS",
            details={"record_id": record_id, "action": action},
        )


# Storage Exceptions
class StorageError(LedgerError):
    """Base exception for storage operations."""

    pass


class RecordNotFoundError(StorageError):
    """Inventory record not found in the store."""

    def __init__(self, record_id: str):
        super().__init__(
            f"Inventory record not found: {record_id}",
            code="RECORD_NOT_FOUND",
            details={"record_id": record_id},
        )


class PersistenceFailureError(StorageError):
    """Underlying store call failed (network, 4xx/5xx, database)."""

    def __init__(self, operation: str, error: str, status_code: int | None = None):
        super().__init__(
            f"Inventory store failed during {operation}: {error}",
            code="PERSISTENCE_FAILURE",
            details={"operation": operation, "error": error, "status_code": status_code},
        )


class ConfigurationError(LedgerError):
    """Configuration error."""

    pass
