"""Abstract interface for inventory record storage."""

from abc import ABC, abstractmethod
from typing import Any

from stock_ledger.core.entities.inventory import InventoryRecord, NewInventoryRecord


class IInventoryStore(ABC):
    """Interface for inventory record persistence."""

    @abstractmethod
    async def list_records(self) -> list[InventoryRecord]:
        """List all inventory records."""
        pass

    @abstractmethod
    async def get_record(self, record_id: str) -> InventoryRecord | None:
        """Get inventory record by ID."""
        pass

    @abstractmethod
    async def create_record(self, draft: NewInventoryRecord) -> InventoryRecord:
        """Create a new inventory record (lot)."""
        pass

    @abstractmethod
    async def update_record(self, record_id: str, changes: dict[str, Any]) -> InventoryRecord:
        """Apply field changes (snake_case names) and return the stored record."""
        pass

    @abstractmethod
    async def remove_record(self, record_id: str) -> None:
        """Delete an inventory record."""
        pass
