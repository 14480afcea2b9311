"""SQLite implementation of inventory record storage."""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any

import aiosqlite

from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import (
    InventoryRecord,
    NewInventoryRecord,
    StockStatus,
    compute_status,
    utc_now,
)
from stock_ledger.core.exceptions import (
    PersistenceFailureError,
    RecordNotFoundError,
    ValidationError,
)
from stock_ledger.core.interfaces.inventory_store import IInventoryStore
from stock_ledger.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

# Record fields that update_record may change, mapped to their columns
UPDATABLE_COLUMNS = {
    "name": "name",
    "category": "category",
    "description": "description",
    "location": "location",
    "quantity": "quantity",
    "unit_cost": "unit_cost",
    "purchase_date": "purchase_date",
    "expiry_date": "expiry_date",
    "status": "status",
}


@asynccontextmanager
async def _db_errors(operation: str) -> AsyncIterator[None]:
    """Report database failures as PersistenceFailureError."""
    try:
        yield
    except aiosqlite.Error as e:
        logger.error("inventory_store_failed", operation=operation, error=str(e))
        raise PersistenceFailureError(operation, str(e)) from e


def _to_column(value: Any) -> Any:
    if isinstance(value, StockStatus):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of the inventory record store."""

    async def list_records(self) -> list[InventoryRecord]:
        """List all inventory records, oldest first."""
        async with _db_errors("list"), get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_records ORDER BY created_at, id"
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def get_record(self, record_id: str) -> InventoryRecord | None:
        """Get inventory record by ID."""
        async with _db_errors("get"), get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_records WHERE id = ?", (record_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def create_record(self, draft: NewInventoryRecord) -> InventoryRecord:
        """Create a new lot with a generated id."""
        record_id = uuid.uuid4().hex
        now = utc_now()
        record = InventoryRecord(
            id=record_id,
            inventory_code=draft.inventory_code or f"INV-{record_id[:6].upper()}",
            name=draft.name,
            category=draft.category,
            description=draft.description,
            location=draft.location,
            quantity=draft.quantity,
            unit_cost=draft.unit_cost,
            purchase_date=draft.purchase_date,
            expiry_date=draft.expiry_date,
            created_at=now,
            updated_at=now,
        )
        status = compute_status(record, now)

        async with _db_errors("create"), get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO inventory_records (
                    id, inventory_code, name, category, description, location,
                    quantity, unit_cost, purchase_date, expiry_date, status,
                    movement_type, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.inventory_code,
                    record.name,
                    record.category,
                    record.description,
                    record.location,
                    record.quantity,
                    record.unit_cost,
                    _to_column(record.purchase_date),
                    _to_column(record.expiry_date),
                    status.value,
                    draft.movement_type,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )

        logger.info(
            "inventory_record_created",
            record_id=record.id,
            inventory_code=record.inventory_code,
        )
        return record.model_copy(update={"status_hint": status.value})

    async def update_record(self, record_id: str, changes: dict[str, Any]) -> InventoryRecord:
        """Apply field changes and return the stored record."""
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            field = sorted(unknown)[0]
            raise ValidationError(field=field, message="field cannot be updated")

        assignments = [f"{UPDATABLE_COLUMNS[key]} = ?" for key in changes]
        params = [_to_column(value) for value in changes.values()]
        assignments.append("updated_at = ?")
        params.append(utc_now().isoformat())

        async with _db_errors("update"), get_transaction() as conn:
            cursor = await conn.execute(
                f"UPDATE inventory_records SET {', '.join(assignments)} WHERE id = ?",
                (*params, record_id),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(record_id)

        logger.info("inventory_record_updated", record_id=record_id, fields=sorted(changes))
        record = await self.get_record(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    async def remove_record(self, record_id: str) -> None:
        """Delete an inventory record."""
        async with _db_errors("remove"), get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM inventory_records WHERE id = ?", (record_id,)
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(record_id)

        logger.info("inventory_record_removed", record_id=record_id)

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        """Convert a database row to an InventoryRecord entity."""
        return InventoryRecord.from_payload(dict(row))
