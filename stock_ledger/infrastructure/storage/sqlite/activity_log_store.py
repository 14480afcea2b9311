"""SQLite implementation of the bounded activity log."""

import aiosqlite

from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityAction, ActivityEntry, parse_datetime, utc_now
from stock_ledger.core.exceptions import PersistenceFailureError
from stock_ledger.core.interfaces.activity_log import IActivityLog
from stock_ledger.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteActivityLog(IActivityLog):
    """
    Activity log persisted in the ``activity_log`` table.

    Each append trims the table to the newest ``max_entries`` rows inside the
    same transaction, so the log never holds more than the cap.
    """

    def __init__(self, max_entries: int = 200):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries

    async def append(self, entry: ActivityEntry) -> None:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO activity_log (
                        timestamp, action, record_id, inventory_code, name,
                        qty, prev_qty, new_qty, removed, unit_cost, category, location
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        entry.timestamp.isoformat(),
                        entry.action.value,
                        entry.record_id,
                        entry.inventory_code,
                        entry.name,
                        entry.qty,
                        entry.prev_qty,
                        entry.new_qty,
                        int(entry.removed),
                        entry.unit_cost,
                        entry.category,
                        entry.location,
                    ),
                )
                cursor = await conn.execute(
                    """
                    DELETE FROM activity_log WHERE id NOT IN (
                        SELECT id FROM activity_log ORDER BY id DESC LIMIT ?
                    )
                    """,
                    (self.max_entries,),
                )
                trimmed = cursor.rowcount
        except aiosqlite.Error as e:
            logger.error("activity_append_failed", action=entry.action.value, error=str(e))
            raise PersistenceFailureError("activity_append", str(e)) from e

        if trimmed:
            logger.debug("activity_log_trimmed", removed=trimmed)

    async def list_entries(self, limit: int | None = None) -> list[ActivityEntry]:
        limit = self.max_entries if limit is None else min(limit, self.max_entries)
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM activity_log ORDER BY id DESC LIMIT ?", (limit,)
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceFailureError("activity_list", str(e)) from e
        return [self._row_to_entry(row) for row in rows]

    async def clear(self) -> None:
        try:
            async with get_transaction() as conn:
                await conn.execute("DELETE FROM activity_log")
        except aiosqlite.Error as e:
            raise PersistenceFailureError("activity_clear", str(e)) from e

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> ActivityEntry:
        """Convert a database row to an ActivityEntry."""
        return ActivityEntry(
            timestamp=parse_datetime(row["timestamp"]) or utc_now(),
            action=ActivityAction(row["action"]),
            record_id=row["record_id"],
            inventory_code=row["inventory_code"],
            name=row["name"] or "",
            qty=row["qty"],
            prev_qty=row["prev_qty"],
            new_qty=row["new_qty"],
            removed=bool(row["removed"]),
            unit_cost=row["unit_cost"],
            category=row["category"],
            location=row["location"],
        )
