"""Tests for the ledger database connections."""

import asyncio
from pathlib import Path

import pytest

from stock_ledger.infrastructure.storage.sqlite.connection import LedgerDatabase


@pytest.fixture
async def database(tmp_path: Path):
    db = LedgerDatabase(tmp_path / "ledger.db", read_connections=2, busy_timeout=1000)
    async with db.transaction() as conn:
        await conn.execute("CREATE TABLE counter (id INTEGER PRIMARY KEY, value INTEGER)")
        await conn.execute("INSERT INTO counter (id, value) VALUES (1, 0)")
    yield db
    await db.close()


async def read_value(db: LedgerDatabase) -> int:
    async with db.reader() as conn:
        cursor = await conn.execute("SELECT value FROM counter WHERE id = 1")
        row = await cursor.fetchone()
    return row["value"]


class TestLedgerDatabase:
    async def test_committed_write_visible_to_readers(self, database):
        async with database.transaction() as conn:
            await conn.execute("UPDATE counter SET value = 5 WHERE id = 1")

        assert await read_value(database) == 5

    async def test_failed_transaction_rolls_back(self, database):
        with pytest.raises(RuntimeError):
            async with database.transaction() as conn:
                await conn.execute("UPDATE counter SET value = 99 WHERE id = 1")
                raise RuntimeError("boom")

        assert await read_value(database) == 0

        # The writer is usable again afterwards
        async with database.transaction() as conn:
            await conn.execute("UPDATE counter SET value = 1 WHERE id = 1")
        assert await read_value(database) == 1

    async def test_writes_are_serialized(self, database):
        """Read-modify-write transactions never interleave."""

        async def increment():
            async with database.transaction() as conn:
                cursor = await conn.execute("SELECT value FROM counter WHERE id = 1")
                value = (await cursor.fetchone())["value"]
                await asyncio.sleep(0.005)
                await conn.execute("UPDATE counter SET value = ? WHERE id = 1", (value + 1,))

        await asyncio.gather(*(increment() for _ in range(5)))

        assert await read_value(database) == 5

    async def test_ping_reports_latency(self, database):
        assert await database.ping() >= 0

    async def test_close_and_reopen(self, database):
        await database.close()
        assert not database.is_open

        assert await read_value(database) == 0
        assert database.is_open

    def test_requires_a_reader(self, tmp_path: Path):
        with pytest.raises(ValueError):
            LedgerDatabase(tmp_path / "ledger.db", read_connections=0)
