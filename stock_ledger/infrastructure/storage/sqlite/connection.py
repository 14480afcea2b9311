"""
Connection management for the local ledger database.

SQLite accepts one writer at a time, and every ledger mutation is a short
read-modify-write. The ledger therefore keeps a single writer connection,
serialized by an asyncio lock and opened in ``BEGIN IMMEDIATE`` mode, plus a
few reader connections that WAL lets run alongside the writer.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stock_ledger.config import get_logger, get_settings

logger = get_logger(__name__)


class LedgerDatabase:
    """One writer plus ``read_connections`` readers over the ledger file."""

    def __init__(self, db_path: Path, read_connections: int = 3, busy_timeout: int = 30000):
        if read_connections < 1:
            raise ValueError("read_connections must be at least 1")
        self.db_path = db_path
        self.read_connections = read_connections
        self.busy_timeout = busy_timeout

        self._writer: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._readers: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._open_readers: list[aiosqlite.Connection] = []
        self._open_lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._writer is not None

    async def open(self) -> None:
        async with self._open_lock:
            if self.is_open:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            # Autocommit mode so transactions are begun explicitly below
            self._writer = await self._connect(isolation_level=None)
            for _ in range(self.read_connections):
                reader = await self._connect()
                self._open_readers.append(reader)
                self._readers.put_nowait(reader)

            logger.info(
                "ledger_db_opened",
                db_path=str(self.db_path),
                read_connections=self.read_connections,
            )

    async def _connect(self, **kwargs) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, **kwargs)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a read connection."""
        await self.open()
        conn = await self._readers.get()
        try:
            yield conn
        finally:
            self._readers.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Run one write transaction on the writer connection.

        The write lock is held for the whole transaction; commit on success,
        roll back on any exception.
        """
        await self.open()
        async with self._write_lock:
            conn = self._writer
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.execute("COMMIT")
            except BaseException:
                await conn.execute("ROLLBACK")
                raise

    async def ping(self) -> float:
        """Round-trip a trivial query; returns latency in milliseconds."""
        start = time.perf_counter()
        async with self.reader() as conn:
            await conn.execute("SELECT 1")
        return round((time.perf_counter() - start) * 1000, 2)

    async def close(self) -> None:
        async with self._open_lock:
            if not self.is_open:
                return
            async with self._write_lock:
                await self._writer.close()
                self._writer = None
            for reader in self._open_readers:
                await reader.close()
            self._open_readers.clear()
            self._readers = asyncio.Queue()
            logger.info("ledger_db_closed", db_path=str(self.db_path))


_database: LedgerDatabase | None = None


async def get_database() -> LedgerDatabase:
    """The process-wide ledger database, opened on first use."""
    global _database
    if _database is None:
        storage = get_settings().storage
        _database = LedgerDatabase(
            db_path=storage.db_path,
            read_connections=storage.read_connections,
            busy_timeout=storage.busy_timeout,
        )
    await _database.open()
    return _database


async def close_database() -> None:
    global _database
    if _database is not None:
        await _database.close()
        _database = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Read connection from the ledger database."""
    database = await get_database()
    async with database.reader() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Write transaction on the ledger database."""
    database = await get_database()
    async with database.transaction() as conn:
        yield conn
