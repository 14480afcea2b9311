"""In-memory activity log backed by a bounded deque."""

import asyncio
from collections import deque

from stock_ledger.config import get_logger
from stock_ledger.core.entities.inventory import ActivityEntry
from stock_ledger.core.interfaces.activity_log import IActivityLog

logger = get_logger(__name__)


class InMemoryActivityLog(IActivityLog):
    """
    Activity log held in process memory.

    Newest entries sit at the left of the deque; ``maxlen`` evicts from the
    right, so the oldest entry is dropped once the cap is reached.
    """

    def __init__(self, max_entries: int = 200):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: deque[ActivityEntry] = deque(maxlen=max_entries)
        self._lock = asyncio.Lock()

    async def append(self, entry: ActivityEntry) -> None:
        async with self._lock:
            self._entries.appendleft(entry)
        logger.debug("activity_appended", action=entry.action.value, size=len(self._entries))

    async def list_entries(self, limit: int | None = None) -> list[ActivityEntry]:
        entries = list(self._entries)
        return entries if limit is None else entries[:limit]

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
