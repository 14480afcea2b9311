"""Abstract interface for the stock activity log."""

from abc import ABC, abstractmethod

from stock_ledger.core.entities.inventory import ActivityEntry


class IActivityLog(ABC):
    """
    Bounded, append-only log of ledger mutations.

    Entries are returned newest first. Once ``max_entries`` is reached,
    appending drops the oldest entry.
    """

    max_entries: int

    @abstractmethod
    async def append(self, entry: ActivityEntry) -> None:
        """Record an entry at the front of the log."""
        pass

    @abstractmethod
    async def list_entries(self, limit: int | None = None) -> list[ActivityEntry]:
        """Get entries, newest first."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""
        pass
