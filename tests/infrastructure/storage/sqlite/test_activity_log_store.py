"""Tests for SQLite activity log."""

import pytest

from stock_ledger.core.entities.inventory import ActivityAction, ActivityEntry
from stock_ledger.infrastructure.storage.sqlite.activity_log_store import SQLiteActivityLog


@pytest.fixture
def issue_entry(make_record):
    def _entry(n: int) -> ActivityEntry:
        return ActivityEntry.issued(make_record(name=f"Item {n}"), qty=n, prev_qty=n, new_qty=0)

    return _entry


class TestSQLiteActivityLog:
    async def test_append_and_list_newest_first(self, ledger_db, issue_entry, make_record):
        log = SQLiteActivityLog()
        await log.append(issue_entry(1))
        await log.append(ActivityEntry.returned(make_record(quantity=3)))

        entries = await log.list_entries()

        assert [e.action for e in entries] == [ActivityAction.RETURN, ActivityAction.ISSUE]
        assert entries[0].removed is True
        assert entries[1].prev_qty == 1

    async def test_trims_to_max_entries(self, ledger_db, issue_entry):
        log = SQLiteActivityLog(max_entries=3)
        for n in range(1, 6):
            await log.append(issue_entry(n))

        entries = await log.list_entries()

        assert [e.qty for e in entries] == [5, 4, 3]

    async def test_limit_is_capped(self, ledger_db, issue_entry):
        log = SQLiteActivityLog(max_entries=2)
        for n in range(1, 4):
            await log.append(issue_entry(n))
        assert len(await log.list_entries(limit=10)) == 2
        assert len(await log.list_entries(limit=1)) == 1

    async def test_clear(self, ledger_db, issue_entry):
        log = SQLiteActivityLog()
        await log.append(issue_entry(1))
        await log.clear()
        assert await log.list_entries() == []
