"""Tests for InventoryOverviewUseCase."""

import csv
import io
from datetime import date

import pytest

from stock_ledger.application.use_cases.inventory_overview import InventoryOverviewUseCase
from stock_ledger.core.entities.inventory import ActivityEntry, StockStatus
from stock_ledger.core.exceptions import PersistenceFailureError, RecordNotFoundError


@pytest.fixture
def use_case(ledger_deps):
    return InventoryOverviewUseCase(**ledger_deps)


@pytest.fixture
def stocked_store(mock_inventory_store, make_record):
    mock_inventory_store.list_records.return_value = [
        make_record(id="1", name="Rice", quantity=50, unit_cost=2.5),
        make_record(id="2", name="Beans", quantity=0),
        make_record(id="3", name="Milk", quantity=5, expiry_date=date(2020, 1, 1)),
    ]
    return mock_inventory_store


class TestInventoryOverview:
    async def test_list_in_display_order(self, use_case, stocked_store):
        listing = await use_case.list_inventory()
        assert [item.name for item in listing.items] == ["Rice", "Beans", "Milk"]
        assert [item.status for item in listing.items] == ["in_stock", "out_of_stock", "expired"]
        assert listing.total == 3
        assert listing.degraded is False

    async def test_list_filters(self, use_case, stocked_store):
        listing = await use_case.list_inventory(status=StockStatus.EXPIRED)
        assert [item.name for item in listing.items] == ["Milk"]

        listing = await use_case.list_inventory(query="bea")
        assert [item.name for item in listing.items] == ["Beans"]

    async def test_issuable_listing(self, use_case, stocked_store):
        listing = await use_case.list_inventory(issuable=True)
        assert [item.name for item in listing.items] == ["Rice"]

    async def test_list_failure_degrades_to_empty(self, use_case, mock_inventory_store):
        mock_inventory_store.list_records.side_effect = PersistenceFailureError("list", "HTTP 500")

        listing = await use_case.list_inventory()

        assert listing.items == []
        assert listing.degraded is True

    async def test_summary(self, use_case, stocked_store):
        summary = await use_case.summary()
        assert summary.total == 3
        assert summary.in_stock == 1
        assert summary.out_of_stock == 1
        assert summary.expired == 1
        assert summary.total_value == pytest.approx(125 + 12.5)

    async def test_summary_degrades(self, use_case, mock_inventory_store):
        mock_inventory_store.list_records.side_effect = PersistenceFailureError("list", "down")
        summary = await use_case.summary()
        assert summary.total == 0
        assert summary.degraded is True

    async def test_report_uses_activity(self, use_case, stocked_store, activity_log, make_record):
        await activity_log.append(
            ActivityEntry.issued(make_record(id="1", name="Rice"), qty=5, prev_qty=55, new_qty=50)
        )

        report = await use_case.report()

        assert report.total_items == 3
        assert report.expiring_within_days == 30
        assert [line.name for line in report.out_of_stock_items] == ["Beans"]
        assert report.fastest_moving[0].name == "Rice"
        assert report.fastest_moving[0].issued_qty == 5

    async def test_export_csv(self, use_case, stocked_store):
        rows = list(csv.reader(io.StringIO(await use_case.export_csv())))
        assert rows[0][0] == "inventory_code"
        assert [row[1] for row in rows[1:]] == ["Rice", "Beans", "Milk"]

    async def test_get_record(self, use_case, mock_inventory_store, make_record):
        mock_inventory_store.get_record.return_value = make_record(quantity=0)
        response = await use_case.get_record("rec-1")
        assert response.status == "out_of_stock"

    async def test_get_missing_record(self, use_case, mock_inventory_store):
        mock_inventory_store.get_record.return_value = None
        with pytest.raises(RecordNotFoundError):
            await use_case.get_record("missing")

    async def test_activity_newest_first(self, use_case, activity_log, make_record):
        for qty in (1, 2, 3):
            await activity_log.append(
                ActivityEntry.issued(make_record(), qty=qty, prev_qty=10, new_qty=10 - qty)
            )

        response = await use_case.activity(limit=2)

        assert [entry.qty for entry in response.entries] == [3, 2]
        assert response.max_entries == 200
