"""Tests for inventory entities."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from stock_ledger.core.entities.inventory import (
    ActivityAction,
    ActivityEntry,
    InventoryRecord,
    NewInventoryRecord,
    StockStatus,
    coerce_number,
    compute_status,
    parse_date,
)


class TestComputeStatus:
    def test_positive_quantity_no_expiry_is_in_stock(self, make_record, now):
        assert compute_status(make_record(quantity=10), now) == StockStatus.IN_STOCK

    def test_zero_quantity_is_out_of_stock(self, make_record, now):
        assert compute_status(make_record(quantity=0), now) == StockStatus.OUT_OF_STOCK

    def test_negative_quantity_is_out_of_stock(self, make_record, now):
        assert compute_status(make_record(quantity=-3), now) == StockStatus.OUT_OF_STOCK

    def test_past_expiry_is_expired_even_with_stock(self, make_record, now):
        record = make_record(quantity=5, expiry_date=date(2020, 1, 1))
        assert compute_status(record, now) == StockStatus.EXPIRED

    def test_expiry_beats_zero_quantity(self, make_record, now):
        record = make_record(quantity=0, expiry_date=date(2020, 1, 1))
        assert compute_status(record, now) == StockStatus.EXPIRED

    def test_expiry_today_takes_effect_at_midnight(self, make_record):
        record = make_record(expiry_date=date(2024, 1, 1))
        assert compute_status(record, datetime(2024, 1, 1, 0, 0, tzinfo=UTC)) == StockStatus.IN_STOCK
        assert compute_status(record, datetime(2024, 1, 1, 0, 1, tzinfo=UTC)) == StockStatus.EXPIRED

    def test_future_expiry_is_in_stock(self, make_record, now):
        record = make_record(expiry_date=date(2030, 6, 1))
        assert compute_status(record, now) == StockStatus.IN_STOCK

    def test_naive_now_is_treated_as_utc(self, make_record):
        record = make_record(expiry_date=date(2020, 1, 1))
        assert compute_status(record, datetime(2024, 1, 1)) == StockStatus.EXPIRED

    def test_status_method_matches_function(self, make_record, now):
        record = make_record(quantity=0)
        assert record.status(now) == compute_status(record, now)

    def test_stored_status_hint_is_ignored(self, make_record, now):
        record = make_record(quantity=0, status_hint="in_stock")
        assert record.status(now) == StockStatus.OUT_OF_STOCK


class TestInventoryRecordIngestion:
    def test_camel_case_payload(self):
        record = InventoryRecord.from_payload(
            {
                "_id": "665f1c",
                "inventoryID": "INV-9",
                "name": "Beans",
                "quantity": "12",
                "unitCost": "1.25",
                "purchaseDate": "2024-01-02T00:00:00.000Z",
                "expiryDate": "2024-06-30",
                "createdAt": "2024-01-02T10:00:00Z",
                "status": "in_stock",
            }
        )
        assert record.id == "665f1c"
        assert record.inventory_code == "INV-9"
        assert record.quantity == 12.0
        assert record.unit_cost == 1.25
        assert record.purchase_date == date(2024, 1, 2)
        assert record.expiry_date == date(2024, 6, 30)
        assert record.created_at == datetime(2024, 1, 2, 10, 0, tzinfo=UTC)
        assert record.status_hint == "in_stock"

    def test_inventory_code_defaults_to_id(self):
        record = InventoryRecord.from_payload({"id": 42, "name": "Salt"})
        assert record.id == "42"
        assert record.inventory_code == "42"

    def test_missing_numbers_become_zero(self):
        record = InventoryRecord.from_payload(
            {"id": "a", "quantity": None, "unitCost": "n/a"}
        )
        assert record.quantity == 0.0
        assert record.unit_cost == 0.0

    def test_negative_cost_clamped_to_zero(self):
        record = InventoryRecord.from_payload({"id": "a", "quantity": 4, "unitCost": -2.5})
        assert record.unit_cost == 0.0
        assert record.stock_value == 0.0

    def test_bad_dates_become_none(self):
        record = InventoryRecord.from_payload({"id": "a", "expiryDate": "soon"})
        assert record.expiry_date is None

    def test_missing_id_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            InventoryRecord.from_payload({"name": "No id"})

    def test_stock_value_ignores_negative_quantity(self, make_record):
        assert make_record(quantity=-5, unit_cost=3).stock_value == 0.0
        assert make_record(quantity=4, unit_cost=2.5).stock_value == 10.0


class TestHelpers:
    @pytest.mark.parametrize("value", [None, "", "abc", float("nan"), float("inf")])
    def test_coerce_number_falls_back_to_zero(self, value):
        assert coerce_number(value) == 0.0

    def test_parse_date_accepts_datetime_strings(self):
        assert parse_date("2024-03-05T23:00:00+00:00") == date(2024, 3, 5)


class TestNewInventoryRecord:
    def test_defaults(self):
        draft = NewInventoryRecord(name="Rice", quantity=50, unit_cost=2.5)
        assert draft.category == "General"
        assert draft.location == "Main Warehouse"
        assert draft.purchase_date == date.today()
        assert draft.expiry_date is None
        assert draft.movement_type == "RECEIVE"


class TestActivityEntry:
    def test_issued_carries_quantities(self, make_record):
        entry = ActivityEntry.issued(make_record(), qty=4, prev_qty=10, new_qty=6)
        assert entry.action == ActivityAction.ISSUE
        assert (entry.qty, entry.prev_qty, entry.new_qty) == (4, 10, 6)
        assert entry.removed is False
        assert entry.describe() == "Rice: qty 4 (from 10 to 6)"

    def test_returned_marks_removed(self, make_record):
        entry = ActivityEntry.returned(make_record(quantity=7))
        assert entry.action == ActivityAction.RETURN
        assert entry.removed is True
        assert entry.qty == 7

    def test_stock_added_snapshot(self, make_record):
        entry = ActivityEntry.stock_added(make_record(quantity=50, unit_cost=2.5))
        assert entry.action == ActivityAction.ADD_STOCK
        assert entry.unit_cost == 2.5
        assert entry.category == "Grains"
        assert entry.location == "Main Warehouse"

    def test_deleted(self, make_record):
        entry = ActivityEntry.deleted(make_record())
        assert entry.action == ActivityAction.DELETE
        assert entry.removed is True
        assert entry.describe() == "Rice: deleted"
