"""Tests for AddStockUseCase."""

from datetime import date

import pytest

from stock_ledger.application.dto.requests import AddStockRequest
from stock_ledger.application.use_cases.add_stock import AddStockUseCase
from stock_ledger.core.entities.inventory import ActivityAction, NewInventoryRecord
from stock_ledger.core.exceptions import (
    InvalidQuantityError,
    PersistenceFailureError,
    ValidationError,
)


@pytest.fixture
def use_case(ledger_deps):
    return AddStockUseCase(**ledger_deps)


class TestAddStockUseCase:
    async def test_creates_new_lot(self, use_case, mock_inventory_store, activity_log, make_record):
        mock_inventory_store.create_record.return_value = make_record(
            id="new", quantity=50, unit_cost=2.5, category="General"
        )

        result = await use_case.execute(AddStockRequest(name="Rice", quantity=50, unit_cost=2.5))

        draft = mock_inventory_store.create_record.call_args[0][0]
        assert isinstance(draft, NewInventoryRecord)
        assert draft.name == "Rice"
        assert draft.quantity == 50
        assert draft.category == "General"
        assert draft.location == "Main Warehouse"
        assert draft.purchase_date == date.today()
        assert draft.movement_type == "RECEIVE"

        assert result.record.quantity == 50
        assert result.message == "Stock added successfully"
        entries = await activity_log.list_entries()
        assert entries[0].action == ActivityAction.ADD_STOCK
        assert entries[0].qty == 50
        assert entries[0].unit_cost == 2.5

    async def test_camel_case_request_fields(self, use_case, mock_inventory_store, make_record):
        mock_inventory_store.create_record.return_value = make_record()
        request = AddStockRequest.model_validate(
            {"name": "Milk", "quantity": "12", "unitCost": "0.8", "expiryDate": "2024-02-01"}
        )

        await use_case.execute(request)

        draft = mock_inventory_store.create_record.call_args[0][0]
        assert draft.unit_cost == 0.8
        assert draft.expiry_date == date(2024, 2, 1)

    async def test_name_required(self, use_case, mock_inventory_store, activity_log):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(AddStockRequest(name="  ", quantity=1, unit_cost=1))
        assert exc_info.value.details["field"] == "name"
        mock_inventory_store.create_record.assert_not_awaited()
        assert len(activity_log) == 0

    async def test_quantity_required(self, use_case, mock_inventory_store):
        with pytest.raises(InvalidQuantityError):
            await use_case.execute(AddStockRequest(name="Rice", unit_cost=1))
        mock_inventory_store.create_record.assert_not_awaited()

    async def test_negative_cost_rejected(self, use_case, mock_inventory_store):
        with pytest.raises(ValidationError):
            await use_case.execute(AddStockRequest(name="Rice", quantity=1, unit_cost=-1))
        mock_inventory_store.create_record.assert_not_awaited()

    async def test_store_failure(self, use_case, mock_inventory_store, activity_log):
        mock_inventory_store.create_record.side_effect = PersistenceFailureError("create", "HTTP 500")
        with pytest.raises(PersistenceFailureError):
            await use_case.execute(AddStockRequest(name="Rice", quantity=1, unit_cost=1))
        assert len(activity_log) == 0
