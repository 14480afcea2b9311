"""API tests for inventory endpoints."""

import csv
import io
from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from stock_ledger.api.dependencies import (
    get_add_stock_use_case,
    get_delete_stock_use_case,
    get_inventory_overview_use_case,
    get_issue_stock_use_case,
    get_return_stock_use_case,
)
from stock_ledger.api.main import app
from stock_ledger.application.use_cases import (
    AddStockUseCase,
    DeleteStockUseCase,
    InventoryOverviewUseCase,
    IssueStockUseCase,
    ReturnStockUseCase,
)
from stock_ledger.core.exceptions import PersistenceFailureError
from stock_ledger.core.services import RecordLocks
from stock_ledger.infrastructure.storage.memory import InMemoryActivityLog

OVERRIDDEN = [
    get_add_stock_use_case,
    get_issue_stock_use_case,
    get_return_stock_use_case,
    get_delete_stock_use_case,
    get_inventory_overview_use_case,
]


@pytest.fixture
def mock_inventory_store(make_record):
    store = AsyncMock()
    store.list_records.return_value = [
        make_record(id="1", name="Rice", quantity=10, unit_cost=2.5),
        make_record(id="2", name="Beans", quantity=0),
        make_record(id="3", name="Milk", quantity=5, expiry_date=date(2020, 1, 1)),
    ]
    store.get_record.return_value = make_record(id="1", name="Rice", quantity=10)
    return store


@pytest.fixture
def activity_log():
    return InMemoryActivityLog()


@pytest.fixture
async def inv_client(mock_inventory_store, activity_log, clock):
    deps = {
        "inventory_store": mock_inventory_store,
        "activity_log": activity_log,
        "record_locks": RecordLocks(),
        "clock": clock,
    }
    app.dependency_overrides[get_add_stock_use_case] = lambda: AddStockUseCase(**deps)
    app.dependency_overrides[get_issue_stock_use_case] = lambda: IssueStockUseCase(**deps)
    app.dependency_overrides[get_return_stock_use_case] = lambda: ReturnStockUseCase(**deps)
    app.dependency_overrides[get_delete_stock_use_case] = lambda: DeleteStockUseCase(**deps)
    app.dependency_overrides[get_inventory_overview_use_case] = lambda: InventoryOverviewUseCase(**deps)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in OVERRIDDEN:
        app.dependency_overrides.pop(dependency, None)


class TestInventoryReads:
    async def test_list(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [item["status"] for item in data["items"]] == ["in_stock", "out_of_stock", "expired"]
        assert "X-Request-ID" in response.headers

    async def test_list_status_filter(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory", params={"status": "expired"})
        assert [item["name"] for item in response.json()["items"]] == ["Milk"]

    async def test_list_invalid_status_filter(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory", params={"status": "lost"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_list_degrades_on_store_failure(self, inv_client, mock_inventory_store):
        mock_inventory_store.list_records.side_effect = PersistenceFailureError("list", "down")

        response = await inv_client.get("/api/inventory")

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["degraded"] is True

    async def test_summary(self, inv_client: AsyncClient):
        data = (await inv_client.get("/api/inventory/summary")).json()
        assert data["total"] == 3
        assert data["in_stock"] == 1
        assert data["total_value"] == pytest.approx(25 + 12.5)

    async def test_report(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/report")
        assert response.status_code == 200
        assert response.json()["total_items"] == 3

    async def test_export(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        rows = list(csv.reader(io.StringIO(response.text)))
        assert len(rows) == 4

    async def test_get_record(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/1")
        assert response.status_code == 200
        assert response.json()["name"] == "Rice"

    async def test_get_missing_record(self, inv_client, mock_inventory_store):
        mock_inventory_store.get_record.return_value = None

        response = await inv_client.get("/api/inventory/missing")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "RECORD_NOT_FOUND"
        assert data["hint"]
        assert data["path"] == "/api/inventory/missing"


class TestInventoryMutations:
    async def test_add_stock(self, inv_client, mock_inventory_store, make_record):
        mock_inventory_store.create_record.return_value = make_record(id="new", quantity=50)

        response = await inv_client.post(
            "/api/inventory", json={"name": "Rice", "quantity": 50, "unitCost": 2.5}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Stock added successfully"
        assert data["record"]["id"] == "new"

    async def test_add_stock_missing_name(self, inv_client, mock_inventory_store):
        response = await inv_client.post("/api/inventory", json={"quantity": 5, "unit_cost": 1})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        mock_inventory_store.create_record.assert_not_awaited()

    async def test_issue(self, inv_client, mock_inventory_store, activity_log, make_record):
        mock_inventory_store.update_record.return_value = make_record(id="1", quantity=6)

        response = await inv_client.post("/api/inventory/1/issue", json={"quantity": 4})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Issued 4 units"
        assert data["new_qty"] == 6
        assert data["activity"]["action"] == "ISSUE"
        assert len(activity_log) == 1

    async def test_issue_zero(self, inv_client, mock_inventory_store):
        response = await inv_client.post("/api/inventory/1/issue", json={"quantity": 0})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_QUANTITY"
        mock_inventory_store.update_record.assert_not_awaited()

    async def test_issue_too_many(self, inv_client: AsyncClient):
        response = await inv_client.post("/api/inventory/1/issue", json={"quantity": 11})
        assert response.status_code == 400
        assert response.json()["error_code"] == "EXCEEDS_AVAILABLE"

    async def test_issue_expired(self, inv_client, mock_inventory_store, make_record):
        mock_inventory_store.get_record.return_value = make_record(
            quantity=5, expiry_date=date(2020, 1, 1)
        )
        response = await inv_client.post("/api/inventory/rec-1/issue", json={"quantity": 1})
        assert response.status_code == 409
        assert response.json()["error_code"] == "ITEM_NOT_ISSUABLE"

    async def test_issue_backend_failure(self, inv_client, mock_inventory_store):
        mock_inventory_store.update_record.side_effect = PersistenceFailureError("update", "Database offline")

        response = await inv_client.post("/api/inventory/1/issue", json={"quantity": 1})

        assert response.status_code == 502
        assert "Database offline" in response.json()["message"]

    async def test_return(self, inv_client, mock_inventory_store, activity_log):
        response = await inv_client.post("/api/inventory/1/return")

        assert response.status_code == 200
        assert response.json()["message"] == "Stock returned and removed"
        assert response.json()["removed"] is True
        mock_inventory_store.remove_record.assert_awaited_once_with("1")
        assert len(activity_log) == 1

    async def test_delete(self, inv_client, mock_inventory_store):
        response = await inv_client.delete("/api/inventory/1")
        assert response.status_code == 200
        assert response.json()["message"] == "Inventory deleted"

    async def test_activity(self, inv_client, mock_inventory_store, make_record):
        mock_inventory_store.update_record.return_value = make_record(id="1", quantity=9)
        await inv_client.post("/api/inventory/1/issue", json={"quantity": 1})
        await inv_client.post("/api/inventory/1/return")

        data = (await inv_client.get("/api/inventory/activity")).json()

        assert [entry["action"] for entry in data["entries"]] == ["RETURN", "ISSUE"]
        assert data["max_entries"] == 200
