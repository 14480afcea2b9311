"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import UTC, date, datetime

import pytest

from stock_ledger.application.services import reset_services
from stock_ledger.config import reset_settings
from stock_ledger.core.entities.inventory import InventoryRecord

# Fixed reference time used across tests
NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_singletons() -> Generator[None, None, None]:
    """Fresh settings and service singletons for every test."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def make_record():
    """Factory for inventory records with sensible defaults."""

    def _make(**overrides) -> InventoryRecord:
        data = {
            "id": "rec-1",
            "inventory_code": "INV-0001",
            "name": "Rice",
            "category": "Grains",
            "location": "Main Warehouse",
            "quantity": 10,
            "unit_cost": 2.5,
            "purchase_date": date(2023, 12, 1),
            "expiry_date": None,
        }
        data.update(overrides)
        return InventoryRecord(**data)

    return _make
