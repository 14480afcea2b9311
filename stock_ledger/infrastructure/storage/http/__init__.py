"""HTTP storage implementations."""

from stock_ledger.infrastructure.storage.http.inventory_client import (
    HttpInventoryStore,
    draft_to_api_payload,
    to_api_payload,
)

__all__ = ["HttpInventoryStore", "draft_to_api_payload", "to_api_payload"]
