"""
REST client for the remote inventory API.

The backend exposes ``/api/inventory`` with camelCase JSON records whose
identifier may arrive as ``_id`` or ``id`` and whose business code may be
``inventoryID``. Payloads are normalized into InventoryRecord on the way in
and translated back to camelCase on the way out.
"""

from datetime import date
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from stock_ledger.config import get_logger, get_settings
from stock_ledger.core.entities.inventory import InventoryRecord, NewInventoryRecord, StockStatus
from stock_ledger.core.exceptions import PersistenceFailureError, RecordNotFoundError
from stock_ledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)

INVENTORY_PATH = "/api/inventory"

# Record field -> API key
API_FIELD_NAMES = {
    "inventory_code": "inventoryID",
    "name": "name",
    "category": "category",
    "description": "description",
    "location": "location",
    "quantity": "quantity",
    "unit_cost": "unitCost",
    "purchase_date": "purchaseDate",
    "expiry_date": "expiryDate",
    "status": "status",
}


def _api_value(value: Any) -> Any:
    if isinstance(value, StockStatus):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_api_payload(changes: dict[str, Any]) -> dict[str, Any]:
    """Translate record field names to the API's camelCase keys."""
    return {API_FIELD_NAMES.get(key, key): _api_value(value) for key, value in changes.items()}


def draft_to_api_payload(draft: NewInventoryRecord) -> dict[str, Any]:
    """Build the create payload for a received lot."""
    payload = to_api_payload(
        {
            "name": draft.name,
            "category": draft.category,
            "description": draft.description,
            "location": draft.location,
            "quantity": draft.quantity,
            "unit_cost": draft.unit_cost,
            "purchase_date": draft.purchase_date,
            "expiry_date": draft.expiry_date,
        }
    )
    if draft.inventory_code:
        payload["inventoryID"] = draft.inventory_code
    payload["type"] = draft.movement_type
    return payload


def _error_text(response: httpx.Response) -> str:
    """Prefer the backend's own error message."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    return response.reason_phrase


class HttpInventoryStore(IInventoryStore):
    """Inventory record store backed by the remote REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.store.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.store.timeout
        self._transport = transport

    async def _request(
        self,
        operation: str,
        method: str,
        path: str = "",
        payload: dict[str, Any] | None = None,
        record_id: str | None = None,
    ) -> httpx.Response:
        """Send one request; map transport errors and non-2xx answers."""
        url = f"{INVENTORY_PATH}{path}"
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            logger.error("inventory_api_unreachable", operation=operation, url=url, error=str(e))
            raise PersistenceFailureError(operation, str(e) or e.__class__.__name__) from e

        if response.status_code == 404 and record_id is not None:
            raise RecordNotFoundError(record_id)

        if response.is_error:
            error = _error_text(response)
            logger.error(
                "inventory_api_error",
                operation=operation,
                status=response.status_code,
                error=error,
            )
            raise PersistenceFailureError(operation, error, status_code=response.status_code)

        return response

    @staticmethod
    def _parse_record(operation: str, body: Any) -> InventoryRecord:
        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not isinstance(body, dict):
            raise PersistenceFailureError(operation, "unexpected response body")
        try:
            return InventoryRecord.from_payload(body)
        except PydanticValidationError as e:
            raise PersistenceFailureError(operation, f"malformed record: {e.error_count()} errors") from e

    async def list_records(self) -> list[InventoryRecord]:
        """List all inventory records."""
        response = await self._request("list", "GET")
        body = response.json()
        if isinstance(body, dict):
            body = body.get("data", body.get("items", []))
        if not isinstance(body, list):
            raise PersistenceFailureError("list", "expected a list of records")

        records = []
        for raw in body:
            try:
                records.append(InventoryRecord.from_payload(raw))
            except PydanticValidationError as e:
                logger.warning("inventory_record_skipped", error_count=e.error_count())
        return records

    async def get_record(self, record_id: str) -> InventoryRecord | None:
        """Get inventory record by ID."""
        try:
            response = await self._request("get", "GET", f"/{record_id}", record_id=record_id)
        except RecordNotFoundError:
            return None
        return self._parse_record("get", response.json())

    async def create_record(self, draft: NewInventoryRecord) -> InventoryRecord:
        """Create a new lot."""
        response = await self._request("create", "POST", payload=draft_to_api_payload(draft))
        record = self._parse_record("create", response.json())
        logger.info("inventory_record_created", record_id=record.id, name=record.name)
        return record

    async def update_record(self, record_id: str, changes: dict[str, Any]) -> InventoryRecord:
        """Update fields of a record."""
        response = await self._request(
            "update", "PUT", f"/{record_id}", payload=to_api_payload(changes), record_id=record_id
        )
        logger.info("inventory_record_updated", record_id=record_id, fields=sorted(changes))
        return self._parse_record("update", response.json())

    async def remove_record(self, record_id: str) -> None:
        """Delete a record."""
        await self._request("remove", "DELETE", f"/{record_id}", record_id=record_id)
        logger.info("inventory_record_removed", record_id=record_id)
