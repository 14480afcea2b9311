"""API route modules."""

from stock_ledger.api.routes.health import router as health_router
from stock_ledger.api.routes.inventory import router as inventory_router

__all__ = [
    "health_router",
    "inventory_router",
]
