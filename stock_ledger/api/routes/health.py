"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from stock_ledger import __version__
from stock_ledger.application.dto.responses import HealthResponse, ProviderHealthResponse
from stock_ledger.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and the configured backends.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        inventory_store=ProviderHealthResponse(
            name=settings.store.backend,
            available=True,
            details={"base_url": settings.store.base_url}
            if settings.store.backend == "http"
            else {},
        ),
        activity_log=ProviderHealthResponse(
            name=settings.activity.backend,
            available=True,
            details={"max_entries": settings.activity.max_entries},
        ),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity when a local backend is configured.
    """
    settings = get_settings()
    if not settings.uses_sqlite:
        return HealthResponse(
            status="healthy",
            version=__version__,
            uptime_seconds=time.time() - _start_time,
            inventory_store=ProviderHealthResponse(
                name="sqlite", available=False, details={"configured": False}
            ),
        )

    from stock_ledger.infrastructure.storage.sqlite import get_database

    try:
        database = await get_database()
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            details={
                "latency_ms": await database.ping(),
                "read_connections": database.read_connections,
            },
        )
    except Exception as e:
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=False,
            details={"error": str(e)},
        )

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        inventory_store=db_status,
    )
