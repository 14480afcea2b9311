"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stock_ledger import __version__
from stock_ledger.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stock_ledger.api.middleware.error_handler import setup_exception_handlers
from stock_ledger.api.routes import health_router, inventory_router
from stock_ledger.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Prepares the local database when a SQLite backend is configured and
    closes it on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        store_backend=settings.store.backend,
        activity_backend=settings.activity.backend,
    )

    if settings.uses_sqlite:
        try:
            from stock_ledger.infrastructure.storage.sqlite import get_database
            from stock_ledger.infrastructure.storage.sqlite.migrations import run_migrations

            await run_migrations()
            logger.info("database_initialized", db_path=str(settings.storage.db_path))

            await get_database()
            logger.info("ledger_db_ready")

        except Exception as e:
            logger.error("database_init_failed", error=str(e))
            raise
    else:
        logger.info("inventory_backend_remote", base_url=settings.store.base_url)

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    if settings.uses_sqlite:
        try:
            from stock_ledger.infrastructure.storage.sqlite import close_database

            await close_database()
        except Exception as e:
            logger.warning("ledger_db_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Stock Ledger API",
        description="Inventory lots, stock issue and return, activity and reports",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(inventory_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {"status": "healthy", "version": __version__}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "stock_ledger.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
