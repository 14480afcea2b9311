"""
Structured logging for the ledger service.

Every event carries the service version and the active store and activity
backends, so a log line from a mutation can be traced to where it was
persisted. ``LOG_FORMAT`` picks the renderer; when unset, development gets
the console renderer and everything else gets JSON.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from stock_ledger.config.settings import Settings, get_settings

# Library loggers that would otherwise repeat what the request middleware logs
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "uvicorn.access")


def ledger_context(settings: Settings) -> Processor:
    """Processor stamping each event with the service and backend identity."""
    context = {
        "service": settings.app_name,
        "version": settings.app_version,
        "store_backend": settings.store.backend,
        "activity_backend": settings.activity.backend,
    }

    def add_ledger_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_ledger_context


def renders_json(settings: Settings) -> bool:
    if settings.log_format is not None:
        return settings.log_format == "json"
    return settings.environment != "development"


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger it writes through."""
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        ledger_context(settings),
    ]
    if renders_json(settings):
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
