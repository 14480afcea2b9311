"""Versioned SQLite schema migrations."""

from stock_ledger.infrastructure.storage.sqlite.migrations.migrator import (
    initialize_database,
    run_migrations,
)

__all__ = ["initialize_database", "run_migrations"]
