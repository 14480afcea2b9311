"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Inventory record store configuration."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    backend: Literal["http", "sqlite"] = "http"
    base_url: str = "http://localhost:5000"
    timeout: float = 15.0

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class StorageSettings(BaseSettings):
    """Local SQLite storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stock_ledger.db"

    # One writer connection is always kept; these are the extra readers
    read_connections: int = 3
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class ActivitySettings(BaseSettings):
    """Activity log configuration."""

    model_config = SettingsConfigDict(env_prefix="ACTIVITY_")

    backend: Literal["memory", "sqlite"] = "memory"
    max_entries: int = Field(default=200, gt=0)


class ReportSettings(BaseSettings):
    """Inventory report configuration."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    expiring_within_days: int = 30
    low_stock_threshold: float = 10.0
    top_n: int = 5


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stock Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # None picks console output in development and JSON elsewhere
    log_format: Literal["console", "json"] | None = None

    # Sub-settings
    store: StoreSettings = Field(default_factory=StoreSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    activity: ActivitySettings = Field(default_factory=ActivitySettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def coerce_storage(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            return StorageSettings(**v)
        return v or StorageSettings()

    @property
    def uses_sqlite(self) -> bool:
        """Whether any configured backend needs the local database."""
        return self.store.backend == "sqlite" or self.activity.backend == "sqlite"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
