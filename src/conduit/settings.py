"""Application configuration using Pydantic Settings.

This module centralizes runtime configuration for Conduit. Values can be
provided via environment variables (preferred) or fall back to the defaults
below. A ``Settings`` instance is intended to be retrieved via ``get_settings``
which caches the object for reuse across the process.

Environment variable prefix: ``CONDUIT_`` (e.g. ``CONDUIT_PORT``).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

StorageBackend = Literal["file", "memory", "sql"]


class Settings(BaseSettings):
    """Runtime application settings.

    Attributes map directly to environment variables using the ``CONDUIT_``
    prefix (case-insensitive). For example, ``port`` <- ``CONDUIT_PORT``.
    """

    # Server settings
    host: str = Field(
        default="127.0.0.1",
        description="Network interface to bind the server to",
    )  # fmt: skip
    port: int = Field(
        default=3000,
        description="Server port",
    )  # fmt: skip
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )
    reload: bool = Field(
        default=False,
        description="Enable auto-reload in development",
    )  # fmt: skip
    debug: bool = Field(
        default=False,
        description="Development mode: expose error messages and stack traces in responses",
    )  # fmt: skip

    # Storage settings
    data_dir: Path = Field(
        default=Path("data"),
        description="Root directory for file-based storage backends",
    )  # fmt: skip
    event_writer: StorageBackend = Field(
        default="file",
        description="Event writer backend: file, memory or sql",
    )  # fmt: skip
    user_store: StorageBackend = Field(
        default="file",
        description="User store backend: file, memory or sql",
    )  # fmt: skip
    database_url: str | None = Field(
        default=None,
        description="Database connection string for sql backends (defaults to a SQLite file in data_dir)",
    )  # fmt: skip
    sql_log: bool = Field(
        default=False,
        description="Enable SQL query logging",
    )  # fmt: skip

    # HTTP settings
    static_dir: Path | None = Field(
        default=None,
        description="Directory served as static files before route matching",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    def resolved_database_url(self) -> str:
        """Return the configured database URL or a SQLite file under ``data_dir``."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'conduit.db'}"

    model_config = SettingsConfigDict(
        env_prefix="CONDUIT_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["Settings", "StorageBackend", "get_settings"]
