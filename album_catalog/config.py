"""
Album Catalog: Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Port handling:
    The listen port is read from `listenPort` (the historical name) or
    `LISTEN_PORT`. Values outside 1-65535 or non-integers fail validation;
    the console entry point in cli.py turns that into a fatal startup error.
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


DEFAULT_LISTEN_PORT = 8117


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running locally against a
    SQLite file in the working directory.
    """

    # ── Server ────────────────────────────────────────────────────────────
    listen_host: str = Field(default="0.0.0.0")

    listen_port: int = Field(
        default=DEFAULT_LISTEN_PORT,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("listenPort", "listen_port"),
        description="TCP port the HTTP server binds to",
    )

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path> or postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///./local.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to server databases; SQLite uses NullPool.
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Create missing tables at startup (Alembic remains the managed path).
    db_auto_migrate: bool = Field(default=True)

    # Upper bound for a single batch INSERT, in seconds.
    db_write_timeout: float = Field(default=5.0, ge=0.1, le=60.0)

    # ── Memory Store ──────────────────────────────────────────────────────
    seed_memory_store: bool = Field(default=True)

    # ── Responses & Logging ───────────────────────────────────────────────
    pretty_json: bool = Field(default=True)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def listen_address(self) -> str:
        return f"{self.listen_host}:{self.listen_port}"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
        "extra": "ignore",
        "populate_by_name": True,
    }


# Singleton instance: imported throughout the application
settings = Settings()
