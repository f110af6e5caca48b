"""
Runtime configuration loaded from the process environment.

A ``.env`` file in the working directory is read first if present; real
environment variables take precedence over it.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    """Service settings. Each field maps to one environment variable."""

    server_host: str = field(default_factory=lambda: _env("SERVER_HOST", "0.0.0.0"))
    server_port: int = field(default_factory=lambda: int(_env("SERVER_PORT", "8080")))

    # Document store
    database_path: str = field(
        default_factory=lambda: _env("DATABASE_PATH", "data/library.db")
    )
    books_collection: str = field(
        default_factory=lambda: _env("BOOKS_COLLECTION", "books")
    )
    read_books_collection: str = field(
        default_factory=lambda: _env("READ_BOOKS_COLLECTION", "read_books")
    )
    store_timeout_seconds: float = field(
        default_factory=lambda: float(_env("STORE_TIMEOUT_SECONDS", "5.0"))
    )

    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.books_collection == self.read_books_collection:
            raise ValueError(
                "BOOKS_COLLECTION and READ_BOOKS_COLLECTION must be different, "
                f"both are '{self.books_collection}'"
            )
        if self.store_timeout_seconds <= 0:
            raise ValueError(
                f"STORE_TIMEOUT_SECONDS must be positive, got {self.store_timeout_seconds}"
            )
        if not 0 < self.server_port < 65536:
            raise ValueError(f"SERVER_PORT out of range: {self.server_port}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings()
