"""Runtime configuration.

Settings are read from LEADREPORTS_* environment variables, falling
back to the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from leadreports.backend.base import MAX_ROWS_PER_REQUEST
from leadreports.db.session import DEFAULT_DB_PATH

# Channel -> backing table
CHANNEL_TABLES = {
    "pymes": "pymes_data",
    "digitales": "canales_digitales_data",
}
DEFAULT_CHANNEL = "pymes"

DEFAULT_PAGE_SIZE = 1000
# 500 full pages = 500k rows before a fetch is cut off as incomplete
DEFAULT_MAX_PAGES = 500
DEFAULT_FETCH_WORKERS = 4
DEFAULT_PUBLIC_TAG = "Gobierno"
DEFAULT_PRIVATE_TAG = "Privado"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


def table_for_channel(canal: str) -> str:
    """Map a channel to its table; unknown channels read the pymes table."""
    return CHANNEL_TABLES.get(canal, CHANNEL_TABLES[DEFAULT_CHANNEL])


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Report service settings."""

    db_path: Path = DEFAULT_DB_PATH
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES
    backend_max_rows: int = MAX_ROWS_PER_REQUEST
    fetch_workers: int = DEFAULT_FETCH_WORKERS
    public_tag: str = DEFAULT_PUBLIC_TAG
    private_tag: str = DEFAULT_PRIVATE_TAG
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If a numeric variable is not a positive integer.
        """
        if env is None:
            env = os.environ

        origins = env.get("LEADREPORTS_CORS_ORIGINS")
        cors_origins = (
            tuple(o.strip() for o in origins.split(",") if o.strip())
            if origins
            else DEFAULT_CORS_ORIGINS
        )

        return cls(
            db_path=Path(env.get("LEADREPORTS_DB_PATH", str(DEFAULT_DB_PATH))),
            page_size=_int_env(env, "LEADREPORTS_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            max_pages=_int_env(env, "LEADREPORTS_MAX_PAGES", DEFAULT_MAX_PAGES),
            backend_max_rows=_int_env(
                env, "LEADREPORTS_BACKEND_MAX_ROWS", MAX_ROWS_PER_REQUEST
            ),
            fetch_workers=_int_env(env, "LEADREPORTS_FETCH_WORKERS", DEFAULT_FETCH_WORKERS),
            public_tag=env.get("LEADREPORTS_PUBLIC_TAG", DEFAULT_PUBLIC_TAG),
            private_tag=env.get("LEADREPORTS_PRIVATE_TAG", DEFAULT_PRIVATE_TAG),
            cors_origins=cors_origins,
        )
