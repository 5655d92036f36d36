# src/atlin/cache/config.py

from dataclasses import dataclass
from typing import Literal

Backend = Literal["null", "memory", "file", "sqlite", "postgres"]


@dataclass(frozen=True)
class CacheConfig:
    backend: Backend = "null"
    prefix: str = "atlin:"

    # backend-specific (used only when relevant)
    directory: str | None = None  # file
    db_path: str = ":memory:"  # sqlite
    dsn: str | None = None  # postgres
    table: str = "atlin_cache"  # sqlite, postgres
