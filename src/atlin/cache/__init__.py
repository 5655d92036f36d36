# src/atlin/cache/__init__.py

"""Cache backends for parse results.

Backends share the `Cache` protocol and are interchangeable. The parser
itself never touches a cache; `atlin.Atlin` decides when to use one.

Example:
    >>> from atlin.cache import CacheConfig, create_cache
    >>>
    >>> cache = create_cache(CacheConfig(backend="sqlite", db_path="cache.db"))
    >>> atlin = Atlin(cache=cache)
"""

from .base import Cache
from .config import CacheConfig
from .factory import create_cache
from .filecache import FileCache
from .memorycache import MemoryCache
from .nullcache import NullCache
from .pgcache import PgCache
from .sqlitecache import SQLiteCache

__all__ = [
    # Factory
    "create_cache",
    # Protocol
    "Cache",
    # Config
    "CacheConfig",
    # Backends
    "FileCache",
    "MemoryCache",
    "NullCache",
    "PgCache",
    "SQLiteCache",
]
