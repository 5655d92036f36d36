# Cache
from .cache import (
    Cache,
    CacheConfig,
    FileCache,
    MemoryCache,
    NullCache,
    PgCache,
    SQLiteCache,
    create_cache,
)

# Configuration
from .config import AtlinConfig
from .settings import load_settings

# Errors
from .errors import AtlinError, CacheError, SourceReadError

# Orchestration
from .loader import Atlin

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Parsing
from .parsers import AtlinParser, MarkerSet, serialize, split_lines

__all__ = [
    # Cache
    "Cache",
    "CacheConfig",
    "FileCache",
    "MemoryCache",
    "NullCache",
    "PgCache",
    "SQLiteCache",
    "create_cache",
    # Configuration
    "AtlinConfig",
    "load_settings",
    # Errors
    "AtlinError",
    "CacheError",
    "SourceReadError",
    # Orchestration
    "Atlin",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsing
    "AtlinParser",
    "MarkerSet",
    "serialize",
    "split_lines",
]
