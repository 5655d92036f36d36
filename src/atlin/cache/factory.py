# src/atlin/cache/factory.py

from atlin.observability.base import MetricsHook, NoOpMetricsHook

from .base import Cache
from .config import CacheConfig


def create_cache(
    config: CacheConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Cache:
    """Create a cache backend from config.

    Args:
        config: Cache configuration specifying backend and its options.
        metrics_hook: Optional metrics hook for backends that record metrics.

    Returns:
        Configured Cache implementation.

    Raises:
        ValueError: If backend is unknown or a required option is missing.

    Example:
        >>> cache = create_cache(CacheConfig(backend="file", directory="/tmp/atlin"))
    """
    if config.backend == "null":
        from .nullcache import NullCache

        return NullCache()

    if config.backend == "memory":
        from .memorycache import MemoryCache

        return MemoryCache(prefix=config.prefix)

    if config.backend == "file":
        from .filecache import FileCache

        if not config.directory:
            raise ValueError("File cache requires a directory")
        # ":" is not allowed in file names on every platform
        return FileCache(config.directory, prefix=config.prefix.replace(":", "_"))

    if config.backend == "sqlite":
        from .sqlitecache import SQLiteCache

        return SQLiteCache(
            db_path=config.db_path,
            prefix=config.prefix,
            table=config.table,
            metrics_hook=metrics_hook,
        )

    if config.backend == "postgres":
        from .pgcache import PgCache

        if not config.dsn:
            raise ValueError("Postgres cache requires a dsn")
        return PgCache(
            config.dsn,
            table=config.table,
            prefix=config.prefix,
            metrics_hook=metrics_hook,
        )

    raise ValueError(f"Unknown cache backend: {config.backend}")
