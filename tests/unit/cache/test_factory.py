# tests/unit/cache/test_factory.py

from pathlib import Path
from unittest.mock import patch

import pytest

from atlin.cache import CacheConfig, create_cache
from atlin.cache.filecache import FileCache
from atlin.cache.memorycache import MemoryCache
from atlin.cache.nullcache import NullCache
from atlin.cache.pgcache import PgCache
from atlin.cache.sqlitecache import SQLiteCache


class TestFactory:
    def test_default_is_null(self) -> None:
        assert isinstance(create_cache(CacheConfig()), NullCache)

    def test_memory(self) -> None:
        assert isinstance(create_cache(CacheConfig(backend="memory")), MemoryCache)

    def test_file(self, tmp_path: Path) -> None:
        cache = create_cache(CacheConfig(backend="file", directory=str(tmp_path)))

        assert isinstance(cache, FileCache)

    def test_file_prefix_is_filename_safe(self, tmp_path: Path) -> None:
        cache = create_cache(CacheConfig(backend="file", directory=str(tmp_path)))
        cache.set("k", {"a": "1"})

        assert all(":" not in p.name for p in tmp_path.iterdir())

    def test_file_requires_directory(self) -> None:
        with pytest.raises(ValueError, match="requires a directory"):
            create_cache(CacheConfig(backend="file"))

    def test_sqlite(self) -> None:
        assert isinstance(create_cache(CacheConfig(backend="sqlite")), SQLiteCache)

    def test_postgres(self) -> None:
        with patch("atlin.cache.pgcache.ConnectionPool"):
            cache = create_cache(
                CacheConfig(backend="postgres", dsn="postgresql://test")
            )

        assert isinstance(cache, PgCache)

    def test_postgres_requires_dsn(self) -> None:
        with pytest.raises(ValueError, match="requires a dsn"):
            create_cache(CacheConfig(backend="postgres"))

    def test_unknown_backend_raises(self) -> None:
        config = CacheConfig(backend="redis")  # type: ignore
        with pytest.raises(ValueError, match="Unknown cache backend"):
            create_cache(config)
