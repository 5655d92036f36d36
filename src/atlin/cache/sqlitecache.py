"""SQLite cache backend built on apsw."""

import json
import logging
import time
from collections.abc import Mapping
from pathlib import Path
from time import monotonic

import apsw

from atlin.errors import CacheError
from atlin.observability import names
from atlin.observability.base import MetricsHook, NoOpMetricsHook

from .base import Cache

logger = logging.getLogger(__name__)


class SQLiteCache(Cache):
    """Cache backed by a single SQLite table.

    Keys are stored with the cache prefix so several caches can share one
    database file. Expired rows are ignored on read and deleted lazily.

    Example:
        >>> cache = SQLiteCache(db_path="atlin-cache.db")
        >>> cache.set("messages.atlin", {"greeting": "Hello"})
        >>> cache.get("messages.atlin")
        {'greeting': 'Hello'}
    """

    def __init__(
        self,
        db_path: str | Path = ":memory:",
        prefix: str = "atlin:",
        table: str = "atlin_cache",
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        """
        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
            prefix: Prefix applied to every stored key.
            table: Table name; must be a plain identifier.
            metrics_hook: Hook for recording metrics.
        """
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table!r}")

        self.metrics_hook = metrics_hook
        self._db_path = str(db_path)
        self._prefix = prefix
        self._table = table
        self._conn: apsw.Connection | None = None

    def _get_connection(self) -> apsw.Connection:
        """Get or create the connection (lazy initialization)."""
        if self._conn is None:
            self._conn = apsw.Connection(self._db_path)
            self._conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    key TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    expires_at REAL
                )
                """
            )
            logger.info(
                "Opened SQLiteCache db_path=%s, table=%s", self._db_path, self._table
            )
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def get(self, key: str) -> dict[str, str] | None:
        start = monotonic()
        try:
            rows = list(
                self._get_connection().execute(
                    f"SELECT data, expires_at FROM {self._table} WHERE key = ?",
                    (self._prefix + key,),
                )
            )
        except apsw.Error as exc:
            raise CacheError(f"SQLiteCache failed to read key: {key}") from exc

        self._record("get", start)

        if not rows:
            return None

        data_json, expires_at = rows[0]
        if expires_at is not None and time.time() > expires_at:
            logger.debug("Entry expired: %s", key)
            self.delete(key)
            return None

        try:
            data = json.loads(data_json)
        except (TypeError, ValueError):
            logger.warning("Unreadable cache entry, treating as miss: %s", key)
            return None

        return data if isinstance(data, dict) else None

    def set(self, key: str, data: Mapping[str, str], ttl: int = 0) -> None:
        start = monotonic()
        expires_at = time.time() + ttl if ttl > 0 else None
        try:
            self._get_connection().execute(
                f"""
                INSERT INTO {self._table} (key, data, expires_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    data = excluded.data,
                    expires_at = excluded.expires_at
                """,
                (self._prefix + key, json.dumps(dict(data)), expires_at),
            )
        except apsw.Error as exc:
            raise CacheError(f"SQLiteCache failed to store key: {key}") from exc

        self._record("set", start)

    def delete(self, key: str) -> None:
        start = monotonic()
        try:
            self._get_connection().execute(
                f"DELETE FROM {self._table} WHERE key = ?", (self._prefix + key,)
            )
        except apsw.Error as exc:
            raise CacheError(f"SQLiteCache failed to delete key: {key}") from exc

        self._record("delete", start)

    def flush(self) -> None:
        start = monotonic()
        try:
            self._get_connection().execute(
                f"DELETE FROM {self._table} WHERE substr(key, 1, ?) = ?",
                (len(self._prefix), self._prefix),
            )
        except apsw.Error as exc:
            raise CacheError("SQLiteCache failed to flush") from exc

        self._record("flush", start)

    def is_available(self) -> bool:
        try:
            self._get_connection()
        except apsw.Error:
            logger.warning("SQLiteCache unavailable: db_path=%s", self._db_path)
            return False
        return True

    def _record(self, operation: str, start: float) -> None:
        elapsed_ms = 1000 * (monotonic() - start)
        labels = {"backend": "sqlite", "operation": operation}
        self.metrics_hook.record_latency(
            names.CACHE_BACKEND_DURATION, elapsed_ms, labels=labels
        )
        self.metrics_hook.increment(names.CACHE_BACKEND_OPERATIONS_TOTAL, labels=labels)
