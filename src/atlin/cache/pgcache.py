import logging
import os
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from time import monotonic
from typing import Any, TypeVar

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from atlin.errors import CacheError
from atlin.observability import names
from atlin.observability.base import MetricsHook, NoOpMetricsHook

from .base import Cache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PgCache(Cache):
    """Cache backed by a PostgreSQL table, shared across processes and hosts.

    Expected schema (see `create_schema`):

        CREATE TABLE atlin_cache (
            key TEXT PRIMARY KEY,
            data JSONB NOT NULL,
            expires_at TIMESTAMPTZ
        );

    Connection errors are retried a few times before surfacing as CacheError.
    """

    def __init__(
        self,
        dsn: str,
        table: str = "atlin_cache",
        prefix: str = "atlin:",
        pool_min_size: int | None = None,
        pool_max_size: int | None = None,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.metrics_hook = metrics_hook
        self._table = sql.Identifier(table)
        self._prefix = prefix
        self._max_retries = max_retries
        pool_min_size = self._get_param_value(
            pool_min_size, "ATLIN_PG_POOL_MIN_SIZE", 1
        )
        pool_max_size = self._get_param_value(
            pool_max_size, "ATLIN_PG_POOL_MAX_SIZE", 10
        )
        self._pool = ConnectionPool(dsn, min_size=pool_min_size, max_size=pool_max_size)
        logger.info(
            "Initialized PgCache with table=%s, pool_min_size=%s, pool_max_size=%s",
            table,
            pool_min_size,
            pool_max_size,
        )

    def close(self) -> None:
        """Close the connection pool."""
        self._pool.close()

    def create_schema(self) -> None:
        query = sql.SQL(
            """
        CREATE TABLE IF NOT EXISTS {table} (
            key TEXT PRIMARY KEY,
            data JSONB NOT NULL,
            expires_at TIMESTAMPTZ
        );
        """
        ).format(table=self._table)
        self._run("create_schema", lambda cur: cur.execute(query))

    def get(self, key: str) -> dict[str, str] | None:
        query = sql.SQL(
            """
        SELECT data
        FROM {table}
        WHERE key = %s
            AND (expires_at IS NULL OR expires_at > now());
        """
        ).format(table=self._table)

        def _get(cur: psycopg.Cursor[Any]) -> dict[str, str] | None:
            cur.execute(query, (self._prefix + key,))
            row = cur.fetchone()
            if not row:
                return None
            if not isinstance(row[0], dict):
                logger.warning("Malformed cache entry, treating as miss: %s", key)
                return None
            return row[0]

        return self._run("get", _get)

    def set(self, key: str, data: Mapping[str, str], ttl: int = 0) -> None:
        query = sql.SQL(
            """
        INSERT INTO {table} (key, data, expires_at)
        VALUES (%s, %s, %s)
        ON CONFLICT (key)
        DO UPDATE SET
            data = EXCLUDED.data,
            expires_at = EXCLUDED.expires_at;
        """
        ).format(table=self._table)
        expires_at = None
        if ttl > 0:
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)
        params = (self._prefix + key, Jsonb(dict(data)), expires_at)
        self._run("set", lambda cur: cur.execute(query, params))

    def delete(self, key: str) -> None:
        query = sql.SQL("DELETE FROM {table} WHERE key = %s;").format(
            table=self._table
        )
        self._run("delete", lambda cur: cur.execute(query, (self._prefix + key,)))

    def flush(self) -> None:
        query = sql.SQL("DELETE FROM {table} WHERE starts_with(key, %s);").format(
            table=self._table
        )
        self._run("flush", lambda cur: cur.execute(query, (self._prefix,)))

    def is_available(self) -> bool:
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error:
            logger.warning("PgCache unavailable")
            return False
        return True

    def _run(self, operation: str, fn: Callable[[psycopg.Cursor[Any]], T]) -> T:
        start = monotonic()
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._max_retries),
                wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
                retry=retry_if_exception_type(psycopg.OperationalError),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    with self._pool.connection() as conn, conn.cursor() as cur:
                        result = fn(cur)
        except psycopg.Error as exc:
            logger.error("PgCache %s failed: %s", operation, exc)
            raise CacheError(f"PgCache {operation} failed") from exc

        elapsed_ms = 1000 * (monotonic() - start)
        labels = {"backend": "postgres", "operation": operation}
        self.metrics_hook.record_latency(
            names.CACHE_BACKEND_DURATION, elapsed_ms, labels=labels
        )
        self.metrics_hook.increment(names.CACHE_BACKEND_OPERATIONS_TOTAL, labels=labels)
        return result

    @staticmethod
    def _get_param_value(passed_value: int | None, env_var: str, default: int) -> int:
        if passed_value is not None:
            return passed_value
        env_value = os.environ.get(env_var)
        if env_value is not None:
            return int(env_value)
        return default
