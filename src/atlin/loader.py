# src/atlin/loader.py

import logging
import zlib
from collections.abc import Mapping
from pathlib import Path
from time import monotonic

from .cache.base import Cache
from .cache.nullcache import NullCache
from .config import AtlinConfig
from .errors import CacheError, SourceReadError
from .observability import names
from .observability.base import MetricsHook, NoOpMetricsHook
from .parsers.atlin_parser import AtlinParser
from .parsers.markers import MarkerSet
from .parsers.serializer import serialize

logger = logging.getLogger(__name__)


class Atlin:
    """
    Parse and serialize Atlin documents, optionally through a cache.

    The cache is best-effort: a failing backend is logged and the document
    is parsed fresh.

    Example:
        >>> atlin = Atlin(AtlinConfig(cache_ttl=3600), cache=MemoryCache())
        >>> atlin.parse("@greeting\\nHello", cache_key="greetings")
        {'greeting': 'Hello'}
    """

    def __init__(
        self,
        config: AtlinConfig | None = None,
        cache: Cache | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config if config is not None else AtlinConfig()
        self._cache = cache if cache is not None else NullCache()
        self._parser = AtlinParser.from_config(self.config)
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized Atlin with markers=%s, comments=%s, cache=%s",
            "".join(self._parser.markers),
            self._parser.comments,
            type(self._cache).__name__,
        )

    @property
    def cache(self) -> Cache:
        return self._cache

    @property
    def markers(self) -> MarkerSet:
        return self._parser.markers

    @property
    def primary_marker(self) -> str:
        return self._parser.markers.primary

    def parse(self, content: str | bytes, cache_key: str = "") -> dict[str, str]:
        """
        Parse Atlin text into a dict.

        Args:
            content: Raw Atlin text.
            cache_key: Logical key for cache look-up. Empty skips the cache.
        """
        resolved_key = self._resolve_key(cache_key, content) if cache_key else ""

        if resolved_key:
            cached = self._cache_get(resolved_key)
            if cached is not None:
                return cached

        start = monotonic()
        result = self._parser.parse(content)
        elapsed_ms = 1000 * (monotonic() - start)

        self.metrics_hook.record_latency(names.PARSE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.PARSE_TOTAL)
        self.metrics_hook.record_gauge(names.PARSE_INPUT_SIZE, len(content))
        logger.debug(
            "Parsed %d characters into %d entries in %.2fms",
            len(content),
            len(result),
            elapsed_ms,
        )

        if resolved_key:
            self._cache_set(resolved_key, result)

        return result

    def parse_file(self, path: str | Path, use_cache: bool = True) -> dict[str, str]:
        """
        Parse an Atlin file.

        Raises:
            SourceReadError: If the file cannot be read.
        """
        try:
            content = Path(path).read_bytes()
        except OSError as exc:
            self.metrics_hook.increment(names.PARSE_FILE_ERRORS_TOTAL)
            logger.error("Cannot read file: %s", path)
            raise SourceReadError(f"Atlin: cannot read file '{path}'.") from exc

        return self.parse(content, str(path) if use_cache else "")

    def serialize(self, data: Mapping[str, str], blank_lines: bool = True) -> str:
        """Serialize a mapping using the primary marker."""
        return serialize(data, marker=self.primary_marker, blank_lines=blank_lines)

    def invalidate(self, cache_key: str, content: str | bytes = "") -> None:
        """
        Remove a cached entry by its logical key.

        Pass the same content used for parsing when content_hash_key is on.
        """
        self._cache.delete(self._resolve_key(cache_key, content))

    def flush_cache(self) -> None:
        self._cache.flush()

    def _resolve_key(self, key: str, content: str | bytes) -> str:
        if self.config.content_hash_key and content:
            if isinstance(content, str):
                content = content.encode("utf-8", errors="surrogateescape")
            return f"{key}:{zlib.crc32(content):08x}"
        return key

    def _cache_get(self, key: str) -> dict[str, str] | None:
        try:
            cached = self._cache.get(key)
        except CacheError:
            logger.warning(
                "Cache read failed for key=%s, parsing fresh", key, exc_info=True
            )
            self.metrics_hook.increment(names.CACHE_ERRORS_TOTAL)
            return None

        if cached is None:
            logger.debug("Cache miss: %s", key)
            self.metrics_hook.increment(names.CACHE_MISSES_TOTAL)
        else:
            logger.debug("Cache hit: %s", key)
            self.metrics_hook.increment(names.CACHE_HITS_TOTAL)
        return cached

    def _cache_set(self, key: str, result: dict[str, str]) -> None:
        try:
            self._cache.set(key, result, self.config.cache_ttl)
        except CacheError:
            logger.warning("Cache write failed for key=%s", key, exc_info=True)
            self.metrics_hook.increment(names.CACHE_ERRORS_TOTAL)
