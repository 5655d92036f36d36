import logging
import threading
from collections.abc import Mapping
from time import monotonic

from .base import Cache

logger = logging.getLogger(__name__)


class MemoryCache(Cache):
    """
    Process-local cache.

    - entries expire on a monotonic clock
    - stored and returned data are copies
    - safe to use from multiple threads
    """

    def __init__(self, prefix: str = "atlin:") -> None:
        self._prefix = prefix
        self._entries: dict[str, tuple[dict[str, str], float | None]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict[str, str] | None:
        full_key = self._prefix + key
        with self._lock:
            entry = self._entries.get(full_key)
            if entry is None:
                return None

            data, expires_at = entry
            if expires_at is not None and monotonic() >= expires_at:
                logger.debug("Entry expired: %s", full_key)
                del self._entries[full_key]
                return None

            return dict(data)

    def set(self, key: str, data: Mapping[str, str], ttl: int = 0) -> None:
        expires_at = monotonic() + ttl if ttl > 0 else None
        with self._lock:
            self._entries[self._prefix + key] = (dict(data), expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(self._prefix + key, None)

    def flush(self) -> None:
        with self._lock:
            for full_key in [k for k in self._entries if k.startswith(self._prefix)]:
                del self._entries[full_key]

    def is_available(self) -> bool:
        return True
