from collections.abc import Mapping

from .base import Cache


class NullCache(Cache):
    """No-op cache. Disables caching entirely."""

    def get(self, key: str) -> dict[str, str] | None:
        return None

    def set(self, key: str, data: Mapping[str, str], ttl: int = 0) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def flush(self) -> None:
        pass

    def is_available(self) -> bool:
        return True
