from collections.abc import Mapping
from typing import Protocol


class Cache(Protocol):
    """Storage for parse results, addressed by a logical key."""

    def get(self, key: str) -> dict[str, str] | None: ...

    def set(self, key: str, data: Mapping[str, str], ttl: int = 0) -> None:
        """
        Store a parse result.
        A ttl of 0 keeps the entry until it is deleted or flushed.
        """
        ...

    def delete(self, key: str) -> None: ...

    def flush(self) -> None:
        """Remove every entry owned by this cache (scoped by its prefix)."""
        ...

    def is_available(self) -> bool: ...
