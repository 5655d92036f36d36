# src/atlin/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class AtlinConfig:
    """Configuration for the Atlin parser and its cache usage.

    Immutable. Explicit. No magic defaults from environment.
    """

    markers: tuple[str, ...] = ("@",)
    comments: bool = True
    cache_ttl: int = 0  # Seconds, 0 = keep until flushed
    content_hash_key: bool = True

    def __post_init__(self) -> None:
        if self.cache_ttl < 0:
            raise ValueError("cache_ttl must be >= 0")
