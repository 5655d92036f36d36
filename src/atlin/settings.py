import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .cache.config import CacheConfig
from .config import AtlinConfig

logger = logging.getLogger(__name__)


class ParserSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    markers: list[str] = Field(default_factory=lambda: ["@"])
    comments: bool = True
    cache_ttl: int = Field(default=0, ge=0)
    content_hash_key: bool = True


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    backend: Literal["null", "memory", "file", "sqlite", "postgres"] = "null"
    prefix: str = "atlin:"
    directory: str | None = None
    db_path: str = ":memory:"
    dsn: str | None = None
    table: str = "atlin_cache"


class Settings(BaseModel):
    """Layout of an atlin YAML settings file. Both sections are optional."""

    model_config = ConfigDict(extra="forbid")

    parser: ParserSettings = Field(default_factory=ParserSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    def to_configs(self) -> tuple[AtlinConfig, CacheConfig]:
        parser = self.parser
        return (
            AtlinConfig(
                markers=tuple(parser.markers),
                comments=parser.comments,
                cache_ttl=parser.cache_ttl,
                content_hash_key=parser.content_hash_key,
            ),
            CacheConfig(**self.cache.model_dump()),
        )


def load_settings(path: str | Path) -> tuple[AtlinConfig, CacheConfig]:
    """
    Load parser and cache configuration from a YAML file.

    Example file:

        parser:
          markers: ["@", "!"]
          comments: true
          cache_ttl: 3600
        cache:
          backend: file
          directory: /var/cache/atlin
    """
    logger.info("Loading settings from %s", path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return Settings.model_validate(data).to_configs()
