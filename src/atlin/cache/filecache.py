"""File-based cache: one JSON document per key plus an optional expiry file."""

import hashlib
import json
import logging
import os
import tempfile
import time
from collections.abc import Mapping
from pathlib import Path

from atlin.errors import CacheError

from .base import Cache

logger = logging.getLogger(__name__)


class FileCache(Cache):
    """
    Cache parse results as JSON files in a directory.

    File names are `<prefix><md5(key)>.json`. When a ttl is given, the
    absolute expiry time is written to a companion `.meta` file and the
    entry is removed on the first read after it expires.

    Example:
        >>> cache = FileCache("/var/cache/atlin")
        >>> cache.set("messages.atlin", {"greeting": "Hello"}, ttl=3600)
        >>> cache.get("messages.atlin")
        {'greeting': 'Hello'}
    """

    def __init__(self, directory: str | Path, prefix: str = "atlin_") -> None:
        self._directory = Path(directory)
        self._prefix = prefix

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheError(
                f"Cache directory could not be created: {self._directory}"
            ) from exc

        if not os.access(self._directory, os.W_OK):
            raise CacheError(f"Cache directory is not writable: {self._directory}")

        logger.info("Initialized FileCache in directory=%s", self._directory)

    def get(self, key: str) -> dict[str, str] | None:
        data_path, meta_path = self._paths(key)
        if not data_path.is_file():
            return None

        if meta_path.is_file():
            try:
                expires_at = float(meta_path.read_text())
            except (OSError, ValueError):
                logger.warning("Unreadable expiry file, dropping entry: %s", meta_path)
                self._remove(data_path, meta_path)
                return None
            if expires_at > 0 and time.time() > expires_at:
                logger.debug("Entry expired: %s", data_path)
                self._remove(data_path, meta_path)
                return None

        try:
            data = json.loads(data_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable cache entry, treating as miss: %s", data_path)
            return None

        return data if isinstance(data, dict) else None

    def set(self, key: str, data: Mapping[str, str], ttl: int = 0) -> None:
        data_path, meta_path = self._paths(key)
        tmp_path: Path | None = None

        try:
            # Unique temp name per writer, so concurrent writers never share it
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._directory,
                prefix=f"{data_path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                json.dump(dict(data), tmp)
            os.replace(tmp_path, data_path)
            tmp_path = None

            if ttl > 0:
                meta_path.write_text(str(time.time() + ttl))
            elif meta_path.is_file():
                meta_path.unlink()
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise CacheError(f"FileCache failed to write: {data_path}") from exc

    def delete(self, key: str) -> None:
        self._remove(*self._paths(key))

    def flush(self) -> None:
        try:
            for path in self._directory.glob(f"{self._prefix}*"):
                if path.is_file():
                    path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheError(f"FileCache failed to flush: {self._directory}") from exc

    def is_available(self) -> bool:
        return self._directory.is_dir() and os.access(self._directory, os.W_OK)

    def _paths(self, key: str) -> tuple[Path, Path]:
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()
        stem = f"{self._prefix}{digest}"
        return self._directory / f"{stem}.json", self._directory / f"{stem}.meta"

    @staticmethod
    def _remove(*paths: Path) -> None:
        try:
            for path in paths:
                path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheError(f"FileCache failed to remove: {path}") from exc
