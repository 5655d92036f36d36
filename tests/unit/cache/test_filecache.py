import os
from pathlib import Path
from unittest.mock import patch

import pytest

from atlin.cache.filecache import FileCache
from atlin.errors import CacheError


@pytest.fixture
def cache(tmp_path: Path) -> FileCache:
    return FileCache(tmp_path / "cache")


class TestFileCache:
    def test_creates_directory(self, tmp_path: Path) -> None:
        directory = tmp_path / "nested" / "cache"
        FileCache(directory)

        assert directory.is_dir()

    def test_directory_creation_failure_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(CacheError, match="could not be created"):
            FileCache(blocker / "cache")

    def test_get_missing_returns_none(self, cache: FileCache) -> None:
        assert cache.get("missing") is None

    def test_set_and_get(self, cache: FileCache) -> None:
        cache.set("messages.atlin", {"title": "Atlin Test", "": "orphan"})

        assert cache.get("messages.atlin") == {"title": "Atlin Test", "": "orphan"}

    def test_files_use_prefix_and_hash(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path, prefix="test_")
        cache.set("k", {"a": "1"})

        files = [p.name for p in tmp_path.iterdir()]
        assert len(files) == 1
        assert files[0].startswith("test_")
        assert files[0].endswith(".json")

    def test_delete(self, cache: FileCache) -> None:
        cache.set("k", {"a": "1"}, ttl=60)
        cache.delete("k")

        assert cache.get("k") is None

    def test_flush_only_removes_own_files(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        cache.set("k1", {"a": "1"})
        cache.set("k2", {"b": "2"}, ttl=60)
        other = tmp_path / "unrelated.txt"
        other.write_text("keep me")

        cache.flush()

        assert cache.get("k1") is None
        assert cache.get("k2") is None
        assert other.exists()

    def test_ttl_expiry_removes_files(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        with patch("atlin.cache.filecache.time.time", return_value=1000.0):
            cache.set("k", {"a": "1"}, ttl=10)

        with patch("atlin.cache.filecache.time.time", return_value=1005.0):
            assert cache.get("k") == {"a": "1"}

        with patch("atlin.cache.filecache.time.time", return_value=1011.0):
            assert cache.get("k") is None

        assert list(tmp_path.iterdir()) == []

    def test_set_without_ttl_clears_old_expiry(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        with patch("atlin.cache.filecache.time.time", return_value=1000.0):
            cache.set("k", {"a": "1"}, ttl=10)
            cache.set("k", {"a": "2"})

        with patch("atlin.cache.filecache.time.time", return_value=5000.0):
            assert cache.get("k") == {"a": "2"}

    def test_corrupt_entry_is_a_miss(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        cache.set("k", {"a": "1"})
        next(tmp_path.glob("*.json")).write_text("{not json")

        assert cache.get("k") is None

    def test_write_failure_raises(self, cache: FileCache) -> None:
        failure = OSError("disk full")
        with patch("atlin.cache.filecache.os.replace", side_effect=failure):
            with pytest.raises(CacheError, match="failed to write"):
                cache.set("k", {"a": "1"})

    def test_failed_write_leaves_no_temp_file(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        with patch("atlin.cache.filecache.os.replace", side_effect=OSError("full")):
            with pytest.raises(CacheError):
                cache.set("k", {"a": "1"})

        assert list(tmp_path.iterdir()) == []

    def test_writers_use_distinct_temp_files(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        temp_names = []
        real_replace = os.replace

        def record_replace(src: Path, dst: Path) -> None:
            temp_names.append(Path(src).name)
            real_replace(src, dst)

        with patch("atlin.cache.filecache.os.replace", side_effect=record_replace):
            cache.set("k", {"a": "1"})
            cache.set("k", {"a": "2"})

        assert len(set(temp_names)) == 2
        assert all(name.endswith(".tmp") for name in temp_names)
        assert not list(tmp_path.glob("*.tmp"))
        assert cache.get("k") == {"a": "2"}

    def test_delete_failure_raises(self, cache: FileCache) -> None:
        cache.set("k", {"a": "1"})
        with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
            with pytest.raises(CacheError, match="failed to remove"):
                cache.delete("k")

    def test_flush_failure_raises(self, cache: FileCache) -> None:
        cache.set("k", {"a": "1"})
        with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
            with pytest.raises(CacheError, match="failed to flush"):
                cache.flush()

    def test_expired_entry_removal_failure_raises(self, tmp_path: Path) -> None:
        cache = FileCache(tmp_path)
        with patch("atlin.cache.filecache.time.time", return_value=1000.0):
            cache.set("k", {"a": "1"}, ttl=10)

        with (
            patch("atlin.cache.filecache.time.time", return_value=1011.0),
            patch("pathlib.Path.unlink", side_effect=PermissionError("denied")),
        ):
            with pytest.raises(CacheError, match="failed to remove"):
                cache.get("k")

    def test_is_available(self, cache: FileCache) -> None:
        assert cache.is_available() is True
