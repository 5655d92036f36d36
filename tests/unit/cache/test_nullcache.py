from atlin.cache.nullcache import NullCache


class TestNullCache:
    def test_never_stores(self) -> None:
        cache = NullCache()
        cache.set("k", {"a": "1"}, ttl=60)

        assert cache.get("k") is None

    def test_delete_and_flush_are_noops(self) -> None:
        cache = NullCache()
        cache.delete("k")
        cache.flush()

        assert cache.is_available() is True
