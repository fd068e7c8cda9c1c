"""Tests for the bounded TTL cache."""

import pytest

from khmerdubbed.core.caching import TTLCache


class TestTTLCache:
    """Expiry and eviction behaviour."""

    def test_missing_key_returns_none(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        assert cache.get("nope") is None

    def test_set_then_get_returns_exact_value(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        value = {"metas": [1, 2, 3]}
        cache.set("k", value)
        assert cache.get("k") is value

    def test_expired_entry_is_absent_and_removed(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        cache.set("k", "v")
        clock.advance(10)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_ttl_override(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        cache.set("short", "v", ttl=1)
        cache.set("long", "v")
        clock.advance(5)
        assert cache.get("short") is None
        assert cache.get("long") == "v"

    def test_size_never_exceeds_max(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        for i in range(20):
            cache.set(f"k{i}", i)
            assert len(cache) <= 3

    def test_earliest_untouched_entry_evicted_first(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.set("d", 4)
        assert cache.get("a") is None
        assert [cache.get(k) for k in ("b", "c", "d")] == [2, 3, 4]

    def test_get_refreshes_recency(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.get("a")
        cache.set("d", 4)
        assert "a" in cache
        assert "b" not in cache

    def test_overwrite_does_not_evict(self, clock) -> None:
        cache = TTLCache(2, ttl=10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 3)
        assert len(cache) == 2
        assert cache.get("a") == 3
        assert cache.get("b") == 2

    def test_delete(self, clock) -> None:
        cache = TTLCache(3, ttl=10, clock=clock)
        cache.set("k", None)
        assert cache.delete("k") is True
        assert "k" not in cache
        assert cache.delete("k") is False

    def test_purge_expired(self, clock) -> None:
        cache = TTLCache(5, ttl=10, clock=clock)
        cache.set("old", 1, ttl=1)
        cache.set("new", 2)
        clock.advance(2)
        assert cache.purge_expired() == 1
        assert len(cache) == 1

    def test_stats_count_hits_and_misses(self, clock) -> None:
        cache = TTLCache(5, ttl=10, clock=clock)
        cache.set("a", 1)
        cache.get("a")
        cache.get("b")
        stats = cache.stats()
        assert stats["total_entries"] == 1
        assert stats["max_entries"] == 5
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            TTLCache(0)
