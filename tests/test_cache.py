"""
Tests for the bounded TTL memory cache
"""
from storage import MemoryCache


class FakeClock:
    """可手动推进的时钟 (秒)"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestMemoryCache:
    """内存缓存"""

    def test_set_then_get(self):
        cache = MemoryCache(clock=FakeClock())
        cache.set("trending:all:daily", ["a", "b"])
        assert cache.get("trending:all:daily") == ["a", "b"]

    def test_missing_key(self):
        cache = MemoryCache(clock=FakeClock())
        assert cache.get("nope") is None

    def test_empty_list_is_a_hit(self):
        cache = MemoryCache(clock=FakeClock())
        cache.set("k", [])
        assert cache.get("k") == []

    def test_expired_entry_is_removed_on_read(self):
        clock = FakeClock()
        cache = MemoryCache(ttl=10, clock=clock)
        cache.set("k", "v")

        clock.advance(10)
        assert cache.get("k") == "v"  # 恰好到期时仍然有效

        clock.advance(0.01)
        assert cache.get("k") is None
        assert cache.size() == 0

    def test_per_entry_ttl_overrides_default(self):
        clock = FakeClock()
        cache = MemoryCache(ttl=3600, clock=clock)
        cache.set("short", 1, ttl=1)
        cache.set("long", 2)

        clock.advance(2)
        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_overwrite_refreshes_expiry(self):
        clock = FakeClock()
        cache = MemoryCache(ttl=10, clock=clock)
        cache.set("k", "old")
        clock.advance(8)
        cache.set("k", "new")
        clock.advance(8)
        assert cache.get("k") == "new"

    def test_prune_evicts_soonest_expiring(self):
        clock = FakeClock()
        cache = MemoryCache(max_size=2, clock=clock)
        cache.set("a", 1, ttl=100)
        cache.set("b", 2, ttl=10)
        cache.set("c", 3, ttl=50)

        assert len(cache) == 2
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_size_never_exceeds_max(self):
        cache = MemoryCache(max_size=3, clock=FakeClock())
        for i in range(10):
            cache.set(f"k{i}", i, ttl=i + 1)
            assert cache.size() <= 3
        assert cache.get("k9") == 9

    def test_disabled_cache_never_stores(self):
        cache = MemoryCache(enabled=False, clock=FakeClock())
        cache.set("k", "v")
        assert cache.get("k") is None
        assert cache.size() == 0

    def test_clear_and_delete(self):
        cache = MemoryCache(clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        assert cache.get("a") is None
        cache.clear()
        assert cache.size() == 0

    def test_make_key(self):
        assert MemoryCache.make_key("metadata", "https://x.io/a", "deep") == "metadata:https://x.io/a:deep"
