"""
Unit tests for the response cache.
"""

import pytest

from lead_editor.observability import metrics
from lead_editor.store import TTLCache, cache_key, record_endpoint

pytestmark = pytest.mark.unit


class TestCacheKey:
    """Tests for cache key construction"""

    def test_endpoint_and_params(self):
        assert cache_key("/room/R1") == "/room/R1_{}"
        assert cache_key("/property/P1/rooms", {"b": 2, "a": 1}) == '/property/P1/rooms_{"a": 1, "b": 2}'

    def test_param_order_does_not_matter(self):
        assert cache_key("/x", {"a": 1, "b": 2}) == cache_key("/x", {"b": 2, "a": 1})

    def test_record_endpoint(self):
        assert record_endpoint("room_type", "RT001") == "/room_type/RT001"


class TestTTLCache:
    """Tests for TTLCache"""

    def test_set_and_get(self, cache):
        cache.set("k", {"id": "R1"})

        assert cache.get("k") == {"id": "R1"}
        assert "k" in cache
        assert len(cache) == 1

    def test_miss(self, cache):
        assert cache.get("absent") is None

    def test_entries_expire_after_ttl(self, cache, clock):
        cache.set("k", "v")

        clock.advance(299)
        assert cache.get("k") == "v"

        clock.advance(1)
        assert cache.get("k") is None
        assert "k" not in cache

    def test_set_drops_expired_entries(self, cache, clock):
        cache.set("old", 1)
        cache.set("recent", 2)
        clock.advance(200)
        cache.set("fresh", 3)
        clock.advance(100)

        cache.set("new", 4)

        assert "old" not in cache
        assert "recent" not in cache
        assert cache.get("fresh") == 3
        assert len(cache) == 2

    def test_invalidate(self, cache):
        cache.set("k", "v")

        assert cache.invalidate("k") is True
        assert cache.invalidate("k") is False
        assert cache.get("k") is None

    def test_invalidate_record_drops_all_param_variants(self, cache):
        cache.set(cache_key("/room/R1"), "a")
        cache.set(cache_key("/room/R1", {"fields": "name"}), "b")
        cache.set(cache_key("/room/R10"), "c")
        cache.set(cache_key("/room_type/R1"), "d")

        removed = cache.invalidate_record("room", "R1")

        assert removed == 2
        assert cache.get(cache_key("/room/R10")) == "c"
        assert cache.get(cache_key("/room_type/R1")) == "d"

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()

        assert len(cache) == 0

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValueError):
            TTLCache(ttl_seconds=-1)

    def test_lookups_are_counted(self, cache):
        before = metrics.get_sample_value("lead_editor_cache_lookups_total", {"result": "hit"}) or 0
        cache.set("k", "v")
        cache.get("k")

        assert metrics.get_sample_value("lead_editor_cache_lookups_total", {"result": "hit"}) == before + 1
