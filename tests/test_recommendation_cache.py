"""Tests for the TTL + LRU recommendation cache."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from memory.recommendation_cache import RecommendationCache, cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_cache_key_is_order_insensitive_for_items():
    first = cache_key(["b", "a"], {"style": "x"}, {"occasion": "work"}, {"max": 6})
    second = cache_key(["a", "b"], {"style": "x"}, {"occasion": "work"}, {"max": 6})
    assert first == second
    assert first != cache_key(["a", "b"], {"style": "x"}, {"occasion": "date"}, {"max": 6})


def test_entries_expire_on_read():
    clock = FakeClock()
    cache = RecommendationCache(ttl_seconds=600, max_entries=10, clock=clock)
    cache.set("k", ["result"])
    clock.now += 599
    assert cache.get("k") == ["result"]
    clock.now += 1
    assert cache.get("k") is None
    assert len(cache) == 0
    assert cache.hits == 1
    assert cache.misses == 1


def test_least_recently_used_entry_is_evicted():
    cache = RecommendationCache(ttl_seconds=600, max_entries=2, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    cache.set("c", 3)
    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_disabled_cache_stores_nothing():
    cache = RecommendationCache(ttl_seconds=0, max_entries=10, clock=FakeClock())
    cache.set("a", 1)
    assert cache.get("a") is None


def test_cached_values_are_isolated_from_callers():
    cache = RecommendationCache(ttl_seconds=600, max_entries=10, clock=FakeClock())
    stored = [{"reasoning": ["neutral palette"]}]
    cache.set("k", stored)
    stored[0]["reasoning"].clear()

    first = cache.get("k")
    assert first == [{"reasoning": ["neutral palette"]}]
    first[0]["reasoning"].append("edited")
    assert cache.get("k") == [{"reasoning": ["neutral palette"]}]
