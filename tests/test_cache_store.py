"""
Unit tests for CacheStore and cache keys.
"""

import threading

from conftest import FakeClock

from injury_info.core.cache_store import CacheStore, make_cache_key

TTL_MS = 5 * 60 * 1000


class TestCacheStore:
    """Tests for get / set / clear."""

    def test_get_missing_returns_none(self) -> None:
        assert CacheStore(clock=FakeClock()).get("nope", TTL_MS) is None

    def test_fresh_entry_is_returned(self) -> None:
        clock = FakeClock()
        cache = CacheStore(clock=clock)
        cache.set("k", [1, 2])
        clock.advance(299)
        assert cache.get("k", TTL_MS) == [1, 2]

    def test_entry_is_stale_once_age_reaches_ttl(self) -> None:
        clock = FakeClock()
        cache = CacheStore(clock=clock)
        cache.set("k", "v")
        clock.advance(300)
        assert cache.get("k", TTL_MS) is None

    def test_stale_entry_is_not_evicted_on_read(self) -> None:
        clock = FakeClock()
        cache = CacheStore(clock=clock)
        cache.set("k", "v")
        clock.advance(600)
        assert cache.get("k", TTL_MS) is None
        assert len(cache) == 1
        # a longer ttl on the same entry still sees it
        assert cache.get("k", 60 * 60 * 1000) == "v"

    def test_set_overwrites_and_resets_timestamp(self) -> None:
        clock = FakeClock()
        cache = CacheStore(clock=clock)
        cache.set("k", "old")
        clock.advance(250)
        cache.set("k", "new")
        clock.advance(250)
        assert cache.get("k", TTL_MS) == "new"

    def test_clear_removes_everything(self) -> None:
        cache = CacheStore(clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.clear() == 2
        assert cache.get("a", TTL_MS) is None
        assert len(cache) == 0

    def test_concurrent_writers_leave_whole_entries(self) -> None:
        cache = CacheStore(clock=FakeClock())

        def writer(n: int) -> None:
            for i in range(200):
                cache.set(f"key{i % 5}", (n, i))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(cache) == 5
        for i in range(5):
            value = cache.get(f"key{i}", TTL_MS)
            assert isinstance(value, tuple) and len(value) == 2


class TestMakeCacheKey:
    def test_arguments_are_sorted_and_normalized(self) -> None:
        key = make_cache_key("law_firms", specialty=" Mesothelioma ", location=None)
        assert key == "law_firms|location=*|specialty=mesothelioma"

    def test_same_query_different_spelling_shares_key(self) -> None:
        assert make_cache_key("settlements", condition="Mesothelioma", state="") == make_cache_key(
            "settlements", state=None, condition="mesothelioma"
        )

    def test_operation_only(self) -> None:
        assert make_cache_key("all_articles") == "all_articles"


class TestCacheIsolation:
    def test_mutating_the_stored_value_does_not_change_the_entry(self) -> None:
        cache = CacheStore(clock=FakeClock())
        value = {"rows": [1, 2]}
        cache.set("k", value)
        value["rows"].append(3)
        assert cache.get("k", TTL_MS) == {"rows": [1, 2]}

    def test_mutating_a_read_does_not_change_the_entry(self) -> None:
        cache = CacheStore(clock=FakeClock())
        cache.set("k", [[1], [2]])
        cache.get("k", TTL_MS)[0].append("x")
        assert cache.get("k", TTL_MS) == [[1], [2]]
