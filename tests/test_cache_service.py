import pytest

from resume_content.services.cache_service import CacheService, cache_key


def test_entry_expires_after_ttl(clock):
    cache = CacheService(ttl_ms=1000, clock=clock)
    cache.set("resume-en", {"name": "Ana"})

    clock.advance(1000)
    assert cache.get("resume-en") == {"name": "Ana"}

    clock.advance(1)
    assert cache.get("resume-en") is None
    assert "resume-en" not in cache
    assert len(cache) == 0


def test_version_mismatch_is_a_miss(clock):
    cache = CacheService(version="1.0.0", clock=clock)
    cache.set("projects-pt", [1, 2])
    cache.version = "2.0.0"
    assert cache.get("projects-pt") is None
    assert len(cache) == 0


def test_oldest_insertion_is_evicted_when_full(clock):
    cache = CacheService(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert "a" not in cache
    assert cache.get("b") == 2
    assert cache.get("c") == 3
    assert cache.stats().evictions == 1


def test_resetting_a_key_does_not_evict_others(clock):
    cache = CacheService(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    assert len(cache) == 2

    # "a" now counts as the newest insertion
    cache.set("c", 3)
    assert "b" not in cache
    assert cache.get("a") == 10


def test_delete_and_clear(clock):
    cache = CacheService(clock=clock)
    cache.set("x", 1)
    cache.set("y", 2)
    assert cache.delete("x")
    assert not cache.delete("x")
    cache.clear()
    assert len(cache) == 0


def test_stats_track_hits_and_misses(clock):
    cache = CacheService(max_size=5, clock=clock)
    cache.set("k", "v")
    cache.get("k")
    cache.get("k")
    cache.get("missing")

    stats = cache.stats()
    assert (stats.size, stats.max_size, stats.hits, stats.misses) == (1, 5, 2, 1)
    assert stats.hit_rate == pytest.approx(0.6667)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        CacheService(max_size=0)


def test_cache_key():
    assert cache_key("resume", "pt") == "resume-pt"
