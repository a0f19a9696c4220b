"""Tests for the TTL response cache."""

from __future__ import annotations

from poke_teams.clients import ResponseCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = ResponseCache(ttl=300, clock=clock)
    cache.set("https://example/pokemon/1", {"id": 1})

    clock.now += 299
    assert cache.get("https://example/pokemon/1") == {"id": 1}

    clock.now += 1
    assert cache.get("https://example/pokemon/1") is None
    assert len(cache) == 0


def test_invalidate_and_clear() -> None:
    cache = ResponseCache(clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.invalidate("a") is True
    assert cache.invalidate("a") is False
    assert "a" not in cache
    assert "b" in cache

    cache.clear()
    assert len(cache) == 0


def test_len_counts_only_live_entries() -> None:
    clock = FakeClock()
    cache = ResponseCache(ttl=60, clock=clock)
    cache.set("old", 1)
    clock.now += 30
    cache.set("new", 2)

    assert len(cache) == 2
    clock.now += 30
    assert len(cache) == 1
    assert cache.prune() == 0
    assert "new" in cache
