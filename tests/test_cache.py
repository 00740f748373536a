"""Tests for the expiring response cache."""

from __future__ import annotations

from tonepicker.services.cache import ResponseCache


def test_set_and_get(cache: ResponseCache) -> None:
    cache.set("key", "value")
    assert cache.get("key") == "value"


def test_get_missing(cache: ResponseCache) -> None:
    assert cache.get("nope") is None


def test_entry_survives_until_ttl(cache: ResponseCache, clock) -> None:
    cache.set("key", "value")
    clock.advance(60.0)
    assert cache.get("key") == "value"


def test_expired_entry_is_evicted_on_lookup(cache: ResponseCache, clock) -> None:
    cache.set("key", "value")
    clock.advance(60.5)
    assert len(cache) == 1
    assert cache.get("key") is None
    assert len(cache) == 0


def test_set_refreshes_expiry(cache: ResponseCache, clock) -> None:
    cache.set("key", "old")
    clock.advance(50)
    cache.set("key", "new")
    clock.advance(50)
    assert cache.get("key") == "new"


def test_zero_ttl_expires_as_soon_as_clock_moves(clock) -> None:
    cache = ResponseCache(ttl_seconds=0, clock=clock)
    cache.set("key", "value")
    clock.advance(0.001)
    assert cache.get("key") is None
