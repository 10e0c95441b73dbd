"""Unit tests for the in-memory expiring cache."""

from __future__ import annotations

import threading
import time

import pytest

from whatexec.caching.expiring_cache import ExpiringCache


def _fake_clock() -> tuple[dict[str, float], ExpiringCache]:
    state = {"now": 100.0}
    return state, ExpiringCache(clock=lambda: state["now"])


def test_entries_expire_when_ttl_elapses() -> None:
    """Values should be served until the TTL elapses, then dropped on read."""

    state, cache = _fake_clock()
    cache.set("key", "value", ttl_seconds=10.0)

    state["now"] = 109.9
    assert cache.get("key") == "value"
    state["now"] = 110.0
    assert cache.get("key") is None
    assert cache.hits == 1
    assert cache.misses == 1
    assert cache.hit_rate() == 0.5


def test_get_or_set_calls_factory_only_on_miss() -> None:
    """The factory should run once per live entry."""

    state, cache = _fake_clock()
    calls: list[int] = []

    def _factory() -> tuple[str, ...]:
        calls.append(1)
        return ("/usr/bin",)

    first = cache.get_or_set("dirs", _factory, ttl_seconds=60.0)
    second = cache.get_or_set("dirs", _factory, ttl_seconds=60.0)
    state["now"] += 61.0
    third = cache.get_or_set("dirs", _factory, ttl_seconds=60.0)

    assert first.value == second.value == third.value == ("/usr/bin",)
    assert len(calls) == 2
    assert third.stored_at == 161.0


def test_invalidate_drops_one_or_all_entries() -> None:
    """Invalidation should support a single key or the whole cache."""

    _, cache = _fake_clock()
    cache.set("a", 1, ttl_seconds=5.0)
    cache.set("b", 2, ttl_seconds=5.0)

    cache.invalidate("a")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.invalidate()
    assert cache.get("b") is None


def test_set_rejects_non_positive_ttl() -> None:
    """A zero or negative TTL is a programming error."""

    _, cache = _fake_clock()

    with pytest.raises(ValueError, match="ttl_seconds"):
        cache.set("key", "value", ttl_seconds=0)


def test_racing_recomputes_after_expiry_store_one_whole_entry() -> None:
    """Callers racing on an expired key each get a complete value and one full entry survives."""

    state, cache = _fake_clock()
    expected = ("/usr/local/bin", "/usr/bin", "/bin")
    cache.set("dirs", ("/stale",), ttl_seconds=5.0)
    state["now"] = 105.0
    callers = 8
    barrier = threading.Barrier(callers)
    calls: list[int] = []
    calls_lock = threading.Lock()
    results: list[tuple[str, ...]] = []
    results_lock = threading.Lock()

    def _slow_factory() -> tuple[str, ...]:
        with calls_lock:
            calls.append(1)
        barrier.wait(timeout=5.0)
        built: list[str] = []
        for entry in expected:
            time.sleep(0.001)
            built.append(entry)
        return tuple(built)

    def _read() -> None:
        entry = cache.get_or_set("dirs", _slow_factory, ttl_seconds=60.0)
        with results_lock:
            results.append(entry.value)

    threads = [threading.Thread(target=_read) for _ in range(callers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    final = cache.get_entry("dirs")
    assert len(calls) == callers
    assert results == [expected] * callers
    assert final is not None
    assert final.value == expected
    assert final.stored_at == 105.0
    assert final.ttl_seconds == 60.0
