"""In-memory expiring key-value cache.

Responsibilities:
- Hold values for a fixed time-to-live measured on an injectable clock.
- Check expiry on every read; there is no background eviction timer.
- Replace entries wholesale so concurrent readers never see partial values.
- Track basic cache telemetry (hits/misses/refreshes) for verbose diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from time import monotonic
from typing import Any, Callable, Generic, Hashable, TypeVar


ValueT = TypeVar("ValueT")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[ValueT]):
    """One stored value with its capture time and lifetime."""

    value: ValueT
    stored_at: float
    ttl_seconds: float

    def is_expired(self, now: float) -> bool:
        """Return whether the entry has outlived its TTL at `now`."""

        return now >= self.stored_at + self.ttl_seconds


@dataclass(slots=True)
class ExpiringCache:
    """Thread-safe TTL cache scoped to one process run."""

    clock: Callable[[], float] = monotonic
    hits: int = 0
    misses: int = 0
    _entries: dict[Hashable, CacheEntry[Any]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def get_entry(self, key: Hashable) -> CacheEntry[Any] | None:
        """Return the live entry for `key`, dropping it when expired."""

        now = self.clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(now):
                del self._entries[key]
                entry = None
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def get(self, key: Hashable) -> Any | None:
        """Return the live value for `key`, or `None`."""

        entry = self.get_entry(key)
        return None if entry is None else entry.value

    def set(self, key: Hashable, value: Any, ttl_seconds: float) -> CacheEntry[Any]:
        """Store `value` under `key` for `ttl_seconds`, replacing any prior entry."""

        if ttl_seconds <= 0:
            raise ValueError("`ttl_seconds` must be positive.")
        entry = CacheEntry(value=value, stored_at=self.clock(), ttl_seconds=ttl_seconds)
        with self._lock:
            self._entries[key] = entry
        return entry

    def get_or_set(
        self,
        key: Hashable,
        factory: Callable[[], ValueT],
        ttl_seconds: float,
    ) -> CacheEntry[ValueT]:
        """Return the live entry for `key`, computing and storing it on a miss.

        The factory runs outside the lock. Two racing callers may both compute;
        the last writer's entry replaces the earlier one.
        """

        entry = self.get_entry(key)
        if entry is not None:
            return entry
        return self.set(key, factory(), ttl_seconds)

    def invalidate(self, key: Hashable | None = None) -> None:
        """Drop one entry, or every entry when `key` is `None`."""

        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def hit_rate(self) -> float:
        """Return cache hit rate for the current cache lifecycle."""

        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / float(total)
