"""Run-scoped caching primitives."""

from .expiring_cache import CacheEntry, ExpiringCache

__all__ = ["CacheEntry", "ExpiringCache"]
