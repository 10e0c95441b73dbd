"""`PATH` resolver backed by a time-to-live cache.

Responsibilities:
- Reuse the parsed `PATH` directory list and extension list across lookups.
- Rebuild each list once its TTL elapses; expiry is checked on every read.

The cache holds exactly two fixed slots. It is a single-snapshot cache, not a
per-query result cache.
"""

from __future__ import annotations

from loguru import logger

from ..caching.expiring_cache import CacheEntry, ExpiringCache
from ..detection.detector import ExecutableDetector
from ..models.datatypes import PathEnvironmentSnapshot
from .path_environment import PathEnvironment
from .path_resolver import PathExecutableResolver


PATH_CACHE_KEY = "path-directories"
PATH_EXTENSION_CACHE_KEY = "path-extensions"
DEFAULT_CACHE_TTL_SECONDS = 300.0


class CachedPathExecutableResolver(PathExecutableResolver):
    """`PathExecutableResolver` that serves `PATH` state from an `ExpiringCache`."""

    def __init__(
        self,
        detector: ExecutableDetector,
        cache: ExpiringCache | None = None,
        environment: PathEnvironment | None = None,
        *,
        path_cache_ttl_seconds: float | None = None,
        extension_cache_ttl_seconds: float | None = None,
    ) -> None:
        """Initialize the resolver with an injected cache and explicit TTLs."""

        super().__init__(detector, environment)
        self._cache = cache if cache is not None else ExpiringCache()
        self.path_cache_ttl_seconds = (
            DEFAULT_CACHE_TTL_SECONDS if path_cache_ttl_seconds is None else path_cache_ttl_seconds
        )
        self.extension_cache_ttl_seconds = (
            DEFAULT_CACHE_TTL_SECONDS
            if extension_cache_ttl_seconds is None
            else extension_cache_ttl_seconds
        )
        if self.path_cache_ttl_seconds <= 0 or self.extension_cache_ttl_seconds <= 0:
            raise ValueError("Cache lifetimes must be positive.")

    @property
    def cache(self) -> ExpiringCache:
        return self._cache

    def _directory_entry(self) -> CacheEntry[tuple[str, ...]]:
        def _load() -> tuple[str, ...]:
            logger.debug("Refreshing cached PATH directories.")
            return super(CachedPathExecutableResolver, self)._path_directories()

        return self._cache.get_or_set(PATH_CACHE_KEY, _load, self.path_cache_ttl_seconds)

    def _extension_entry(self) -> CacheEntry[tuple[str, ...]]:
        def _load() -> tuple[str, ...]:
            logger.debug("Refreshing cached PATH extensions.")
            return super(CachedPathExecutableResolver, self)._path_extensions()

        return self._cache.get_or_set(
            PATH_EXTENSION_CACHE_KEY, _load, self.extension_cache_ttl_seconds
        )

    def _path_directories(self) -> tuple[str, ...]:
        return self._directory_entry().value

    def _path_extensions(self) -> tuple[str, ...]:
        return self._extension_entry().value

    def snapshot(self) -> PathEnvironmentSnapshot:
        """Return the live `PATH` snapshot, refreshing expired slots first.

        Raises:
            EnvironmentUnavailableError: If `PATH` cannot be read.
        """

        directories = self._directory_entry()
        extensions = self._extension_entry()
        expires_at = min(
            directories.stored_at + directories.ttl_seconds,
            extensions.stored_at + extensions.ttl_seconds,
        )
        captured_at = min(directories.stored_at, extensions.stored_at)
        return PathEnvironmentSnapshot(
            directories=directories.value,
            extensions=extensions.value,
            captured_at=captured_at,
            ttl_seconds=expires_at - captured_at,
        )

    def invalidate(self) -> None:
        """Drop both cached slots so the next lookup re-reads the environment."""

        self._cache.invalidate(PATH_CACHE_KEY)
        self._cache.invalidate(PATH_EXTENSION_CACHE_KEY)
