"""Factory helpers that assemble resolvers and locators from a `WhatExecConfig`.

Responsibilities:
- Select the platform detector once and share it across every component.
- Keep CLI commands independent from concrete resolver and scanner construction.
"""

from __future__ import annotations

from typing import Mapping

from .config import WhatExecConfig
from .detection.detector import ExecutableDetector, create_executable_detector
from .detection.priority import LocationPrioritizer
from .locators.drives import DriveProvider, enumerate_ready_drives
from .locators.executable_locator import ExecutableFileLocator
from .locators.instances_locator import ExecutableFileInstancesLocator
from .locators.multi_locator import MultiExecutableLocator
from .locators.scanner import DirectoryScanner
from .resolvers.cached_resolver import CachedPathExecutableResolver
from .resolvers.path_environment import PathEnvironment
from .resolvers.path_resolver import PathExecutableResolver
from .resolvers.what_resolver import WhatExecutableResolver


class ResolverFactory:
    """Build the resolver and locator family for one configuration.

    Every component created by one factory shares the same detector, scanner,
    and drive provider.
    """

    def __init__(
        self,
        config: WhatExecConfig | None = None,
        *,
        detector: ExecutableDetector | None = None,
        env: Mapping[str, str] | None = None,
        drive_provider: DriveProvider = enumerate_ready_drives,
    ) -> None:
        self.config = config or WhatExecConfig()
        self.config.validate()
        self.detector = detector or create_executable_detector()
        self._env = env
        self._drive_provider = drive_provider
        self.scanner = DirectoryScanner(
            self.detector,
            LocationPrioritizer(overrides=self.config.priority_locations),
            max_workers=self.config.max_workers,
            max_depth=self.config.max_depth,
            follow_symlinks=self.config.follow_symlinks,
        )

    def create_path_resolver(self) -> PathExecutableResolver:
        """Create the plain or TTL-cached `PATH` resolver, as configured."""

        environment = PathEnvironment(env=self._env, platform=self.detector.platform)
        if self.config.use_caching:
            return CachedPathExecutableResolver(
                self.detector,
                environment=environment,
                path_cache_ttl_seconds=self.config.path_cache_ttl_seconds,
                extension_cache_ttl_seconds=self.config.extension_cache_ttl_seconds,
            )
        return PathExecutableResolver(self.detector, environment=environment)

    def create_locator(self) -> ExecutableFileLocator:
        return ExecutableFileLocator(self.detector, self.scanner, self._drive_provider)

    def create_instances_locator(self) -> ExecutableFileInstancesLocator:
        return ExecutableFileInstancesLocator(self.detector, self.scanner, self._drive_provider)

    def create_multi_locator(self) -> MultiExecutableLocator:
        return MultiExecutableLocator(self.detector, self.scanner, self._drive_provider)

    def create_resolver(self) -> WhatExecutableResolver:
        """Create the `PATH`-then-scan facade."""

        return WhatExecutableResolver(
            self.create_path_resolver(),
            self.create_locator(),
            fallback_option=self.config.fallback_search,
        )
