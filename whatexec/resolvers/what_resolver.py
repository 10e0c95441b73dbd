"""Two-tier executable resolution: `PATH` first, then a system-wide scan.

Responsibilities:
- Answer most queries cheaply from `PATH` (optionally cached).
- Fall back to the exhaustive all-drives single-match scan only on a miss.
"""

from __future__ import annotations

import asyncio
import threading

from loguru import logger

from ..errors import ExecutableNotFoundError
from ..locators.executable_locator import ExecutableFileLocator
from ..locators.scanner import raise_if_cancelled
from ..models.datatypes import CommandQuery, ResolvedExecutable, SearchOption
from .path_resolver import PathExecutableResolver


class WhatExecutableResolver:
    """Facade combining a `PATH` resolver with a filesystem locator."""

    def __init__(
        self,
        path_resolver: PathExecutableResolver,
        locator: ExecutableFileLocator,
        fallback_option: SearchOption = SearchOption.ALL_DIRECTORIES,
    ) -> None:
        self._path_resolver = path_resolver
        self._locator = locator
        self.fallback_option = fallback_option

    def try_resolve(
        self,
        name: str,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        """Return the executable for `name`, or `None` when no strategy finds it.

        Raises:
            InvalidCommandError: If `name` is empty.
            SearchCancelledError: If `cancel` is set during the fallback scan.
        """

        query = CommandQuery(name)
        raise_if_cancelled(cancel)
        resolved = self._path_resolver.try_resolve(query.name)
        if resolved is not None or query.is_path_like:
            return resolved

        logger.debug("`{}` not on PATH; scanning ready drives for `{}`.", name, query.file_name)
        return self._locator.locate(query.file_name, self.fallback_option, cancel)

    def resolve(
        self,
        name: str,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable:
        """Return the executable for `name`.

        Raises:
            ExecutableNotFoundError: If neither `PATH` nor the scan finds it.
        """

        resolved = self.try_resolve(name, cancel)
        if resolved is None:
            raise ExecutableNotFoundError(f"Could not find executable `{name}`.", names=(name,))
        return resolved

    async def try_resolve_async(
        self,
        name: str,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        """Run `try_resolve` on a worker thread."""

        CommandQuery(name)
        raise_if_cancelled(cancel)
        return await asyncio.to_thread(self.try_resolve, name, cancel)
