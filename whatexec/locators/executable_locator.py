"""Single-match executable location across directories, drives, and the system."""

from __future__ import annotations

import os
import threading

from ..models.datatypes import CommandQuery, DriveHandle, ResolvedExecutable, SearchOption
from .base import ScopedLocator
from .scanner import ScanRoot


class ExecutableFileLocator(ScopedLocator):
    """Find the highest-priority executable with an exact file name.

    Scanning stops as soon as the winning match is known; pending directory
    work is cancelled.
    """

    def _first(
        self,
        roots: list[ScanRoot],
        name: str,
        option: SearchOption,
        cancel: threading.Event | None,
    ) -> ResolvedExecutable | None:
        query = CommandQuery(name)
        if query.is_path_like:
            return self._literal(query)
        matches = self._scanner.scan(roots, option, name=query.name, cancel=cancel, limit=1)
        try:
            return next(matches, None)
        finally:
            matches.close()

    def locate_in_directory(
        self,
        directory: str | os.PathLike[str],
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        """Return the first match below `directory`, or `None`."""

        return self._first(self._directory_roots(directory), executable_name, option, cancel)

    def locate_in_drive(
        self,
        drive: DriveHandle | str | os.PathLike[str],
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        """Return the first match on one drive, or `None`."""

        return self._first(self._drive_roots(drive), executable_name, option, cancel)

    def locate(
        self,
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        """Return the first match across every ready drive, or `None`."""

        query = CommandQuery(executable_name)
        if query.is_path_like:
            return self._literal(query)
        return self._first(self._system_roots(cancel), query.name, option, cancel)

    async def locate_in_directory_async(
        self,
        directory: str | os.PathLike[str],
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        return await self._offload(
            self.locate_in_directory, directory, executable_name, option, cancel=cancel
        )

    async def locate_in_drive_async(
        self,
        drive: DriveHandle | str | os.PathLike[str],
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        return await self._offload(
            self.locate_in_drive, drive, executable_name, option, cancel=cancel
        )

    async def locate_async(
        self,
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
    ) -> ResolvedExecutable | None:
        return await self._offload(self.locate, executable_name, option, cancel=cancel)
