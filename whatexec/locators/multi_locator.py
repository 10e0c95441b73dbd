"""Any-executable listing for a directory, a drive, or the whole system."""

from __future__ import annotations

import os
import threading

from ..models.datatypes import DriveHandle, ResolvedExecutable, SearchOption
from .base import ScopedLocator


class MultiExecutableLocator(ScopedLocator):
    """List every executable in scope, ignoring file names."""

    def locate_all_in_directory(
        self,
        directory: str | os.PathLike[str],
        option: SearchOption = SearchOption.TOP_DIRECTORY_ONLY,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        """Return executables below `directory` in priority order."""

        return list(
            self._scanner.scan(
                self._directory_roots(directory), option, cancel=cancel, limit=limit
            )
        )

    def locate_all_in_drive(
        self,
        drive: DriveHandle | str | os.PathLike[str],
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        """Return executables on one drive in priority order."""

        return list(
            self._scanner.scan(self._drive_roots(drive), option, cancel=cancel, limit=limit)
        )

    def locate_all(
        self,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        """Return executables across every ready drive in priority order."""

        return list(
            self._scanner.scan(self._system_roots(cancel), option, cancel=cancel, limit=limit)
        )

    async def locate_all_in_directory_async(
        self,
        directory: str | os.PathLike[str],
        option: SearchOption = SearchOption.TOP_DIRECTORY_ONLY,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        return await self._offload(
            self.locate_all_in_directory, directory, option, cancel=cancel, limit=limit
        )
