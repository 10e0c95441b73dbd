"""All-instances and first-N executable location."""

from __future__ import annotations

import os
import threading

from ..models.datatypes import CommandQuery, DriveHandle, ResolvedExecutable, SearchOption
from .base import ScopedLocator
from .scanner import ScanRoot


class ExecutableFileInstancesLocator(ScopedLocator):
    """Find every executable with an exact file name, in priority order.

    Without a `limit` the scan runs to completion unless cancelled. With a
    `limit` it stops after that many matches.
    """

    def _instances(
        self,
        roots: list[ScanRoot],
        name: str,
        option: SearchOption,
        cancel: threading.Event | None,
        limit: int | None,
    ) -> list[ResolvedExecutable]:
        query = CommandQuery(name)
        if query.is_path_like:
            literal = self._literal(query)
            return [] if literal is None else [literal]
        return list(
            self._scanner.scan(roots, option, name=query.name, cancel=cancel, limit=limit)
        )

    def locate_instances_in_directory(
        self,
        directory: str | os.PathLike[str],
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        """Return matches below `directory`."""

        return self._instances(
            self._directory_roots(directory), executable_name, option, cancel, limit
        )

    def locate_instances_in_drive(
        self,
        drive: DriveHandle | str | os.PathLike[str],
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        """Return matches on one drive."""

        return self._instances(self._drive_roots(drive), executable_name, option, cancel, limit)

    def locate_instances(
        self,
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        """Return matches across every ready drive, merged and ranked together."""

        query = CommandQuery(executable_name)
        if query.is_path_like:
            return self._instances([], query.name, option, cancel, limit)
        return self._instances(self._system_roots(cancel), query.name, option, cancel, limit)

    async def locate_instances_async(
        self,
        executable_name: str,
        option: SearchOption = SearchOption.ALL_DIRECTORIES,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> list[ResolvedExecutable]:
        return await self._offload(
            self.locate_instances, executable_name, option, cancel=cancel, limit=limit
        )
