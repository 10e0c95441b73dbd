"""Scope handling shared by the filesystem locators."""

from __future__ import annotations

import asyncio
import os
import threading
from typing import Callable, TypeVar

from ..detection.detector import ExecutableDetector
from ..models.datatypes import CommandQuery, DriveHandle, ResolvedExecutable
from .drives import DriveProvider, enumerate_ready_drives
from .scanner import DirectoryScanner, ScanRoot, raise_if_cancelled


ResultT = TypeVar("ResultT")


class ScopedLocator:
    """Base class turning directory, drive, and system scopes into scan roots."""

    def __init__(
        self,
        detector: ExecutableDetector,
        scanner: DirectoryScanner | None = None,
        drive_provider: DriveProvider = enumerate_ready_drives,
    ) -> None:
        self._detector = detector
        self._scanner = scanner or DirectoryScanner(detector)
        self._drive_provider = drive_provider

    @staticmethod
    def _directory_roots(directory: str | os.PathLike[str]) -> list[ScanRoot]:
        return [ScanRoot(path=os.fspath(directory))]

    @staticmethod
    def _drive_roots(drive: DriveHandle | str | os.PathLike[str]) -> list[ScanRoot]:
        mountpoint = drive.mountpoint if isinstance(drive, DriveHandle) else drive
        return [ScanRoot(path=os.fspath(mountpoint), same_device=True)]

    def _system_roots(self, cancel: threading.Event | None) -> list[ScanRoot]:
        raise_if_cancelled(cancel)
        return [
            ScanRoot(path=os.fspath(drive.mountpoint), same_device=True)
            for drive in self._drive_provider()
        ]

    def _literal(self, query: CommandQuery) -> ResolvedExecutable | None:
        """Check a path-like query as a literal file path."""

        try:
            return ResolvedExecutable.verify(query.name, self._detector)
        except (OSError, ValueError):
            return None

    @staticmethod
    async def _offload(
        func: Callable[..., ResultT],
        *args: object,
        cancel: threading.Event | None = None,
        **kwargs: object,
    ) -> ResultT:
        """Run blocking scan work on a worker thread after a cancellation check."""

        raise_if_cancelled(cancel)
        return await asyncio.to_thread(func, *args, cancel=cancel, **kwargs)
