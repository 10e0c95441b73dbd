"""Parallel, priority-ordered directory scanning engine.

Responsibilities:
- Discover directories under one or more scan roots, fanning out one worker per
  top-level subdirectory.
- Rank the merged directory list with `LocationPrioritizer` (stable, so equal
  scores keep discovery order).
- Match files directory-by-directory on workers while yielding results lazily in
  ranked order, so single-match and first-N callers can stop early.

Notes:
- Directories that cannot be enumerated are skipped; they never abort a scan.
- Directory symlinks are only followed when `follow_symlinks` is set. A visited
  `(st_dev, st_ino)` set guards against cycles either way.
"""

from __future__ import annotations

from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
import os
import threading
from typing import Callable, Iterable, Iterator, Sequence, TypeVar

from loguru import logger

from ..detection.detector import ExecutableDetector
from ..detection.priority import LocationPrioritizer
from ..errors import SearchCancelledError
from ..models.datatypes import ResolvedExecutable, SearchOption


DEFAULT_MAX_WORKERS = 8

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")
_DirectoryKey = tuple[int, int]


@dataclass(frozen=True, slots=True)
class ScanRoot:
    """One root directory of a scan.

    Attributes:
        path: Directory to start from.
        same_device: Stay on the root's device (drive scans), skipping nested mounts.
    """

    path: str
    same_device: bool = False


@dataclass(frozen=True, slots=True)
class _WalkUnit:
    """One worker's share of directory discovery."""

    path: str
    depth: int
    device: int | None
    recurse: bool


def raise_if_cancelled(cancel: threading.Event | None) -> None:
    """Raise `SearchCancelledError` when the caller has requested cancellation."""

    if cancel is not None and cancel.is_set():
        raise SearchCancelledError("Search was cancelled.")


def _directory_key(path: str) -> _DirectoryKey | None:
    """Return the `(st_dev, st_ino)` identity of a directory, or `None` on failure."""

    try:
        stat_result = os.stat(path)
    except OSError:
        return None
    return stat_result.st_dev, stat_result.st_ino


class DirectoryScanner:
    """Shared recursive-descent engine behind every filesystem locator."""

    def __init__(
        self,
        detector: ExecutableDetector,
        prioritizer: LocationPrioritizer | None = None,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        max_depth: int | None = None,
        follow_symlinks: bool = False,
    ) -> None:
        if max_workers <= 0:
            raise ValueError("`max_workers` must be a positive integer.")
        if max_depth is not None and max_depth < 0:
            raise ValueError("`max_depth` must not be negative.")
        self.detector = detector
        self.prioritizer = prioritizer or LocationPrioritizer()
        self.max_workers = max_workers
        self.max_depth = max_depth
        self.follow_symlinks = follow_symlinks
        self._case_insensitive = detector.platform.startswith("win")

    def names_match(self, file_name: str, wanted: str) -> bool:
        """Compare file names with platform-appropriate case sensitivity."""

        if self._case_insensitive:
            return file_name.casefold() == wanted.casefold()
        return file_name == wanted

    def _ordered_map(
        self,
        func: Callable[[ItemT], ResultT],
        items: Iterable[ItemT],
        stop: threading.Event,
        thread_name_prefix: str,
    ) -> Iterator[ResultT]:
        """Run `func` over `items` on workers, yielding results in input order.

        At most a bounded window of tasks is in flight. Closing the iterator sets
        `stop` and cancels tasks that have not started yet.
        """

        window = self.max_workers * 4
        pending: deque[Future[ResultT]] = deque()
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix=thread_name_prefix
        ) as executor:
            try:
                for item in items:
                    pending.append(executor.submit(func, item))
                    if len(pending) >= window:
                        yield pending.popleft().result()
                while pending:
                    yield pending.popleft().result()
            finally:
                stop.set()
                for future in pending:
                    future.cancel()

    def _list_subdirectories(self, path: str, device: int | None) -> list[str]:
        """Return sorted immediate subdirectories of `path`, skipping unreadable ones."""

        subdirectories: list[str] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    try:
                        if not entry.is_dir(follow_symlinks=self.follow_symlinks):
                            continue
                        if device is not None and entry.stat(
                            follow_symlinks=self.follow_symlinks
                        ).st_dev != device:
                            continue
                    except OSError:
                        continue
                    subdirectories.append(entry.path)
        except OSError as exc:
            logger.debug("Skipping unreadable directory {}: {}", path, exc)
            return []
        subdirectories.sort()
        return subdirectories

    def _walk_unit(
        self,
        unit: _WalkUnit,
        stop: threading.Event,
        cancel: threading.Event | None,
    ) -> list[tuple[str, _DirectoryKey | None]]:
        """Discover directories below one unit in depth-first, name-sorted order."""

        discovered: list[tuple[str, _DirectoryKey | None]] = []
        visited: set[_DirectoryKey] = set()
        stack: list[tuple[str, int]] = [(unit.path, unit.depth)]
        while stack:
            if stop.is_set() or (cancel is not None and cancel.is_set()):
                return discovered
            path, depth = stack.pop()
            key = _directory_key(path)
            if key is not None:
                if key in visited:
                    continue
                visited.add(key)
            discovered.append((path, key))
            if not unit.recurse:
                continue
            if self.max_depth is not None and depth >= self.max_depth:
                continue
            children = self._list_subdirectories(path, unit.device)
            stack.extend((child, depth + 1) for child in reversed(children))
        return discovered

    def _plan_units(self, roots: Sequence[ScanRoot], option: SearchOption) -> list[_WalkUnit]:
        """Split roots into walk units: the root itself plus one per top-level child."""

        recurse = option is SearchOption.ALL_DIRECTORIES
        units: list[_WalkUnit] = []
        for root in roots:
            root_path = os.path.abspath(root.path)
            if not os.path.isdir(root_path):
                logger.debug("Skipping missing scan root {}", root_path)
                continue
            device = None
            if root.same_device:
                key = _directory_key(root_path)
                device = None if key is None else key[0]
            units.append(_WalkUnit(path=root_path, depth=0, device=device, recurse=False))
            if not recurse or self.max_depth == 0:
                continue
            units.extend(
                _WalkUnit(path=child, depth=1, device=device, recurse=True)
                for child in self._list_subdirectories(root_path, device)
            )
        return units

    def discover(
        self,
        roots: Sequence[ScanRoot],
        option: SearchOption,
        cancel: threading.Event | None = None,
    ) -> list[str]:
        """Return every directory in scope, ranked by priority then discovery order."""

        raise_if_cancelled(cancel)
        units = self._plan_units(roots, option)
        stop = threading.Event()
        walk = partial(self._walk_unit, stop=stop, cancel=cancel)

        merged: list[str] = []
        seen: set[_DirectoryKey] = set()
        branches = self._ordered_map(walk, units, stop, "whatexec-discover")
        try:
            for discovered in branches:
                raise_if_cancelled(cancel)
                for path, key in discovered:
                    if key is not None:
                        if key in seen:
                            continue
                        seen.add(key)
                    merged.append(path)
        finally:
            branches.close()
        raise_if_cancelled(cancel)
        return self.prioritizer.prioritize(merged)

    def _match_directory(
        self,
        directory: str,
        name: str | None,
        stop: threading.Event,
        cancel: threading.Event | None,
    ) -> list[ResolvedExecutable]:
        """Return executables directly inside `directory`, optionally name-filtered."""

        if stop.is_set() or (cancel is not None and cancel.is_set()):
            return []
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            logger.debug("Skipping unreadable directory {}: {}", directory, exc)
            return []

        matches: list[ResolvedExecutable] = []
        for entry in entries:
            if name is not None and not self.names_match(entry.name, name):
                continue
            try:
                if not entry.is_file():
                    continue
                matches.append(ResolvedExecutable.verify(entry.path, self.detector))
            except (OSError, ValueError):
                continue
        return matches

    def scan(
        self,
        roots: Sequence[ScanRoot],
        option: SearchOption,
        *,
        name: str | None = None,
        cancel: threading.Event | None = None,
        limit: int | None = None,
    ) -> Iterator[ResolvedExecutable]:
        """Yield matching executables across `roots` in ranked order.

        Args:
            roots: Directories or drive roots to scan.
            option: Whether to recurse below each root.
            name: Exact file name to match; `None` matches every executable.
            cancel: Cancellation signal checked between directory work units.
            limit: Stop after this many results.

        Raises:
            SearchCancelledError: If `cancel` is set before or during the scan.
        """

        if limit is not None and limit <= 0:
            return
        directories = self.discover(roots, option, cancel)
        stop = threading.Event()
        match = partial(self._match_directory, name=name, stop=stop, cancel=cancel)

        produced = 0
        batches = self._ordered_map(match, directories, stop, "whatexec-match")
        try:
            for batch in batches:
                raise_if_cancelled(cancel)
                for resolved in batch:
                    yield resolved
                    produced += 1
                    if limit is not None and produced >= limit:
                        return
        finally:
            batches.close()

