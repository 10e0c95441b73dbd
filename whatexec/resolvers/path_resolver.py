"""`PATH`-based executable resolution.

Responsibilities:
- Resolve bare command names against `PATH` directories and extension rules.
- Check rooted or separator-containing queries as literal paths only.
- Offer a non-throwing primary API (`try_resolve`) with throwing sugar (`resolve`).

Resolution order for a bare name: each `PATH` directory in order; within one
directory, each extension candidate in order (extension varies fastest).
"""

from __future__ import annotations

import os
from typing import Iterable, Iterator

from loguru import logger

from ..detection.detector import ExecutableDetector
from ..errors import EnvironmentUnavailableError, ExecutableNotFoundError
from ..models.datatypes import CommandQuery, ResolvedExecutable
from .path_environment import PathEnvironment


def extension_variants(extension: str) -> tuple[str, ...]:
    """Return spellings to try for one extension (as listed, then lower-case)."""

    lowered = extension.lower()
    if lowered == extension:
        return (extension,)
    return (extension, lowered)


class PathExecutableResolver:
    """Resolve executables from the `PATH` environment variable."""

    def __init__(
        self,
        detector: ExecutableDetector,
        environment: PathEnvironment | None = None,
    ) -> None:
        """Initialize the resolver with a detector and a `PATH` reader."""

        self._detector = detector
        self._environment = environment or PathEnvironment(platform=detector.platform)

    @property
    def detector(self) -> ExecutableDetector:
        return self._detector

    def _path_directories(self) -> tuple[str, ...]:
        """Return `PATH` directories; subclasses may serve these from a cache."""

        return self._environment.directories()

    def _path_extensions(self) -> tuple[str, ...]:
        """Return extension candidates; subclasses may serve these from a cache."""

        return self._environment.extensions()

    def _verify(self, path: str) -> ResolvedExecutable | None:
        """Return a verified result for `path`, or `None` for any per-file failure."""

        try:
            if not os.path.isfile(path):
                return None
            return ResolvedExecutable.verify(path, self._detector)
        except (OSError, ValueError):
            return None

    def _iter_matches(
        self,
        query: CommandQuery,
        directories: tuple[str, ...],
        extensions: tuple[str, ...],
    ) -> Iterator[ResolvedExecutable]:
        """Yield every `PATH` match for `query` in resolution order."""

        candidate_extensions: tuple[str, ...] = ("",)
        if not query.has_extension:
            candidate_extensions = tuple(
                variant for extension in extensions for variant in extension_variants(extension)
            )

        for directory in directories:
            for extension in candidate_extensions:
                candidate = os.path.join(directory, f"{query.name}{extension}")
                resolved = self._verify(candidate)
                if resolved is not None:
                    yield resolved

    def _matches(self, query: CommandQuery, *, first_only: bool) -> list[ResolvedExecutable]:
        """Return matches for one query.

        Raises:
            EnvironmentUnavailableError: If `PATH` cannot be read.
        """

        if query.is_path_like:
            literal = self._verify(query.name)
            return [] if literal is None else [literal]

        directories = self._path_directories()
        extensions = self._path_extensions()
        matches = self._iter_matches(query, directories, extensions)
        if first_only:
            first = next(matches, None)
            return [] if first is None else [first]
        return list(matches)

    def try_resolve(self, name: str) -> ResolvedExecutable | None:
        """Return the first executable matching `name`, or `None` on a miss.

        Raises:
            InvalidCommandError: If `name` is empty.
        """

        query = CommandQuery(name)
        try:
            matches = self._matches(query, first_only=True)
        except EnvironmentUnavailableError as exc:
            logger.debug("PATH lookup skipped for {}: {}", name, exc)
            return None
        return matches[0] if matches else None

    def resolve(self, name: str) -> ResolvedExecutable:
        """Return the first executable matching `name`.

        Raises:
            InvalidCommandError: If `name` is empty.
            ExecutableNotFoundError: If nothing matches or `PATH` is unavailable.
        """

        query = CommandQuery(name)
        try:
            matches = self._matches(query, first_only=True)
        except EnvironmentUnavailableError as exc:
            raise ExecutableNotFoundError(
                f"Could not find `{name}`: {exc}", names=(name,)
            ) from exc
        if not matches:
            raise ExecutableNotFoundError(f"Could not find file: {name}", names=(name,))
        return matches[0]

    def try_resolve_many(
        self, names: Iterable[str]
    ) -> tuple[bool, list[ResolvedExecutable]]:
        """Return every `PATH` match across `names` and whether any was found.

        Results are the union of all matches in query order, not one per name.
        """

        queries = [CommandQuery(name) for name in names]
        found: list[ResolvedExecutable] = []
        seen: set[ResolvedExecutable] = set()
        for query in queries:
            try:
                matches = self._matches(query, first_only=False)
            except EnvironmentUnavailableError as exc:
                logger.debug("PATH lookup skipped for {}: {}", query.name, exc)
                continue
            for match in matches:
                if match not in seen:
                    seen.add(match)
                    found.append(match)
        return bool(found), found

    def resolve_many(self, names: Iterable[str]) -> list[ResolvedExecutable]:
        """Return every `PATH` match across `names`.

        Raises:
            ExecutableNotFoundError: If no name matched anything.
        """

        requested = tuple(names)
        found_any, found = self.try_resolve_many(requested)
        if not found_any:
            raise ExecutableNotFoundError(
                f"Could not find file(s): {','.join(requested)}", names=requested
            )
        return found
