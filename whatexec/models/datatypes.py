"""Core datatypes shared across WhatExec modules.

Responsibilities:
- Represent immutable query and result values exchanged between resolvers,
  locators, and the CLI.
- Keep construction-time verification of resolved executables in one place.

Key types:
- `CommandQuery`, `ResolvedExecutable`, `PathEnvironmentSnapshot`,
  `DriveHandle`, and `SearchOption`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ExecutableNotFoundError, InvalidCommandError

if TYPE_CHECKING:
    from ..detection.detector import ExecutableDetector


_SEPARATORS = frozenset(sep for sep in (os.sep, os.altsep) if sep)


class SearchOption(Enum):
    """Whether a directory scan recurses into subdirectories."""

    TOP_DIRECTORY_ONLY = "top"
    ALL_DIRECTORIES = "all"

    @classmethod
    def parse(cls, value: str) -> SearchOption:
        """Parse a `top`/`all` token into a search option."""

        token = value.strip().lower()
        for option in cls:
            if option.value == token:
                return option
        raise ValueError(f"Unknown search option `{value}`; expected `top` or `all`.")


@dataclass(frozen=True, slots=True)
class CommandQuery:
    """A command name as typed by a user.

    Attributes:
        name: Bare name (`git`), name with extension (`git.exe`), or a rooted or
            relative path (`./run.sh`, `/usr/bin/git`).
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidCommandError("Command name must be a non-empty string.")

    @property
    def is_path_like(self) -> bool:
        """Return whether the query is rooted or contains a directory separator."""

        if os.path.isabs(self.name):
            return True
        return any(character in _SEPARATORS for character in self.name)

    @property
    def file_name(self) -> str:
        """Return the final path component of the query."""

        stripped = self.name.rstrip("".join(_SEPARATORS))
        return os.path.basename(stripped) or self.name

    @property
    def has_extension(self) -> bool:
        """Return whether the final path component carries a file extension."""

        return bool(os.path.splitext(self.file_name)[1])


@dataclass(frozen=True, slots=True)
class ResolvedExecutable:
    """An executable file verified at construction time.

    Attributes:
        path: Absolute path to the executable file.
    """

    path: Path

    @classmethod
    def verify(
        cls,
        path: str | os.PathLike[str],
        detector: ExecutableDetector,
    ) -> ResolvedExecutable:
        """Build a result after checking existence and executability.

        Raises:
            ExecutableNotFoundError: If the file is missing or not executable.
        """

        absolute = Path(os.path.abspath(os.fspath(path)))
        if not absolute.is_file():
            raise ExecutableNotFoundError(f"File not found: `{absolute}`.", names=(str(path),))
        if not detector.is_executable(absolute):
            raise ExecutableNotFoundError(
                f"File is not executable: `{absolute}`.", names=(str(path),)
            )
        return cls(path=absolute)

    @property
    def name(self) -> str:
        """Return the file name of the executable."""

        return self.path.name

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class PathEnvironmentSnapshot:
    """Parsed `PATH` state captured at one moment.

    Attributes:
        directories: Ordered `PATH` directory entries.
        extensions: Ordered extension candidates, including `""` where applicable.
        captured_at: Monotonic clock reading when the snapshot was taken.
        ttl_seconds: Lifetime after which the snapshot must be rebuilt.
    """

    directories: tuple[str, ...]
    extensions: tuple[str, ...]
    captured_at: float = 0.0
    ttl_seconds: float | None = None

    def is_expired(self, now: float) -> bool:
        """Return whether the snapshot has outlived its TTL at `now`."""

        if self.ttl_seconds is None:
            return False
        return now >= self.captured_at + self.ttl_seconds


@dataclass(frozen=True, slots=True)
class DriveHandle:
    """A mounted, ready volume that can be used as a scan root.

    Attributes:
        mountpoint: Root directory of the volume.
        device: OS device identifier, when known.
        fstype: Filesystem type, when known.
    """

    mountpoint: Path
    device: str = ""
    fstype: str = ""
