"""`PATH` and executable-extension environment readers.

Responsibilities:
- Split the `PATH` variable into ordered, de-duplicated directory entries.
- Compute the platform extension list (`PATHEXT` on Windows, a fixed list elsewhere).
"""

from __future__ import annotations

import os
import sys
from typing import Mapping

from ..errors import EnvironmentUnavailableError


DEFAULT_WINDOWS_PATHEXT = ".COM;.EXE;.BAT;.CMD"
POSIX_PATH_EXTENSIONS: tuple[str, ...] = ("", ".sh", ".AppImage")


def _is_windows(platform: str) -> bool:
    return platform.startswith("win")


class PathEnvironment:
    """Reader for `PATH` state from an environment mapping.

    Attributes:
        env: Environment mapping; defaults to the live `os.environ`.
        platform: Platform identifier used for separator and extension rules.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        platform: str | None = None,
    ) -> None:
        self.env: Mapping[str, str] = os.environ if env is None else env
        self.platform = sys.platform if platform is None else platform

    def _lookup(self, key: str) -> str | None:
        """Read an environment key, case-insensitively on Windows."""

        value = self.env.get(key)
        if value is not None or not _is_windows(self.platform):
            return value
        for candidate_key, candidate_value in self.env.items():
            if candidate_key.upper() == key:
                return candidate_value
        return None

    def directories(self) -> tuple[str, ...]:
        """Return ordered `PATH` directories, dropping blanks and duplicates.

        Raises:
            EnvironmentUnavailableError: If `PATH` is unset or has no entries.
        """

        raw = self._lookup("PATH")
        if raw is None:
            raise EnvironmentUnavailableError("PATH variable could not be found.")

        separator = ";" if _is_windows(self.platform) else ":"
        seen: set[str] = set()
        entries: list[str] = []
        for entry in raw.split(separator):
            cleaned = entry.strip().strip('"') if _is_windows(self.platform) else entry
            if not cleaned:
                continue
            expanded = os.path.expanduser(cleaned)
            identity = expanded.casefold() if _is_windows(self.platform) else expanded
            if identity in seen:
                continue
            seen.add(identity)
            entries.append(expanded)

        if not entries:
            raise EnvironmentUnavailableError("PATH variable is empty.")
        return tuple(entries)

    def extensions(self) -> tuple[str, ...]:
        """Return ordered extension candidates, starting with the empty extension."""

        if not _is_windows(self.platform):
            return POSIX_PATH_EXTENSIONS

        raw = self._lookup("PATHEXT") or DEFAULT_WINDOWS_PATHEXT
        extensions: list[str] = [""]
        for token in raw.split(";"):
            extension = token.strip()
            if not extension:
                continue
            if not extension.startswith("."):
                extension = f".{extension}"
            if extension not in extensions:
                extensions.append(extension)
        return tuple(extensions)
