"""Directory priority ranking for filesystem scans.

Responsibilities:
- Score directories by membership in well-known system locations.
- Provide a stable sort so equal scores keep discovery order.

Notes:
- Scores are heuristics. Callers may prepend their own categories (see
  `WhatExecConfig.priority_locations`).
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys
from typing import Iterable, Mapping, Sequence, TypeVar


UNRANKED_SCORE = 10

PathT = TypeVar("PathT", str, Path)


@dataclass(frozen=True, slots=True)
class LocationCategory:
    """One well-known location class.

    Attributes:
        name: Diagnostic label (`programs`, `system`, ...).
        score: Sort key for directories under any of `prefixes`; lower sorts first.
        prefixes: Absolute directory prefixes belonging to the category.
    """

    name: str
    score: int
    prefixes: tuple[str, ...]


def _join(base: str | None, *parts: str) -> str | None:
    """Join path parts onto an optional base directory."""

    if not base:
        return None
    return os.path.join(base, *parts)


def _category(name: str, score: int, *prefixes: str | None) -> LocationCategory:
    """Build a category, dropping prefixes that could not be resolved."""

    return LocationCategory(
        name=name,
        score=score,
        prefixes=tuple(prefix for prefix in prefixes if prefix),
    )


def _posix_categories(home: str, platform: str) -> list[LocationCategory]:
    """Return default categories for POSIX-like platforms."""

    is_macos = platform == "darwin"
    return [
        _category(
            "programs",
            0,
            "/usr/local/bin",
            "/usr/bin",
            "/bin",
            "/opt",
            "/snap/bin",
            _join(home, ".local", "bin"),
            "/Applications" if is_macos else None,
            _join(home, "Applications") if is_macos else None,
        ),
        _category(
            "system",
            1,
            "/usr/sbin",
            "/sbin",
            "/usr/libexec",
            "/usr/lib",
            "/lib",
            "/System" if is_macos else None,
        ),
        _category(
            "application-data",
            2,
            _join(home, ".local", "share"),
            "/usr/share",
            "/var/lib",
            "/Library" if is_macos else None,
            _join(home, "Library", "Application Support") if is_macos else None,
        ),
        _category("admin-tools", 3, "/usr/local/sbin", "/etc"),
        _category("desktop", 4, _join(home, "Desktop")),
    ]


def _windows_categories(home: str, env: Mapping[str, str]) -> list[LocationCategory]:
    """Return default categories for Windows, resolved from environment folders."""

    app_data = env.get("APPDATA")
    program_data = env.get("PROGRAMDATA")
    system_root = env.get("SYSTEMROOT") or env.get("WINDIR")
    start_menu = ("Microsoft", "Windows", "Start Menu", "Programs")
    return [
        _category(
            "programs",
            0,
            env.get("PROGRAMFILES"),
            env.get("PROGRAMFILES(X86)"),
            env.get("PROGRAMW6432"),
            _join(app_data, *start_menu),
            _join(program_data, *start_menu),
        ),
        _category("windows", 1, system_root),
        _category(
            "admin-tools",
            3,
            _join(app_data, *start_menu, "Administrative Tools"),
            _join(program_data, *start_menu, "Administrative Tools"),
        ),
        _category(
            "application-data",
            2,
            app_data,
            env.get("LOCALAPPDATA"),
            program_data,
            _join(system_root, "System32"),
        ),
        _category("desktop", 4, _join(home, "Desktop")),
    ]


def default_location_categories(
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
    home: str | None = None,
) -> list[LocationCategory]:
    """Return the ordered default categories for a platform."""

    resolved_platform = sys.platform if platform is None else platform
    env_map: Mapping[str, str] = os.environ if env is None else env
    resolved_home = home if home is not None else os.path.expanduser("~")
    if resolved_platform.startswith("win"):
        upper_env = {key.upper(): value for key, value in env_map.items()}
        return _windows_categories(resolved_home, upper_env)
    return _posix_categories(resolved_home, resolved_platform)


def _normalize(path: str) -> str:
    """Case-fold and normalize a path for prefix comparison."""

    return os.path.normcase(os.path.abspath(path)).casefold()


def _is_under(path: str, prefix: str) -> bool:
    """Return whether normalized `path` equals or sits under normalized `prefix`."""

    if path == prefix:
        return True
    if not prefix.endswith(os.sep):
        prefix = prefix + os.sep
    return path.startswith(prefix)


class LocationPrioritizer:
    """Pure directory scorer used as a sort key during filesystem scans."""

    def __init__(
        self,
        categories: Sequence[LocationCategory] | None = None,
        *,
        overrides: Mapping[str, int] | None = None,
    ) -> None:
        """Initialize with ordered categories and optional `path -> score` overrides."""

        base = list(default_location_categories() if categories is None else categories)
        override_categories = [
            _category("configured", score, prefix)
            for prefix, score in (overrides or {}).items()
        ]
        self._rules: tuple[tuple[int, tuple[str, ...]], ...] = tuple(
            (category.score, tuple(_normalize(prefix) for prefix in category.prefixes))
            for category in [*override_categories, *base]
        )

    def score(self, directory: str | os.PathLike[str]) -> int:
        """Return the first matching category score, or `UNRANKED_SCORE`."""

        normalized = _normalize(os.fspath(directory))
        for score, prefixes in self._rules:
            if any(_is_under(normalized, prefix) for prefix in prefixes):
                return score
        return UNRANKED_SCORE

    def prioritize(self, directories: Iterable[PathT]) -> list[PathT]:
        """Return directories stably sorted by score."""

        return sorted(directories, key=lambda directory: self.score(directory))
