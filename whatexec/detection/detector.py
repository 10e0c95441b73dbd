"""Platform-aware executable file detection.

Responsibilities:
- Answer "is this file executable" from filesystem metadata only.
- Select one platform variant at startup instead of branching per call.

Key types:
- `ExecutableDetector`: protocol every detector satisfies.
- `PosixExecutableDetector`: permission bits, with an extension allow-list fallback.
- `WindowsExecutableDetector`: execute access combined with an extension allow-list.
- `create_executable_detector`: factory keyed by `sys.platform`.
"""

from __future__ import annotations

import os
from pathlib import Path
import stat
import sys
from typing import Protocol

from ..errors import ExecutableNotFoundError, PlatformNotSupportedError


UNSUPPORTED_PLATFORMS = frozenset({"emscripten", "wasi", "ios", "android"})

_UNIX_BINARY_EXTENSIONS = frozenset(
    {".so", ".o", ".out", ".bin", ".elf", ".mod", ".axf", ".ko", ".prx", ".puff", ".jar", ".sh"}
)

WINDOWS_EXECUTABLE_EXTENSIONS = frozenset(
    {".exe", ".msi", ".appx", ".com", ".bat", ".cmd", ".jar"}
)
LINUX_EXECUTABLE_EXTENSIONS = _UNIX_BINARY_EXTENSIONS | {".appimage", ".deb", ".rpm"}
MACOS_EXECUTABLE_EXTENSIONS = _UNIX_BINARY_EXTENSIONS | {".kext", ".pkg", ".app"}
FREEBSD_EXECUTABLE_EXTENSIONS = _UNIX_BINARY_EXTENSIONS | {".appimage"}

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _platform_family(platform: str) -> str:
    """Collapse a `sys.platform` value into the family used for rule selection."""

    if platform in UNSUPPORTED_PLATFORMS:
        return platform
    if platform.startswith("win"):
        return "windows"
    if platform == "darwin":
        return "macos"
    if platform.startswith("freebsd"):
        return "freebsd"
    return "linux"


class ExecutableDetector(Protocol):
    """Protocol for platform-specific executable predicates."""

    platform: str
    extensions: frozenset[str]

    def is_executable(self, path: str | os.PathLike[str]) -> bool:
        """Return whether the file can be run as a program on this platform."""

    def has_executable_permissions(self, path: str | os.PathLike[str]) -> bool:
        """Return whether the file grants execute permission."""

    def has_executable_extension(self, path: str | os.PathLike[str]) -> bool:
        """Return whether the file suffix is on this platform's allow-list."""


class _AllowListDetector:
    """Shared platform binding and extension check for the built-in detectors."""

    extensions: frozenset[str] = frozenset()

    def __init__(self, platform: str | None = None) -> None:
        """Bind the detector to a platform, failing fast when unsupported."""

        resolved_platform = sys.platform if platform is None else platform
        if resolved_platform in UNSUPPORTED_PLATFORMS:
            raise PlatformNotSupportedError(resolved_platform)
        self.platform = resolved_platform

    def has_executable_extension(self, path: str | os.PathLike[str]) -> bool:
        """Return whether the file suffix is on this platform's allow-list."""

        file_path = self._require_file(path)
        return file_path.suffix.lower() in self.extensions

    @staticmethod
    def _require_file(path: str | os.PathLike[str]) -> Path:
        """Return the path as `Path`, raising when no file exists there."""

        file_path = Path(path)
        if not file_path.is_file():
            raise ExecutableNotFoundError(f"File not found: `{file_path}`.", names=(str(path),))
        return file_path


class PosixExecutableDetector(_AllowListDetector):
    """Detector for Linux, macOS, FreeBSD, and other POSIX-like systems.

    Permission bits are the primary signal. The extension allow-list is a
    fallback for filesystems (FAT, some network mounts) that do not carry
    execute bits.
    """

    def __init__(self, platform: str | None = None) -> None:
        super().__init__(platform)
        family = _platform_family(self.platform)
        if family == "macos":
            self.extensions = MACOS_EXECUTABLE_EXTENSIONS
        elif family == "freebsd":
            self.extensions = FREEBSD_EXECUTABLE_EXTENSIONS
        else:
            self.extensions = LINUX_EXECUTABLE_EXTENSIONS

    def is_executable(self, path: str | os.PathLike[str]) -> bool:
        return self.has_executable_permissions(path) or self.has_executable_extension(path)

    def has_executable_permissions(self, path: str | os.PathLike[str]) -> bool:
        file_path = self._require_file(path)
        return bool(file_path.stat().st_mode & _EXECUTE_BITS)


class WindowsExecutableDetector(_AllowListDetector):
    """Detector for Windows, requiring both execute access and a known extension."""

    extensions = WINDOWS_EXECUTABLE_EXTENSIONS

    def is_executable(self, path: str | os.PathLike[str]) -> bool:
        return self.has_executable_permissions(path) and self.has_executable_extension(path)

    def has_executable_permissions(self, path: str | os.PathLike[str]) -> bool:
        file_path = self._require_file(path)
        return os.access(file_path, os.X_OK)


def create_executable_detector(platform: str | None = None) -> ExecutableDetector:
    """Create the detector variant for `platform` (defaults to `sys.platform`).

    Raises:
        PlatformNotSupportedError: For browser and mobile sandbox platforms.
    """

    resolved_platform = sys.platform if platform is None else platform
    if _platform_family(resolved_platform) == "windows":
        return WindowsExecutableDetector(resolved_platform)
    return PosixExecutableDetector(resolved_platform)
