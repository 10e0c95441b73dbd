"""Integration-test fixtures that isolate CLI runs from the host machine."""

from __future__ import annotations

from collections import namedtuple
from pathlib import Path
from typing import Callable

import pytest

from whatexec.locators import drives

_Partition = namedtuple("_Partition", ["device", "mountpoint", "fstype", "opts"])

_WHATEXEC_ENV_KEYS = (
    "WHATEXEC_USE_CACHING",
    "WHATEXEC_CACHE_TTL_SECONDS",
    "WHATEXEC_EXTENSION_CACHE_TTL_SECONDS",
    "WHATEXEC_FALLBACK_SEARCH",
    "WHATEXEC_MAX_WORKERS",
    "WHATEXEC_MAX_DEPTH",
    "WHATEXEC_FOLLOW_SYMLINKS",
)


@pytest.fixture
def path_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point `PATH` at a single empty directory under `tmp_path`."""

    directory = tmp_path / "path-bin"
    directory.mkdir()
    monkeypatch.setenv("PATH", str(directory))
    return directory


@pytest.fixture
def volume(tmp_path: Path) -> Path:
    """Provide a directory that stands in for a mounted volume root."""

    root = tmp_path / "volume"
    root.mkdir(exist_ok=True)
    return root


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Callable[..., None]:
    """Clear `WHATEXEC_*` settings and expose only a fake volume to system scans.

    The volume always exists so system scans never fall back to the real root.
    """

    for key in _WHATEXEC_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    def _partitions(all: bool = False) -> list[_Partition]:
        root = tmp_path / "volume"
        root.mkdir(exist_ok=True)
        return [_Partition("/dev/fake0", str(root), "ext4", "rw")]

    monkeypatch.setattr(drives.psutil, "disk_partitions", _partitions)
    return _partitions
