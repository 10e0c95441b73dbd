"""Shared pytest fixtures for the full WhatExec test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

from loguru import logger
import pytest

from whatexec.detection.detector import PosixExecutableDetector


MakeFile = Callable[..., Path]


@pytest.fixture
def make_executable() -> MakeFile:
    """Create a shell script with execute permission bits set."""

    def _make(path: Path, *, mode: int = 0o755) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        path.chmod(mode)
        return path

    return _make


@pytest.fixture
def make_plain_file() -> MakeFile:
    """Create a regular, non-executable data file."""

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("data\n", encoding="utf-8")
        path.chmod(0o644)
        return path

    return _make


@pytest.fixture
def posix_detector() -> PosixExecutableDetector:
    """Provide a Linux detector independent of the host platform string."""

    return PosixExecutableDetector("linux")


@pytest.fixture(autouse=True)
def _reset_loguru_sinks() -> Iterator[None]:
    """Restore the library's silent logging state after CLI tests reconfigure loguru."""

    yield
    logger.remove()
    logger.disable("whatexec")
