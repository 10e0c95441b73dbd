"""Executable detection and directory ranking.

This package holds the two stateless leaf components used by every resolver
and locator.
"""

from .detector import (
    ExecutableDetector,
    PosixExecutableDetector,
    WindowsExecutableDetector,
    create_executable_detector,
)
from .priority import UNRANKED_SCORE, LocationCategory, LocationPrioritizer

__all__ = [
    "ExecutableDetector",
    "LocationCategory",
    "LocationPrioritizer",
    "PosixExecutableDetector",
    "UNRANKED_SCORE",
    "WindowsExecutableDetector",
    "create_executable_detector",
]
