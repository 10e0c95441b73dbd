"""Filesystem locators for executables outside `PATH`.

All locators share `DirectoryScanner`: parallel discovery, priority ranking,
then lazily consumed per-directory matching.
"""

from .drives import DriveProvider, enumerate_ready_drives
from .executable_locator import ExecutableFileLocator
from .instances_locator import ExecutableFileInstancesLocator
from .multi_locator import MultiExecutableLocator
from .scanner import DirectoryScanner, ScanRoot

__all__ = [
    "DirectoryScanner",
    "DriveProvider",
    "ExecutableFileInstancesLocator",
    "ExecutableFileLocator",
    "MultiExecutableLocator",
    "ScanRoot",
    "enumerate_ready_drives",
]
