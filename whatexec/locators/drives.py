"""Mounted volume enumeration for system-wide scans."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Sequence

from loguru import logger
import psutil

from ..models.datatypes import DriveHandle


DriveProvider = Callable[[], Sequence[DriveHandle]]

# Kernel and virtual filesystems that never hold installed programs. Memory and
# layered filesystems such as tmpfs and overlay are scanned.
PSEUDO_FILESYSTEMS = frozenset(
    {
        "autofs",
        "binfmt_misc",
        "bpf",
        "cgroup",
        "cgroup2",
        "configfs",
        "debugfs",
        "devfs",
        "devpts",
        "devtmpfs",
        "efivarfs",
        "fusectl",
        "hugetlbfs",
        "mqueue",
        "nsfs",
        "proc",
        "pstore",
        "rpc_pipefs",
        "securityfs",
        "selinuxfs",
        "sysfs",
        "tracefs",
    }
)


def _root_drive() -> DriveHandle:
    return DriveHandle(mountpoint=Path(os.path.abspath(os.sep)))


def _is_pseudo(fstype: str) -> bool:
    return fstype.lower() in PSEUDO_FILESYSTEMS


def _is_ready(mountpoint: str, fstype: str) -> bool:
    """Return whether a partition is mounted and readable right now.

    Removable drives without media report an empty filesystem type.
    """

    if not mountpoint or not fstype or _is_pseudo(fstype):
        return False
    return os.path.isdir(mountpoint) and os.access(mountpoint, os.R_OK | os.X_OK)


def enumerate_ready_drives() -> list[DriveHandle]:
    """Return ready, de-duplicated volumes in OS report order.

    Every mount is considered, including memory and overlay filesystems, except
    the kernel pseudo filesystems in `PSEUDO_FILESYSTEMS`. When nothing usable
    is reported, the filesystem root is returned so a system scan still runs.
    """

    try:
        partitions = psutil.disk_partitions(all=True)
    except OSError as exc:
        logger.debug("Volume enumeration failed, scanning filesystem root only: {}", exc)
        return [_root_drive()]

    drives: list[DriveHandle] = []
    seen: set[str] = set()
    for partition in partitions:
        if partition.mountpoint in seen or not _is_ready(partition.mountpoint, partition.fstype):
            continue
        seen.add(partition.mountpoint)
        drives.append(
            DriveHandle(
                mountpoint=Path(partition.mountpoint),
                device=partition.device,
                fstype=partition.fstype,
            )
        )
    if not drives:
        logger.debug("No ready volumes reported, scanning filesystem root only")
        return [_root_drive()]
    return drives
