"""Shared typed data models for WhatExec.

This package contains the immutable values exchanged between detectors,
resolvers, locators, and the CLI.
"""

from .datatypes import (
    CommandQuery,
    DriveHandle,
    PathEnvironmentSnapshot,
    ResolvedExecutable,
    SearchOption,
)

__all__ = [
    "CommandQuery",
    "DriveHandle",
    "PathEnvironmentSnapshot",
    "ResolvedExecutable",
    "SearchOption",
]
