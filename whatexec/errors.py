"""Domain exceptions for executable resolution and CLI diagnostics.

Core lookups raise the subclasses below. Only input-validation, platform-support,
and cancellation errors escape the resolvers and locators; per-candidate I/O
failures are absorbed where they happen.
"""

from __future__ import annotations


class WhatExecError(Exception):
    """Base class for every error raised by `whatexec`."""


class InvalidCommandError(WhatExecError, ValueError):
    """Raised when a command name is empty or otherwise unusable."""


class ExecutableNotFoundError(WhatExecError, FileNotFoundError):
    """Raised when no executable candidate matches a query."""

    def __init__(self, detail: str, *, names: tuple[str, ...] = ()) -> None:
        """Initialize a not-found error with the queried names."""

        super().__init__(detail)
        self.detail = detail
        self.names = names

    def __str__(self) -> str:
        return self.detail


class PlatformNotSupportedError(WhatExecError, NotImplementedError):
    """Raised when executable detection has no meaning on the running platform."""

    def __init__(self, platform: str) -> None:
        """Initialize with the rejected platform identifier."""

        super().__init__(f"Executable detection is not supported on platform `{platform}`.")
        self.platform = platform


class EnvironmentUnavailableError(WhatExecError, RuntimeError):
    """Raised when the `PATH` environment variable is missing or empty."""


class SearchCancelledError(WhatExecError):
    """Raised when a caller cancels a running search."""


class CommandStageError(WhatExecError, RuntimeError):
    """Raised when a specific CLI stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
