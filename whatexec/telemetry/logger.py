"""Structured run logging for CLI lookups.

Responsibilities:
- Emit concise, deterministic phase-level lines for each CLI stage.
- Route library `DEBUG` diagnostics to the same sink when verbose output is requested.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/", "\\"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic phase logs for CLI-observable lookup activity.

    Lines go to stderr by default so stdout carries only resolved paths.
    """

    def __init__(self, sink: TextIO | None = None, *, verbose: bool = False) -> None:
        """Configure a single plain-format sink and enable library diagnostics."""

        self._sink = sink or sys.stderr
        self.level = "DEBUG" if verbose else "INFO"
        logger.remove()
        logger.add(self._sink, format="{message}", level=self.level, colorize=False)
        logger.enable("whatexec")

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        line = f"[phase] level={level} stage={stage} event={event}{_format_context(context)}"
        logger.log(level, line)

    def log_stage_start(self, stage: str, **context: object) -> None:
        """Emit a stage-start runtime event."""

        self._emit("INFO", "start", stage, **context)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Emit a stage-complete runtime event."""

        self._emit("INFO", "complete", stage, **context)

    def log_lookup(self, stage: str, name: str, matches: int) -> None:
        """Emit one per-name result event with its match count."""

        event = "found" if matches else "missing"
        self._emit("INFO", event, stage, name=name, matches=matches)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without payload details."""

        self._emit("ERROR", "failure", stage, error_type=error_type)
