"""CLI output and error rendering helpers.

Resolved paths go to stdout one per line. Misses and command diagnostics go to
stderr so the output stays pipe-friendly.
"""

from __future__ import annotations

from typing import Iterable, NoReturn

import typer

from .errors import CommandStageError
from .models.datatypes import ResolvedExecutable


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_resolved(executables: Iterable[ResolvedExecutable], limit: int | None = None) -> int:
    """Print executable paths, honoring an optional per-name cap.

    Returns:
        Number of printed paths.
    """

    printed = 0
    for executable in executables:
        if limit is not None and printed >= limit:
            break
        typer.echo(str(executable))
        printed += 1
    return printed


def echo_missing(name: str) -> None:
    """Report a name that no strategy could resolve."""

    typer.secho(f"{name}: not found", fg=typer.colors.YELLOW, err=True)
