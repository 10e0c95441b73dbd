"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer

from whatexec.cli_rendering import echo_missing, echo_resolved, exit_with_command_error
from whatexec.errors import CommandStageError
from whatexec.models.datatypes import ResolvedExecutable


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = CommandStageError(
        stage="config",
        detail="Config file not found: `missing.yml`.",
        hint="Provide an existing path via `--config <path.yaml>`.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("find", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "find failed at stage `config`" in captured.err
    assert "Hint: Provide an existing path via `--config <path.yaml>`." in captured.err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("locate", RuntimeError("unexpected scanner error"))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "locate failed: unexpected scanner error" in captured.err


def test_echo_resolved_prints_paths_up_to_limit(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Paths go to stdout one per line, capped by the per-name limit."""

    executables = [
        ResolvedExecutable(path=Path("/usr/bin/git")),
        ResolvedExecutable(path=Path("/opt/git/bin/git")),
    ]

    printed = echo_resolved(executables, limit=1)

    captured = capsys.readouterr()
    assert printed == 1
    assert captured.out.splitlines() == [str(Path("/usr/bin/git"))]


def test_echo_missing_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    echo_missing("nope")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "nope: not found" in captured.err
