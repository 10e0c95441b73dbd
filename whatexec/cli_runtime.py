"""CLI runtime resolution helpers.

This module isolates config loading, CLI override layering, and interactive
name prompts from the command wiring layer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

import typer

from .config import ConfigLoader, WhatExecConfig
from .errors import CommandStageError
from .parsing import normalize_optional_string


def load_command_config(
    config_file: Path | None,
    env: Mapping[str, str] | None = None,
) -> WhatExecConfig:
    """Load environment and optional YAML settings, mapping failures to stage errors."""

    try:
        return ConfigLoader.load(config_file, env=env)
    except FileNotFoundError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Config file not found: `{config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        source = f"config file `{config_file}`" if config_file is not None else "environment"
        raise CommandStageError(
            stage="config",
            detail=f"Invalid {source}: {exc}",
            hint="Fix config keys/values or `WHATEXEC_*` variables and rerun.",
        ) from exc
    except OSError as exc:
        raise CommandStageError(
            stage="config",
            detail=f"Failed to read config file `{config_file}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def apply_cli_overrides(
    config: WhatExecConfig,
    use_caching: bool | None,
    cache_lifetime_minutes: float | None,
) -> WhatExecConfig:
    """Layer explicit CLI flags over the loaded config.

    `--cache-lifetime` is given in minutes and applies to both `PATH` caches.
    """

    ttl_seconds = None if cache_lifetime_minutes is None else cache_lifetime_minutes * 60.0
    try:
        return config.with_overrides(
            use_caching=use_caching,
            path_cache_ttl_seconds=ttl_seconds,
            extension_cache_ttl_seconds=ttl_seconds,
        )
    except ValueError as exc:
        raise CommandStageError(
            stage="config",
            detail=str(exc),
            hint="Pass a positive `--cache-lifetime` in minutes.",
        ) from exc


def prompt_for_names(prompt: Callable[..., str] = typer.prompt) -> list[str]:
    """Prompt until at least one non-blank, whitespace-separated name is entered."""

    while True:
        raw = normalize_optional_string(
            prompt(
                "Commands or executable files to find (space separated)",
                default="",
                show_default=False,
            )
        )
        if raw is not None:
            return raw.split()
        typer.secho("Enter at least one name.", fg=typer.colors.YELLOW, err=True)


def resolve_command_names(
    names: list[str] | None,
    interactive: bool,
    command_name: str,
    prompt: Callable[..., str] = typer.prompt,
) -> list[str]:
    """Return the names to look up, prompting only when allowed and none were given."""

    provided = [name for name in names or [] if normalize_optional_string(name) is not None]
    if provided:
        return provided
    if interactive:
        return prompt_for_names(prompt)
    raise CommandStageError(
        stage="input",
        detail="No command or executable names were provided.",
        hint=f"Pass names as arguments or rerun `whatexec {command_name} --interactive`.",
    )
