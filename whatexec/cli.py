"""Command-line interface for WhatExec.

Responsibilities:
- Expose user-facing lookup commands (`find`, `path`, `locate`, `list`).
- Convert CLI arguments into `WhatExecConfig` and run the configured resolvers.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_missing, echo_resolved, exit_with_command_error
from .cli_runtime import apply_cli_overrides, load_command_config, resolve_command_names
from .errors import CommandStageError
from .models.datatypes import ResolvedExecutable, SearchOption
from .resolver_factory import ResolverFactory
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="whatexec",
    no_args_is_help=True,
    help="Locate commands and executable files on PATH and across local drives.",
)


def _unique(executables: list[ResolvedExecutable]) -> list[ResolvedExecutable]:
    """Drop repeated paths while keeping first-seen order."""

    return list(dict.fromkeys(executables))


def _search_option(top_level: bool) -> SearchOption:
    return SearchOption.TOP_DIRECTORY_ONLY if top_level else SearchOption.ALL_DIRECTORIES


def _build_factory(
    config_file: Path | None,
    use_caching: bool | None = None,
    cache_lifetime: float | None = None,
) -> ResolverFactory:
    config = apply_cli_overrides(load_command_config(config_file), use_caching, cache_lifetime)
    return ResolverFactory(config)


def _print_results(
    run_logger: RunLogger,
    stage: str,
    results: dict[str, list[ResolvedExecutable]],
    limit: int | None,
) -> None:
    """Print results per name and exit with code 1 when any name has no match."""

    missing = 0
    for name, executables in results.items():
        run_logger.log_lookup(stage, name, len(executables))
        if not executables:
            echo_missing(name)
            missing += 1
            continue
        echo_resolved(executables, limit)

    run_logger.log_stage_complete(stage, resolved=len(results) - missing, missing=missing)
    if missing:
        raise typer.Exit(code=1)


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Optional YAML config file path."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Include debug diagnostics in stderr logs."),
]
LimitOption = Annotated[
    int | None,
    typer.Option("--limit", "-l", min=1, help="Maximum number of results printed per name."),
]


@app.command("find")
def find_command(
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Commands or executable files to find."),
    ] = None,
    all_instances: Annotated[
        bool,
        typer.Option("--all", "-a", help="Find every instance on PATH and across local drives."),
    ] = False,
    limit: LimitOption = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Prompt for names when none are given."),
    ] = False,
    use_caching: Annotated[
        bool | None,
        typer.Option(
            "--use-caching/--no-caching",
            help="Cache PATH directories and extensions (overrides config file value).",
        ),
    ] = None,
    cache_lifetime: Annotated[
        float | None,
        typer.Option("--cache-lifetime", help="PATH cache lifetime in minutes."),
    ] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Resolve names from PATH first, then scan local drives for misses."""

    try:
        run_logger = RunLogger(verbose=verbose)
        lookup_names = resolve_command_names(names, interactive, "find")
        factory = _build_factory(config_file, use_caching, cache_lifetime)
        run_logger.log_stage_start("find", names=len(lookup_names), all=all_instances)

        results: dict[str, list[ResolvedExecutable]] = {}
        if all_instances:
            path_resolver = factory.create_path_resolver()
            instances_locator = factory.create_instances_locator()
            for name in lookup_names:
                _, on_path = path_resolver.try_resolve_many([name])
                scanned = instances_locator.locate_instances(
                    name, factory.config.fallback_search, limit=limit
                )
                results[name] = _unique([*on_path, *scanned])
        else:
            resolver = factory.create_resolver()
            for name in lookup_names:
                resolved = resolver.try_resolve(name)
                results[name] = [] if resolved is None else [resolved]
    except Exception as exc:
        exit_with_command_error("find", exc)

    _print_results(run_logger, "find", results, limit)


@app.command("path")
def path_command(
    names: Annotated[list[str], typer.Argument(help="Commands to look up on PATH.")],
    all_matches: Annotated[
        bool,
        typer.Option("--all", "-a", help="Print every PATH match instead of the first."),
    ] = False,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Look names up on PATH only, like `which`."""

    try:
        run_logger = RunLogger(verbose=verbose)
        factory = _build_factory(config_file)
        resolver = factory.create_path_resolver()
        run_logger.log_stage_start("path", names=len(names), all=all_matches)

        results: dict[str, list[ResolvedExecutable]] = {}
        for name in names:
            if all_matches:
                _, results[name] = resolver.try_resolve_many([name])
            else:
                resolved = resolver.try_resolve(name)
                results[name] = [] if resolved is None else [resolved]
    except Exception as exc:
        exit_with_command_error("path", exc)

    _print_results(run_logger, "path", results, None)


@app.command("locate")
def locate_command(
    name: Annotated[str, typer.Argument(help="Executable file name to locate.")],
    directory: Annotated[
        Path | None,
        typer.Option("--directory", "-d", help="Search below this directory."),
    ] = None,
    drive: Annotated[
        str | None,
        typer.Option("--drive", help="Search one drive, given by its mount point."),
    ] = None,
    all_instances: Annotated[
        bool,
        typer.Option("--all", "-a", help="Print every instance in scope."),
    ] = False,
    top_level: Annotated[
        bool,
        typer.Option("--top-level", help="Search only the top directory, without recursion."),
    ] = False,
    limit: LimitOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Scan one directory or one drive for an executable file name."""

    try:
        run_logger = RunLogger(verbose=verbose)
        if (directory is None) == (drive is None):
            raise CommandStageError(
                stage="input",
                detail="Provide exactly one scope: `--directory <dir>` or `--drive <mount>`.",
                hint="Use `whatexec locate --help` for usage examples.",
            )
        scope = directory if directory is not None else Path(drive or "")
        if not scope.is_dir():
            raise CommandStageError(
                stage="input",
                detail=f"Search scope `{scope}` is not an existing directory.",
                hint="Pass an existing directory or a mounted drive root.",
            )

        factory = _build_factory(config_file)
        option = _search_option(top_level)
        run_logger.log_stage_start("locate", scope=scope, option=option.value)

        if all_instances:
            locator = factory.create_instances_locator()
            if directory is not None:
                matches = locator.locate_instances_in_directory(
                    directory, name, option, limit=limit
                )
            else:
                matches = locator.locate_instances_in_drive(scope, name, option, limit=limit)
        else:
            single = factory.create_locator()
            if directory is not None:
                found = single.locate_in_directory(directory, name, option)
            else:
                found = single.locate_in_drive(scope, name, option)
            matches = [] if found is None else [found]
    except Exception as exc:
        exit_with_command_error("locate", exc)

    _print_results(run_logger, "locate", {name: matches}, limit)


@app.command("list")
def list_command(
    directory: Annotated[Path, typer.Argument(help="Directory to list executables from.")],
    top_level: Annotated[
        bool,
        typer.Option("--top-level", help="List only the top directory, without recursion."),
    ] = False,
    limit: LimitOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List every executable file found in a directory, in priority order."""

    try:
        run_logger = RunLogger(verbose=verbose)
        if not directory.is_dir():
            raise CommandStageError(
                stage="input",
                detail=f"Directory `{directory}` does not exist.",
                hint="Pass an existing directory path.",
            )
        factory = _build_factory(config_file)
        option = _search_option(top_level)
        run_logger.log_stage_start("list", scope=directory, option=option.value)
        executables = factory.create_multi_locator().locate_all_in_directory(
            directory, option, limit=limit
        )
    except Exception as exc:
        exit_with_command_error("list", exc)

    echo_resolved(executables)
    run_logger.log_stage_complete("list", executables=len(executables))


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
