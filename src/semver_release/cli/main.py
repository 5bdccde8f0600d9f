"""Typer application for semver-release.

Commands::

    semver-release show [PATH]            print current, latest and next versions
    semver-release tag [PATH] --execute   tag HEAD with the next version
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from semver_release import __version__
from semver_release.core.version import Increment
from semver_release.logging import configure_logging

app = typer.Typer(
    name="semver-release",
    help="Compute the next semantic version from git history and tag it.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _parse_increment(value: str | None) -> Increment | None:
    if value is None:
        return None
    try:
        return Increment.from_name(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _print_version(value: bool) -> None:
    if value:
        console.print(f"semver-release {__version__}")
        raise typer.Exit()


PathArg = Annotated[
    str | None,
    typer.Argument(help="Project directory (defaults to the current directory)"),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file (.json, .toml or .properties)"),
]
IncrementOpt = Annotated[
    str | None,
    typer.Option(
        "--increment",
        "-i",
        help="Increment to apply: major, minor, patch or pre_release",
    ),
]
PromoteOpt = Annotated[
    bool,
    typer.Option("--promote", help="Promote the latest pre-release to a release"),
]
PreReleaseOpt = Annotated[
    bool,
    typer.Option("--pre-release", help="Create a new pre-release version"),
]
VersionOpt = Annotated[
    str | None,
    typer.Option("--version", help="Use this version as the next version"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings and errors")] = False,
    json_log: Annotated[bool, typer.Option("--json-log", help="Log JSON lines to stderr")] = False,
    show_version: Annotated[
        bool,
        typer.Option(
            "--app-version",
            callback=_print_version,
            is_eager=True,
            help="Show the semver-release version and exit",
        ),
    ] = False,
) -> None:
    """Semantic versions from git history."""
    configure_logging(verbose=verbose, quiet=quiet, json_log=json_log)


@app.command()
def show(
    path: PathArg = None,
    config: ConfigOpt = None,
    increment: IncrementOpt = None,
    promote: PromoteOpt = False,
    pre_release: PreReleaseOpt = False,
    version: VersionOpt = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print JSON")] = False,
) -> None:
    """Show the current, latest and next version."""
    from semver_release.cli.commands.show import run_show

    run_show(
        path=path,
        config_file=config,
        increment=_parse_increment(increment),
        promote=promote,
        pre_release=pre_release,
        version=version,
        json_output=json_output,
        console=console,
        err_console=err_console,
    )


@app.command()
def tag(
    path: PathArg = None,
    config: ConfigOpt = None,
    execute: Annotated[bool, typer.Option("--execute", "-x", help="Create the tag")] = False,
    increment: IncrementOpt = None,
    promote: PromoteOpt = False,
    pre_release: PreReleaseOpt = False,
    version: VersionOpt = None,
) -> None:
    """Tag HEAD with the next version (dry run unless --execute)."""
    from semver_release.cli.commands.tag import run_tag

    run_tag(
        path=path,
        config_file=config,
        execute=execute,
        increment=_parse_increment(increment),
        promote=promote,
        pre_release=pre_release,
        version=version,
        console=console,
        err_console=err_console,
    )


if __name__ == "__main__":
    app()
