"""Implementation of the 'show' command.

The show command prints the current, latest and next versions without
changing anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from semver_release.cli.commands._project import open_project
from semver_release.exceptions import SemverReleaseError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from semver_release.core.release import ReleaseDecision
    from semver_release.core.version import Increment


def decision_to_dict(decision: ReleaseDecision, tag: str | None) -> dict[str, str | bool | None]:
    """Flatten a decision for JSON output."""

    def fmt(value: object) -> str | None:
        return str(value) if value is not None else None

    return {
        "current": fmt(decision.current_version),
        "latest": fmt(decision.latest_version),
        "next": fmt(decision.next_version),
        "increment": str(decision.increment),
        "snapshot": decision.is_snapshot,
        "tag": tag,
    }


def run_show(
    path: str | None,
    config_file: Path | None,
    increment: Increment | None,
    promote: bool,
    pre_release: bool,
    version: str | None,
    json_output: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the show command.

    Args:
        path: Optional path to project directory
        config_file: Optional explicit configuration file
        increment: Explicit increment overriding commit keywords
        promote: Promote the latest pre-release
        pre_release: Create a new pre-release
        version: Explicit next version
        json_output: Print JSON instead of a table
        console: Console for standard output
        err_console: Console for error output
    """
    config, _repo, release = open_project(path, config_file, err_console)

    try:
        decision = release.next_version(
            increment,
            promote=promote,
            pre_release=pre_release,
            version=version,
        )
    except SemverReleaseError as e:
        err_console.print(f"[red]Error computing version:[/] {e}")
        raise SystemExit(1) from e

    target = decision.version
    tag = config.tag_name(target) if target is not None and not decision.is_snapshot else None

    if json_output:
        console.print_json(data=decision_to_dict(decision, tag))
        return

    table = Table(title="Versions", show_header=False)
    table.add_column("Name", style="bold")
    table.add_column("Value")
    table.add_row("Current", _fmt(decision.current_version))
    table.add_row("Latest", _fmt(decision.latest_version))
    table.add_row("Next", _fmt(decision.next_version, snapshot=decision.is_snapshot))
    table.add_row("Increment", str(decision.increment))
    if tag:
        table.add_row("Tag", f"[cyan]{tag}[/]")
    console.print(table)

    if decision.is_noop:
        console.print("[yellow]No new version to release.[/]")


def _fmt(value: object, snapshot: bool = False) -> str:
    if value is None:
        return "[dim]-[/]"
    if snapshot:
        return f"[yellow]{value}[/] [dim](snapshot)[/]"
    return f"[green]{value}[/]"
