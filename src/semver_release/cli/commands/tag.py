"""Implementation of the 'tag' command.

The tag command computes the next version and records it as an annotated
git tag on HEAD. It is a dry run unless ``--execute`` is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel

from semver_release.cli.commands._project import open_project
from semver_release.config.models import CleanRule
from semver_release.exceptions import DirtyRepositoryError, SemverReleaseError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from semver_release.core.version import Increment
    from semver_release.vcs import GitRepository


def check_clean_rule(repo: GitRepository, rule: CleanRule) -> None:
    """Ensure the work tree satisfies the configured clean rule.

    Raises:
        DirtyRepositoryError: If the work tree has disallowed changes
    """
    if rule == CleanRule.ALL and not repo.is_clean():
        raise DirtyRepositoryError("Release with a non-clean repository is not allowed")
    if rule == CleanRule.TRACKED and repo.has_uncommitted_changes():
        raise DirtyRepositoryError("Release with uncommitted changes is not allowed")


def run_tag(
    path: str | None,
    config_file: Path | None,
    execute: bool,
    increment: Increment | None,
    promote: bool,
    pre_release: bool,
    version: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the tag command.

    Args:
        path: Optional path to project directory
        config_file: Optional explicit configuration file
        execute: Whether to actually create the tag
        increment: Explicit increment overriding commit keywords
        promote: Promote the latest pre-release
        pre_release: Create a new pre-release
        version: Explicit next version
        console: Console for standard output
        err_console: Console for error output
    """
    config, repo, release = open_project(path, config_file, err_console)

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

    if decision.current_version is not None:
        console.print(f"[green]HEAD is already released as {decision.current_version}.[/] Nothing to do.")
        return

    next_version = decision.next_version
    if next_version is None:
        latest = decision.latest_version
        console.print(
            f"[yellow]No new version to release[/] (latest: [cyan]{latest}[/]).\n"
            "[dim]Use [cyan]--increment[/] or [cyan]--version[/] to force one.[/]"
        )
        return

    if decision.is_snapshot:
        console.print(f"[yellow]{next_version} is a snapshot version; snapshots are not tagged.[/]")
        return

    tag_name = config.tag_name(next_version)
    try:
        if repo.tag_exists(tag_name):
            console.print(f"[yellow]Tag [cyan]{tag_name}[/] already exists. Nothing to do.[/]")
            return
    except SemverReleaseError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    if decision.latest_version is None:
        console.print(f"\n{mode_str} - First release! Tagging [green]{next_version}[/]\n")
    else:
        console.print(
            f"\n{mode_str} - Releasing [green]{next_version}[/] "
            f"after [cyan]{decision.latest_version}[/] ({decision.increment})\n"
        )

    if not execute:
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n"
                f"  - Create annotated tag [cyan]{tag_name}[/] at HEAD",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to create the tag.[/]")
        return

    try:
        check_clean_rule(repo, config.git.repo.clean_rule)
        repo.create_tag(tag_name, config.git.tag.message or tag_name)
    except DirtyRepositoryError as e:
        err_console.print(
            f"[red]Error:[/] {e}.\n"
            "Commit or stash your changes, or set [cyan]git.repo.clean_rule = \"none\"[/] in config."
        )
        raise SystemExit(1) from e
    except SemverReleaseError as e:
        err_console.print(f"[red]Error creating tag:[/] {e}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]Tagged {next_version} as {tag_name}![/]\n\n"
            "Next steps:\n"
            f"  Push the tag: [cyan]git push {config.git.repo.remote_name} {tag_name}[/]",
            title="[green]Release Tagged[/]",
            border_style="green",
        )
    )
