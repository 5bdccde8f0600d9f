"""Shared setup for CLI commands: configuration, repository and engine."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from semver_release.config import load_config
from semver_release.core.release import SemverRelease
from semver_release.exceptions import SemverReleaseError
from semver_release.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from semver_release.config.models import SemverReleaseConfig


def open_project(
    path: str | None,
    config_file: Path | None,
    err_console: Console,
) -> tuple[SemverReleaseConfig, GitRepository, SemverRelease]:
    """Load configuration and open the git repository of a project.

    Exits with code 1 after printing the error when either step fails.

    Args:
        path: Optional path to project directory
        config_file: Optional explicit configuration file
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path, config_file)
    except SemverReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    repo_path = project_path / config.git.repo.directory
    try:
        repo = GitRepository(repo_path, tag_prefix=config.tag_prefix)
    except SemverReleaseError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    return config, repo, SemverRelease(repo, config)
