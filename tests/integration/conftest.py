"""Fixtures for tests that run the git executable."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest


class WorkTree:
    """A scratch git repository driven through the git command line."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git", *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def commit(self, message: str) -> str:
        """Create an empty commit and return its id."""
        self.git("commit", "--allow-empty", "-q", "-m", message)
        return self.git("rev-parse", "HEAD")

    def tag(self, name: str, annotated: bool = True) -> None:
        if annotated:
            self.git("tag", "-a", name, "-m", f"Release {name}")
        else:
            self.git("tag", name)

    def write(self, name: str, content: str = "content\n") -> Path:
        path = self.path / name
        path.write_text(content)
        return path


@pytest.fixture
def work_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> WorkTree:
    """A git repository with one commit touching a tracked file."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    for var in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{var}_NAME", "Test")
        monkeypatch.setenv(f"{var}_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    path = tmp_path / "project"
    path.mkdir()
    tree = WorkTree(path)
    tree.git("init", "-q")
    tree.git("config", "commit.gpgsign", "false")
    tree.git("config", "tag.gpgsign", "false")
    tree.write("README.md", "# Project\n")
    tree.git("add", "README.md")
    tree.git("commit", "-q", "-m", "Initial commit")
    return tree
