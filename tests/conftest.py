"""Shared test fixtures."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from semver_release.config.models import SemverReleaseConfig
from semver_release.core.release import SemverRelease
from semver_release.core.version import Semver
from semver_release.exceptions import RepositoryAccessError
from semver_release.vcs.models import Commit, Log, Message, ReleaseTag

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


class InMemoryRepository:
    """Repository port backed by a linear, in-memory history."""

    def __init__(self) -> None:
        self.commits: list[Commit] = []
        self.tags: dict[str, str] = {}
        self.head: str | None = None

    def commit(self, message: str = "Test commit") -> str:
        """Add a commit on top of the history and move HEAD to it."""
        sha = f"{len(self.commits) + 1:040x}"
        self.commits.append(
            Commit(
                sha=sha,
                message=Message.from_text(message),
                date=_EPOCH + timedelta(minutes=len(self.commits)),
            )
        )
        self.head = sha
        return sha

    def tag(self, name: str, sha: str | None = None) -> None:
        self.tags[name] = sha or self.head_commit_id()

    def release(self, version: str, prefix: str = "v") -> str:
        """Add a commit and tag it as a release."""
        sha = self.commit(f"Release {version}")
        self.tag(f"{prefix}{version}", sha)
        return sha

    def checkout(self, name: str) -> None:
        self.head = self.tags.get(name, name)

    # Repository port

    def list_release_tags(self, tag_prefix: str) -> list[ReleaseTag]:
        tags = []
        for name, sha in self.tags.items():
            candidate = name[len(tag_prefix) :]
            if name.startswith(tag_prefix) and Semver.is_valid(candidate):
                tags.append(ReleaseTag(name=name, sha=sha, version=Semver.parse(candidate)))
        return tags

    def log(self, start: str | None = None, end: str | None = None) -> Log:
        shas = [c.sha for c in self.commits]
        end_index = shas.index(end or self.head_commit_id())
        start_index = shas.index(start) if start else -1
        return Log.of(list(reversed(self.commits[start_index + 1 : end_index + 1])))

    def head_commit_id(self) -> str:
        if self.head is None:
            raise RepositoryAccessError("HEAD does not point to a commit")
        return self.head

    def tag_exists(self, name: str) -> bool:
        return name in self.tags


@pytest.fixture
def repo() -> InMemoryRepository:
    """An empty in-memory repository."""
    return InMemoryRepository()


@pytest.fixture
def config() -> SemverReleaseConfig:
    """Default configuration."""
    return SemverReleaseConfig()


@pytest.fixture
def release(repo: InMemoryRepository, config: SemverReleaseConfig) -> SemverRelease:
    """Release engine over the in-memory repository."""
    return SemverRelease(repo, config)
