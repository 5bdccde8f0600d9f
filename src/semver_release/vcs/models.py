"""Read-only model of the commit history."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from semver_release.core.version import Semver


@dataclass(frozen=True)
class ReleaseTag:
    """A git tag that marks a release.

    Attributes:
        name: Full tag name, including the prefix (``v1.2.3``)
        sha: Id of the commit the tag points to (peeled)
        version: The version encoded in the tag name
    """

    name: str
    sha: str
    version: Semver


@dataclass(frozen=True)
class Message:
    """A commit message split into title and description.

    Attributes:
        title: First line of the message
        description: Non-empty lines after the title, stripped
    """

    title: str
    description: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> Message:
        """Split a raw commit message."""
        lines = text.strip().splitlines()
        if not lines:
            return cls(title="")
        description = tuple(line.strip() for line in lines[1:] if line.strip())
        return cls(title=lines[0].strip(), description=description)

    def full(self) -> str:
        """Title, a blank line and the description."""
        return f"{self.title}\n\n" + "\n".join(self.description)

    def __str__(self) -> str:
        return self.full().rstrip()


@dataclass(frozen=True)
class Commit:
    """A single commit.

    Attributes:
        sha: Commit id
        message: Parsed commit message
        date: Commit timestamp (timezone aware)
        tag: Release tag on this commit, if the commit is a release point
    """

    sha: str
    message: Message
    date: datetime
    tag: ReleaseTag | None = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class Log:
    """An ordered sequence of commits, most recent first."""

    commits: tuple[Commit, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, commits: Sequence[Commit]) -> Log:
        return cls(tuple(commits))

    def __iter__(self) -> Iterator[Commit]:
        return iter(self.commits)

    def __len__(self) -> int:
        return len(self.commits)

    def __bool__(self) -> bool:
        return bool(self.commits)
