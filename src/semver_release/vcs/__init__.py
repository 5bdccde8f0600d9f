"""Version control access for semver-release."""

from __future__ import annotations

from semver_release.vcs.git import GitRepository
from semver_release.vcs.models import Commit, Log, Message, ReleaseTag
from semver_release.vcs.repository import Repository

__all__ = [
    "Commit",
    "GitRepository",
    "Log",
    "Message",
    "ReleaseTag",
    "Repository",
]
