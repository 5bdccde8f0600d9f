"""semver-release: semantic versions from git history.

Computes the next semantic version of a project from its release tags and
commit messages, and tags the release.
"""

from __future__ import annotations

from semver_release.core import Increment, ReleaseDecision, Semver, SemverRelease, parse_version

__version__ = "0.1.0"

__all__ = [
    "Increment",
    "ReleaseDecision",
    "Semver",
    "SemverRelease",
    "__version__",
    "parse_version",
]
