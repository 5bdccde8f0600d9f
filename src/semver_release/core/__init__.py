"""Core business logic for semver-release.

This module contains the fundamental building blocks:
- Semantic version parsing and manipulation (SemVer 2.0.0)
- Commit message keyword classification
- Release version computation
"""

from __future__ import annotations

from semver_release.core.commits import classify, contains_keyword, full_message
from semver_release.core.release import (
    ReleaseDecision,
    SemverRelease,
    apply_increment,
    resolve_increment,
)
from semver_release.core.version import (
    BuildMetadata,
    Increment,
    PreRelease,
    Semver,
    parse_version,
    to_semver,
)

__all__ = [
    # Version
    "BuildMetadata",
    "Increment",
    "PreRelease",
    "Semver",
    "parse_version",
    "to_semver",
    # Commits
    "classify",
    "contains_keyword",
    "full_message",
    # Release
    "ReleaseDecision",
    "SemverRelease",
    "apply_increment",
    "resolve_increment",
]
