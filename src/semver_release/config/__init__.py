"""Configuration management for semver-release."""

from __future__ import annotations

from semver_release.config.loader import build_config, load_config, merge_config
from semver_release.config.models import (
    CleanRule,
    GitConfig,
    GitMessageConfig,
    GitRepoConfig,
    GitTagConfig,
    SemverReleaseConfig,
    VersionConfig,
)

__all__ = [
    "CleanRule",
    "GitConfig",
    "GitMessageConfig",
    "GitRepoConfig",
    "GitTagConfig",
    "SemverReleaseConfig",
    "VersionConfig",
    "build_config",
    "load_config",
    "merge_config",
]
