"""Configuration models for semver-release.

All models are immutable pydantic models with defaults for every field, so
``SemverReleaseConfig()`` is a complete, valid configuration. Field names are
snake_case; camelCase aliases (``preReleaseId``, ``ignoreCase``) are accepted
as well.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from semver_release.core.version import Increment, PreRelease, Semver


class CleanRule(str, Enum):
    """Which changes in the work tree block tagging.

    - ALL: any change, untracked files included
    - TRACKED: changes to tracked files only
    - NONE: never check
    """

    ALL = "all"
    TRACKED = "tracked"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class GitRepoConfig(_ConfigModel):
    """Git repository settings."""

    directory: Path = Path(".")
    remote_name: str = "origin"
    clean_rule: CleanRule = CleanRule.TRACKED

    @field_validator("clean_rule", mode="before")
    @classmethod
    def _parse_clean_rule(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class GitTagConfig(_ConfigModel):
    """Release tag naming.

    A release tag is named ``<prefix><separator><version>``, e.g. ``v1.2.3``.
    """

    prefix: str = "v"
    separator: str = ""
    message: str = ""


class GitMessageConfig(_ConfigModel):
    """Keywords in commit messages that request a version increment."""

    major: str = "[major]"
    minor: str = "[minor]"
    patch: str = "[patch]"
    pre_release: str = "[pre release]"
    ignore_case: bool = False


class GitConfig(_ConfigModel):
    """Git settings."""

    repo: GitRepoConfig = Field(default_factory=GitRepoConfig)
    tag: GitTagConfig = Field(default_factory=GitTagConfig)
    message: GitMessageConfig = Field(default_factory=GitMessageConfig)


class VersionConfig(_ConfigModel):
    """Version computation settings."""

    initial_version: Semver = Semver(0, 1, 0)
    placeholder_version: Semver = Semver(0, 0, 0)
    default_increment: Increment = Increment.MINOR
    pre_release_id: str = "rc"
    initial_pre_release: int = Field(default=1, ge=0)
    snapshot_suffix: str = "SNAPSHOT"
    use_snapshots: bool = False

    @field_validator("initial_version", "placeholder_version", mode="before")
    @classmethod
    def _parse_semver(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Semver.parse(value)
        return value

    @field_validator("default_increment", mode="before")
    @classmethod
    def _parse_increment(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Increment.from_name(value)
        return value

    @field_validator("default_increment")
    @classmethod
    def _check_increment(cls, value: Increment) -> Increment:
        if value not in (Increment.MAJOR, Increment.MINOR, Increment.PATCH):
            raise ValueError(f"default_increment must be major, minor or patch, got '{value}'")
        return value

    @model_validator(mode="after")
    def _check_identifiers(self) -> VersionConfig:
        # Raises InvalidVersionError (a ValueError) for unusable identifiers
        PreRelease(f"{self.pre_release_id}.{self.initial_pre_release}")
        PreRelease(self.snapshot_suffix)
        return self

    @field_serializer("initial_version", "placeholder_version", "default_increment")
    def _serialize(self, value: Semver | Increment) -> str:
        return str(value)

    @property
    def initial_pre_release_id(self) -> PreRelease:
        """The pre-release attached to a brand new pre-release version (``rc.1``)."""
        return PreRelease(f"{self.pre_release_id}.{self.initial_pre_release}")


class SemverReleaseConfig(_ConfigModel):
    """Root configuration."""

    git: GitConfig = Field(default_factory=GitConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    @property
    def tag_prefix(self) -> str:
        """Everything in a release tag name before the version."""
        return f"{self.git.tag.prefix}{self.git.tag.separator}"

    def tag_name(self, version: Semver) -> str:
        """Full release tag name for a version."""
        return f"{self.tag_prefix}{version}"
