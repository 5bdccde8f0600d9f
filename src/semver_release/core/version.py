"""Semantic version parsing and manipulation.

Implements the `Semantic Versioning 2.0.0 <https://semver.org>`_ value type:
strict parsing, precedence comparison and derived-version constructors.

Versions are immutable. Every "change" (increment, pre-release, snapshot)
returns a new instance.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering
from typing import Any

from semver_release.exceptions import InvalidVersionError

_VERSION_PATTERN = re.compile(
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?:-(?P<pre_release>[0-9A-Za-z.-]*))?"
    r"(?:\+(?P<build_metadata>[0-9A-Za-z.-]*))?"
)

_IDENTIFIER_PATTERN = re.compile(r"[0-9A-Za-z-]+")


class Increment(IntEnum):
    """The version component to increment.

    Members are ordered by significance, so ``max()`` over a collection of
    increments yields the most significant one::

        MAJOR > MINOR > PATCH > PRE_RELEASE > DEFAULT > NONE

    DEFAULT is resolved against the configuration when the next version is
    computed; NONE means "no change".
    """

    NONE = 0
    DEFAULT = 1
    PRE_RELEASE = 2
    PATCH = 3
    MINOR = 4
    MAJOR = 5

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> Increment:
        """Look up an increment by name, case-insensitively.

        ``pre_release``, ``pre-release`` and ``prerelease`` all map to
        PRE_RELEASE.

        Raises:
            ValueError: If the name does not denote an increment
        """
        key = name.strip().upper().replace("-", "_")
        if key == "PRERELEASE":
            key = "PRE_RELEASE"
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(str(member) for member in cls)
            raise ValueError(f"Invalid increment '{name}'. Expected one of: {valid}") from None


def _split_identifiers(value: str, component: str) -> tuple[str, ...]:
    identifiers = tuple(value.split("."))
    if any(not identifier for identifier in identifiers):
        raise InvalidVersionError(f"'{value}' {component} MUST NOT contain empty identifiers")
    for identifier in identifiers:
        if not _IDENTIFIER_PATTERN.fullmatch(identifier):
            raise InvalidVersionError(
                f"'{value}' {component} identifiers MUST only contain [0-9A-Za-z-]"
            )
    return identifiers


@total_ordering
@dataclass(frozen=True)
class PreRelease:
    """The dot-separated pre-release component of a version (``rc.1``)."""

    value: str

    def __post_init__(self) -> None:
        for identifier in _split_identifiers(self.value, "pre-release"):
            if identifier.isdigit() and len(identifier) > 1 and identifier.startswith("0"):
                raise InvalidVersionError(
                    f"'{self.value}' pre-release numeric identifiers MUST NOT "
                    "contain leading zeroes"
                )

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(self.value.split("."))

    def increment(self) -> PreRelease:
        """Increment the trailing numeric identifier.

        ``rc.1`` becomes ``rc.2``. A non-numeric trailing identifier
        (``alpha``, ``rc.1-SNAPSHOT``) cannot be incremented and the
        pre-release is returned unchanged.
        """
        head, sep, last = self.value.rpartition(".")
        if not last.isdigit():
            return self
        return PreRelease(f"{head}{sep}{int(last) + 1}")

    def compare(self, other: PreRelease) -> int:
        """Compare precedence with another pre-release (SemVer §11.4)."""
        mine, theirs = self.identifiers, other.identifiers
        for a, b in zip(mine, theirs, strict=False):
            if a == b:
                continue
            a_numeric, b_numeric = a.isdigit(), b.isdigit()
            if a_numeric and b_numeric:
                return -1 if int(a) < int(b) else 1
            # Numeric identifiers always have lower precedence
            if a_numeric:
                return -1
            if b_numeric:
                return 1
            return -1 if a < b else 1
        if len(mine) == len(theirs):
            return 0
        return 1 if len(mine) > len(theirs) else -1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PreRelease):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BuildMetadata:
    """The dot-separated build metadata component of a version.

    Build metadata is carried along but never takes part in precedence.
    """

    value: str

    def __post_init__(self) -> None:
        _split_identifiers(self.value, "build metadata")

    def __str__(self) -> str:
        return self.value


@total_ordering
@dataclass(frozen=True)
class Semver:
    """A Semantic Versioning 2.0.0 version.

    Equality and hashing consider major, minor, patch and pre-release only;
    build metadata is ignored, as required by the SemVer specification.

    Examples:
        >>> v = Semver.parse("1.2.3-rc.1+build.5")
        >>> v.pre_release
        PreRelease(value='rc.1')
        >>> str(v.increment_minor())
        '1.3.0'
        >>> Semver.parse("1.0.0-alpha") < Semver.parse("1.0.0")
        True
    """

    major: int
    minor: int
    patch: int
    pre_release: PreRelease | None = None
    build_metadata: BuildMetadata | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            number = getattr(self, name)
            if isinstance(number, bool) or not isinstance(number, int):
                raise InvalidVersionError(f"{name} version number MUST be an integer, got {number!r}")
            if number < 0:
                raise InvalidVersionError(f"{name} version number MUST NOT be negative, got {number}")
        if isinstance(self.pre_release, str):
            object.__setattr__(self, "pre_release", PreRelease(self.pre_release))
        if isinstance(self.build_metadata, str):
            object.__setattr__(self, "build_metadata", BuildMetadata(self.build_metadata))

    @classmethod
    def parse(cls, version: str) -> Semver:
        """Parse a version string.

        Raises:
            InvalidVersionError: If the string is not a valid SemVer version
        """
        if not isinstance(version, str):
            raise InvalidVersionError(f"Version must be a string, got {type(version).__name__}")
        if version.startswith("-"):
            raise InvalidVersionError(f"'{version}' version numbers MUST NOT be negative")

        match = _VERSION_PATTERN.fullmatch(version)
        if not match:
            raise InvalidVersionError(
                f"'{version}' is not a valid semantic version. "
                "Expected MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]"
            )

        numbers = []
        for name in ("major", "minor", "patch"):
            number = match.group(name)
            if len(number) > 1 and number.startswith("0"):
                raise InvalidVersionError(f"'{version}' version numbers MUST NOT contain leading zeroes")
            numbers.append(int(number))

        pre_release = match.group("pre_release")
        build_metadata = match.group("build_metadata")
        return cls(
            *numbers,
            pre_release=PreRelease(pre_release) if pre_release is not None else None,
            build_metadata=BuildMetadata(build_metadata) if build_metadata is not None else None,
        )

    @classmethod
    def is_valid(cls, version: str) -> bool:
        """Check whether a string is a valid semantic version."""
        try:
            cls.parse(version)
        except InvalidVersionError:
            return False
        return True

    @property
    def normal_version(self) -> str:
        """The ``MAJOR.MINOR.PATCH`` part of this version."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def is_pre_release(self) -> bool:
        return self.pre_release is not None

    def increment_major(self) -> Semver:
        return Semver(self.major + 1, 0, 0)

    def increment_minor(self) -> Semver:
        return Semver(self.major, self.minor + 1, 0)

    def increment_patch(self) -> Semver:
        return Semver(self.major, self.minor, self.patch + 1)

    def increment_pre_release(self) -> Semver:
        """Increment the trailing number of the pre-release component.

        Returns this version unchanged when there is no pre-release, or
        when its last identifier is not numeric.
        """
        if self.pre_release is None:
            return self
        incremented = self.pre_release.increment()
        if incremented is self.pre_release:
            return self
        return self.copy(pre_release=incremented)

    def copy(self, **changes: Any) -> Semver:
        """Return a new version with the given fields replaced.

        Passing ``pre_release=None`` or ``build_metadata=None`` drops the
        component.
        """
        return dataclasses.replace(self, **changes)

    def compare(self, other: Semver) -> int:
        """Compare precedence with another version.

        Returns:
            -1, 0 or 1
        """
        for mine, theirs in (
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
        ):
            if mine != theirs:
                return -1 if mine < theirs else 1

        if self.pre_release is None:
            return 0 if other.pre_release is None else 1
        if other.pre_release is None:
            return -1
        return self.pre_release.compare(other.pre_release)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Semver):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        version = self.normal_version
        if self.pre_release is not None:
            version += f"-{self.pre_release}"
        if self.build_metadata is not None:
            version += f"+{self.build_metadata}"
        return version

    def __repr__(self) -> str:
        return f"Semver('{self}')"


def parse_version(version: str) -> Semver:
    """Parse a version string into a Semver.

    Raises:
        InvalidVersionError: If the string is not a valid SemVer version
    """
    return Semver.parse(version)


def to_semver(value: str, prefix: str | None = None) -> Semver:
    """Parse a version string, stripping a leading tag prefix (``v1.2.3``)."""
    if prefix and value.startswith(prefix):
        value = value[len(prefix) :]
    return Semver.parse(value)
