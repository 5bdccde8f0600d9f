"""Exception hierarchy for semver-release.

All errors raised by this package derive from SemverReleaseError so that
callers (and the CLI) can catch them with a single except clause.
"""

from __future__ import annotations


class SemverReleaseError(Exception):
    """Base exception for all semver-release errors."""


class InvalidVersionError(SemverReleaseError, ValueError):
    """Raised when a string is not a valid SemVer 2.0.0 version."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(SemverReleaseError):
    """Base exception for configuration problems."""


class ConfigNotFoundError(ConfigurationError):
    """Raised when a configuration file cannot be found."""


class ConfigValidationError(ConfigurationError):
    """Raised when configuration values are invalid."""


# =============================================================================
# Repository
# =============================================================================


class RepositoryAccessError(SemverReleaseError):
    """Raised when the git history cannot be read or written."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


class DirtyRepositoryError(RepositoryAccessError):
    """Raised when the working tree has changes not allowed by the clean rule."""
