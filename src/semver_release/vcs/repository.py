"""The repository port used by the release engine.

The engine only needs a handful of read operations from version control.
They are expressed as a Protocol so that tests (and other VCS backends)
can provide their own implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from semver_release.vcs.models import Log, ReleaseTag


@runtime_checkable
class Repository(Protocol):
    """Read access to release tags and commit history."""

    def list_release_tags(self, tag_prefix: str) -> list[ReleaseTag]:
        """Return all tags named ``<tag_prefix><semver>``, peeled to their commit."""
        ...

    def log(self, start: str | None = None, end: str | None = None) -> Log:
        """Return commits reachable from ``end`` but not from ``start``.

        Args:
            start: Exclusive lower bound; None means the whole history
            end: Inclusive upper bound; None means HEAD
        """
        ...

    def head_commit_id(self) -> str:
        """Return the commit id HEAD points to."""
        ...

    def tag_exists(self, name: str) -> bool:
        """Check whether a tag with the given full name exists."""
        ...
