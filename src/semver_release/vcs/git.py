"""Git repository access via the ``git`` command line.

Each query runs a single ``git`` subprocess and parses its output.
Failures are reported as RepositoryAccessError with git's stderr attached.
"""

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from pathlib import Path

from semver_release.core.version import to_semver
from semver_release.exceptions import InvalidVersionError, RepositoryAccessError
from semver_release.logging import get_logger
from semver_release.vcs.models import Commit, Log, Message, ReleaseTag

log = get_logger(__name__)

# Field and record separators for machine-readable git output
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x00"

_LOG_FORMAT = "%H%x1f%ct%x1f%B"
_TAG_FORMAT = "%(refname:strip=2)%09%(objectname)%09%(*objectname)"


class GitRepository:
    """A local git repository.

    Implements the Repository port used by the release engine, plus the
    few write/status operations the ``tag`` command needs.

    Args:
        path: Any directory inside the work tree
        tag_prefix: Prefix of release tags, used to mark release points in ``log()``

    Raises:
        RepositoryAccessError: If ``path`` is not inside a git work tree
    """

    def __init__(self, path: Path | str = ".", tag_prefix: str = "v") -> None:
        self.path = Path(path).resolve()
        self.tag_prefix = tag_prefix
        if not self.path.is_dir():
            raise RepositoryAccessError(f"Not a directory: {self.path}")
        toplevel = self._run("rev-parse", "--show-toplevel").strip()
        self.root = Path(toplevel)

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    def _run(self, *args: str) -> str:
        """Run a git command and return its stdout."""
        cmd = ["git", *args]
        log.debug("running git", args=args, cwd=str(self.path))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise RepositoryAccessError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise RepositoryAccessError(
                f"git {' '.join(args)} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    # -------------------------------------------------------------------------
    # Repository port
    # -------------------------------------------------------------------------

    def list_release_tags(self, tag_prefix: str) -> list[ReleaseTag]:
        """Return tags named ``<tag_prefix><semver>``.

        Tags whose remainder is not a valid semantic version are skipped.
        Annotated tags are peeled to the commit they point to.
        """
        output = self._run("for-each-ref", f"--format={_TAG_FORMAT}", "refs/tags/")
        tags: list[ReleaseTag] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            name, object_id, peeled_id = (line.split("\t") + ["", ""])[:3]
            if not name.startswith(tag_prefix):
                continue
            try:
                version = to_semver(name, prefix=tag_prefix)
            except InvalidVersionError:
                log.debug("skipping non-release tag", tag=name)
                continue
            tags.append(ReleaseTag(name=name, sha=peeled_id or object_id, version=version))
        return tags

    def log(self, start: str | None = None, end: str | None = None) -> Log:
        """Return commits in ``start..end``, most recent first."""
        revision = end or "HEAD"
        if start:
            revision = f"{start}..{revision}"
        output = self._run("log", "-z", f"--format={_LOG_FORMAT}", revision)

        release_points: dict[str, ReleaseTag] = {}
        for tag in self.list_release_tags(self.tag_prefix):
            current = release_points.get(tag.sha)
            if current is None or tag.version > current.version:
                release_points[tag.sha] = tag

        commits = []
        for record in output.split(_RECORD_SEP):
            if not record.strip():
                continue
            sha, timestamp, body = record.lstrip("\n").split(_FIELD_SEP, 2)
            commits.append(
                Commit(
                    sha=sha,
                    message=Message.from_text(body),
                    date=datetime.fromtimestamp(int(timestamp), tz=UTC),
                    tag=release_points.get(sha),
                )
            )
        return Log.of(commits)

    def head_commit_id(self) -> str:
        return self._run("rev-parse", "--verify", "HEAD").strip()

    def tag_exists(self, name: str) -> bool:
        output = self._run("tag", "--list", name)
        return name in output.splitlines()

    # -------------------------------------------------------------------------
    # Status and tagging
    # -------------------------------------------------------------------------

    def is_clean(self) -> bool:
        """True when there are no changes at all, untracked files included."""
        return not self._run("status", "--porcelain").strip()

    def has_uncommitted_changes(self) -> bool:
        """True when any tracked file is modified or staged."""
        return bool(self._run("status", "--porcelain", "--untracked-files=no").strip())

    def create_tag(self, name: str, message: str | None = None) -> None:
        """Create an annotated tag at HEAD."""
        self._run("tag", "-a", name, "-m", message or name)
        log.info("created tag", tag=name)
