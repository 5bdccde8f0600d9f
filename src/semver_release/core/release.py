"""Release version computation.

SemverRelease answers the questions a release needs answered, using the
release tags and commit history of a Repository:

- which version is HEAD already released as (``current_version``)
- which version was released last (``latest_version``)
- which increment do the commits since then request (``next_increment``)
- what the next version should be (``next_version``)

Nothing here writes to the repository; creating the tag is up to the caller.

Increment rules when deriving a version from the latest release::

    latest      increment      result
    ──────────  ─────────────  ──────────────────────────────────────
    none        any            initial_version
    1.2.3       MAJOR          2.0.0
    1.2.3       MINOR          1.3.0
    1.2.3       PATCH          1.2.4
    1.2.3       PRE_RELEASE    same as DEFAULT
    1.2.3       DEFAULT        default_increment (1.3.0 for MINOR)
    1.2.3-rc.1  PRE_RELEASE    1.2.3-rc.2
    1.2.3-rc.1  DEFAULT        1.2.3-rc.2
    any         NONE           latest
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from semver_release.core.commits import classify
from semver_release.core.version import Increment, Semver
from semver_release.logging import get_logger

if TYPE_CHECKING:
    from semver_release.config.models import SemverReleaseConfig
    from semver_release.vcs.models import ReleaseTag
    from semver_release.vcs.repository import Repository

log = get_logger(__name__)

_NORMAL_INCREMENTS = (Increment.MAJOR, Increment.MINOR, Increment.PATCH)


@dataclass(frozen=True)
class ReleaseDecision:
    """The outcome of a next-version computation.

    Attributes:
        current_version: Version HEAD is tagged with; when set, nothing else is computed
        latest_version: Highest released version, if any
        next_version: Version to release, or None when there is nothing to release
        candidate: Version that was computed before the "newer than latest" check
        increment: Increment the computation was based on
        is_snapshot: Whether ``next_version`` is a snapshot (never tagged)
    """

    current_version: Semver | None = None
    latest_version: Semver | None = None
    next_version: Semver | None = None
    candidate: Semver | None = None
    increment: Increment = Increment.NONE
    is_snapshot: bool = False

    @property
    def is_current(self) -> bool:
        """HEAD is already a release."""
        return self.current_version is not None

    @property
    def is_noop(self) -> bool:
        """Neither a current nor a next version; nothing to do."""
        return self.current_version is None and self.next_version is None

    @property
    def version(self) -> Semver | None:
        """The version that applies to HEAD: current, else next."""
        return self.current_version or self.next_version


def resolve_increment(
    increment: Increment,
    base: Semver | None,
    default_increment: Increment,
) -> Increment:
    """Resolve DEFAULT and PRE_RELEASE against the version being incremented.

    Both resolve to PRE_RELEASE when ``base`` is a pre-release, and to
    ``default_increment`` otherwise. Other increments are returned as is.
    """
    if increment in (Increment.DEFAULT, Increment.PRE_RELEASE):
        if base is not None and base.is_pre_release:
            return Increment.PRE_RELEASE
        return default_increment
    return increment


def apply_increment(version: Semver, increment: Increment) -> Semver:
    """Apply a concrete increment to a version.

    Raises:
        ValueError: If ``increment`` is DEFAULT, which must be resolved first
    """
    if increment == Increment.MAJOR:
        return version.increment_major()
    if increment == Increment.MINOR:
        return version.increment_minor()
    if increment == Increment.PATCH:
        return version.increment_patch()
    if increment == Increment.PRE_RELEASE:
        return version.increment_pre_release()
    if increment == Increment.NONE:
        return version
    raise ValueError(f"Cannot apply unresolved increment '{increment}'")


class SemverRelease:
    """Computes release versions for a repository.

    Every method queries the repository afresh; instances hold no state
    besides the repository and configuration.

    Args:
        repository: Source of release tags and commit history
        config: Configuration
    """

    def __init__(self, repository: Repository, config: SemverReleaseConfig) -> None:
        self.repository = repository
        self.config = config

    def _release_tags(self) -> list[ReleaseTag]:
        return self.repository.list_release_tags(self.config.tag_prefix)

    def current_version(self) -> Semver | None:
        """The version HEAD is tagged with, or None if HEAD is not a release."""
        head = self.repository.head_commit_id()
        versions = [tag.version for tag in self._release_tags() if tag.sha == head]
        return max(versions, default=None)

    def latest_tag(self) -> ReleaseTag | None:
        """The release tag with the highest version precedence."""
        return max(self._release_tags(), key=lambda tag: tag.version, default=None)

    def latest_version(self) -> Semver | None:
        """The highest released version, or None if nothing was released."""
        tag = self.latest_tag()
        return tag.version if tag is not None else None

    def next_increment(self) -> Increment:
        """The increment requested by commits since the latest release.

        Returns NONE when HEAD is a release. Otherwise the commits after the
        latest release tag (or the whole history) are classified, which
        yields DEFAULT when no keyword is found.
        """
        tags = self._release_tags()
        head = self.repository.head_commit_id()
        if any(tag.sha == head for tag in tags):
            return Increment.NONE

        latest = max(tags, key=lambda tag: tag.version, default=None)
        commits = self.repository.log(start=latest.sha if latest is not None else None)
        increment = classify(commits, self.config.git.message)
        log.debug(
            "classified commits",
            since=latest.name if latest is not None else None,
            commits=len(commits),
            increment=str(increment),
        )
        return increment

    def release(self, increment: Increment) -> Semver:
        """The next release version after the latest version.

        See the module docstring for the rules. The initial version is
        returned when there are no releases yet.
        """
        latest = self.latest_version()
        if latest is None:
            return self.config.version.initial_version
        resolved = resolve_increment(increment, latest, self.config.version.default_increment)
        return apply_increment(latest, resolved)

    def release_version(self, version: Semver) -> Semver | None:
        """Check a manually chosen version.

        Returns:
            ``version`` when it is newer than the latest release and not
            released yet, None otherwise
        """
        tags = self._release_tags()
        latest = max((tag.version for tag in tags), default=None)
        if latest is not None and not version > latest:
            return None
        if any(tag.version == version for tag in tags):
            return None
        if self.repository.tag_exists(self.config.tag_name(version)):
            return None
        return version

    def create_pre_release(self, increment: Increment) -> Semver:
        """Start a new pre-release.

        The latest version is bumped with ``increment`` and the initial
        pre-release (``rc.1``) is attached. When the latest version already
        is a pre-release it is returned unchanged, as it is when the
        increment is NONE. Without any release the initial version with the
        initial pre-release is returned.
        """
        pre_release = self.config.version.initial_pre_release_id
        latest = self.latest_version()
        if latest is None:
            return self.config.version.initial_version.copy(
                pre_release=pre_release, build_metadata=None
            )
        if latest.is_pre_release or increment == Increment.NONE:
            return latest

        if increment == Increment.PRE_RELEASE:
            increment = Increment.DEFAULT
        resolved = resolve_increment(increment, latest, self.config.version.default_increment)
        return apply_increment(latest, resolved).copy(pre_release=pre_release)

    def promote_to_release(self) -> Semver | None:
        """Turn the latest pre-release into a normal release.

        ``1.0.0-rc.2`` becomes ``1.0.0``. A latest version without a
        pre-release is returned unchanged, which callers treat as
        "nothing to do". Returns None when nothing was released.
        """
        latest = self.latest_version()
        if latest is None or not latest.is_pre_release:
            return latest
        return latest.copy(pre_release=None, build_metadata=None)

    def snapshot(self, version: Semver) -> Semver:
        """Mark a version as a snapshot.

        The snapshot suffix is appended to the pre-release (``1.1.0-rc.1``
        becomes ``1.1.0-rc.1-SNAPSHOT``) or becomes the pre-release
        (``1.1.0-SNAPSHOT``). Build metadata is dropped. Applying it twice
        changes nothing.
        """
        suffix = self.config.version.snapshot_suffix
        if version.pre_release is None:
            pre_release = suffix
        elif self.is_snapshot(version):
            pre_release = str(version.pre_release)
        else:
            pre_release = f"{version.pre_release}-{suffix}"
        return version.copy(pre_release=pre_release, build_metadata=None)

    def is_snapshot(self, version: Semver) -> bool:
        """The pre-release is the snapshot suffix or ends with ``-<suffix>``."""
        if version.pre_release is None:
            return False
        suffix = self.config.version.snapshot_suffix
        pre_release = str(version.pre_release)
        return pre_release == suffix or pre_release.endswith(f"-{suffix}")

    def next_snapshot(self, increment: Increment) -> Semver:
        """The snapshot of the next release version."""
        return self.snapshot(self.release(increment))

    def next_version(
        self,
        increment: Increment | None = None,
        *,
        promote: bool = False,
        pre_release: bool = False,
        version: Semver | str | None = None,
    ) -> ReleaseDecision:
        """Decide which version HEAD should be released as.

        1. If HEAD is tagged, that version is the result; nothing is computed.
        2. A ``version`` override (other than the placeholder) is the candidate.
        3. Otherwise the increment comes from ``increment`` (MAJOR, MINOR,
           PATCH or PRE_RELEASE), falling back to the commit scan, and the
           candidate is derived from the latest version.
        4. The candidate becomes the next version only if there is no
           release yet or it is newer than the latest release.

        Args:
            increment: Explicit increment; DEFAULT and NONE mean "not given"
            promote: Promote the latest pre-release to a release
            pre_release: Create a new pre-release
            version: Explicit next version

        Raises:
            InvalidVersionError: If ``version`` is not a valid version
        """
        current = self.current_version()
        if current is not None:
            log.info("HEAD is already released", version=str(current))
            return ReleaseDecision(current_version=current)

        latest = self.latest_version()
        log.info("latest version", version=str(latest) if latest else None)

        override = Semver.parse(version) if isinstance(version, str) else version
        if override is not None and override == self.config.version.placeholder_version:
            override = None

        if override is not None:
            chosen = Increment.NONE
            candidate: Semver | None = override
        elif promote:
            chosen = Increment.NONE
            candidate = self.promote_to_release()
        else:
            if increment is not None and increment not in (Increment.DEFAULT, Increment.NONE):
                chosen = increment
            else:
                chosen = self.next_increment()
            log.debug("next increment", increment=str(chosen), explicit=increment is not None)
            candidate = self._candidate(latest, chosen, pre_release)

        if candidate is not None and (latest is None or candidate > latest):
            log.info("next version", version=str(candidate), increment=str(chosen))
            next_version = candidate
        else:
            log.info("no new version", candidate=str(candidate) if candidate else None)
            next_version = None

        return ReleaseDecision(
            latest_version=latest,
            next_version=next_version,
            candidate=candidate,
            increment=chosen,
            is_snapshot=next_version is not None and self.is_snapshot(next_version),
        )

    def _candidate(self, latest: Semver | None, increment: Increment, pre_release: bool) -> Semver:
        if pre_release:
            return self.create_pre_release(increment)
        if increment in _NORMAL_INCREMENTS:
            return self.release(increment)
        if increment == Increment.PRE_RELEASE:
            if latest is not None and latest.is_pre_release:
                return self.release(increment)
            return self.create_pre_release(Increment.DEFAULT)
        if self.config.version.use_snapshots:
            return self.next_snapshot(self.config.version.default_increment)
        return self.release(Increment.DEFAULT)
