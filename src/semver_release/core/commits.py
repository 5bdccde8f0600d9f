"""Commit message keyword scanning.

Commits request a version increment by mentioning a configured keyword
anywhere in their message, e.g. ``[minor]`` or ``[major]``. The classifier
scans a log and returns the most significant increment requested.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from semver_release.core.version import Increment
from semver_release.logging import get_logger

if TYPE_CHECKING:
    from semver_release.config.models import GitMessageConfig
    from semver_release.vcs.models import Commit, Message

log = get_logger(__name__)


def full_message(message: Message) -> str:
    """Title, a blank line and the description, as scanned for keywords."""
    return message.full()


def contains_keyword(text: str, keyword: str, ignore_case: bool = False) -> bool:
    """Check whether ``keyword`` occurs in ``text``.

    An empty keyword never matches.
    """
    if not keyword:
        return False
    if ignore_case:
        return keyword.casefold() in text.casefold()
    return keyword in text


def classify(commits: Iterable[Commit], config: GitMessageConfig) -> Increment:
    """Determine the increment requested by a sequence of commits.

    The first commit mentioning the major keyword returns MAJOR right away.
    Otherwise the most significant of MINOR, PATCH and PRE_RELEASE found in
    any commit wins. DEFAULT is returned when no keyword matches, including
    for an empty log.

    Args:
        commits: Commits to scan, usually a Log
        config: Keywords and case sensitivity

    Returns:
        The requested Increment
    """
    keywords = (
        (Increment.MINOR, config.minor),
        (Increment.PATCH, config.patch),
        (Increment.PRE_RELEASE, config.pre_release),
    )
    increment = Increment.DEFAULT

    for commit in commits:
        text = full_message(commit.message)
        if contains_keyword(text, config.major, config.ignore_case):
            log.debug("major keyword found", commit=commit.short_sha)
            return Increment.MAJOR

        for candidate, keyword in keywords:
            if increment >= candidate:
                break
            if contains_keyword(text, keyword, config.ignore_case):
                log.debug("keyword found", commit=commit.short_sha, increment=str(candidate))
                increment = candidate
                break

    return increment
