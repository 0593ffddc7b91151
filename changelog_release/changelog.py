"""
Functions for cutting a release in a changelog that follows the
`Keep a Changelog <https://keepachangelog.com>`_ convention.

A changelog is expected to look something like this:

.. code-block:: markdown

    ## [Unreleased]

    ### Added

    - A new thing.

    ## [1.0.0] - 2023-01-01

    ...

    [unreleased]: https://github.com/owner/repo/compare/v1.0.0...HEAD
    [1.0.0]: https://github.com/owner/repo/releases/tag/v1.0.0

Calling :func:`release()` with a new version inserts a heading for that version right under
``## [Unreleased]`` and rewrites the ``[unreleased]`` link in the footer into a pair of links.

All of the functions here are pure: they take the text of the changelog and return new text.
Reading and writing the file is done by :mod:`changelog_release.cli`.
"""

import logging
import re
from datetime import date as _date
from datetime import datetime
from typing import Iterator, NamedTuple, Optional, Tuple

from .common.exceptions import MissingArgumentError, StructureError

logger = logging.getLogger(__name__)

UNRELEASED_HEADING = "## [Unreleased]"
UNRELEASED_LINK_PREFIX = "[unreleased]: "
RELEASE_HEADING_RE = re.compile(r"## \[(?P<version>.+?)\] - (?P<date>\d\d\d\d-\d\d-\d\d)")

DEFAULT_TAG_PREFIX = "v"

_COMPARE_PATH = "/compare/"
_RELEASE_PATH = "/releases/tag/"


class ReleaseResult(NamedTuple):
    changelog: str
    """
    The full text of the updated changelog.
    """

    changes: str
    """
    What was listed under ``## [Unreleased]`` before the release, stripped of
    leading and trailing whitespace.
    """


def _iter_lines(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yields the offset of the start of each line along with the line itself,
    without its trailing ``\\n``.
    """
    offset = 0
    for line in text.split("\n"):
        yield offset, line
        offset += len(line) + 1


def unreleased_heading_end(text: str) -> int:
    """
    Get the offset right after the first ``## [Unreleased]`` heading.

    :raises StructureError: If there is no ``## [Unreleased]`` heading.
    """
    for offset, line in _iter_lines(text):
        if line.startswith(UNRELEASED_HEADING):
            return offset + len(UNRELEASED_HEADING)
    raise StructureError(f"Unable to locate the '{UNRELEASED_HEADING}' heading")


def latest_release_heading_start(text: str) -> Optional[int]:
    """
    Get the offset of the first release heading (``## [<version>] - <YYYY-MM-DD>``),
    or ``None`` if nothing has been released yet.
    """
    for offset, line in _iter_lines(text):
        if RELEASE_HEADING_RE.match(line):
            return offset
    return None


def unreleased_link_span(text: str) -> Optional[Tuple[int, int]]:
    """
    Get the start and end offsets of the ``[unreleased]: <url>`` link line,
    not including its trailing newline. Returns ``None`` if there is no such line.
    """
    for offset, line in _iter_lines(text):
        if line.startswith(UNRELEASED_LINK_PREFIX) and len(line) > len(UNRELEASED_LINK_PREFIX):
            return offset, offset + len(line)
    return None


def _require_unreleased_link_span(text: str) -> Tuple[int, int]:
    span = unreleased_link_span(text)
    if span is None:
        raise StructureError(f"Unable to locate the '{UNRELEASED_LINK_PREFIX}<url>' link")
    return span


def extract_unreleased_changes(text: str) -> str:
    """
    Get everything between the ``## [Unreleased]`` heading and the latest release heading,
    or the ``[unreleased]`` link if there hasn't been a release yet.
    """
    start = unreleased_heading_end(text)
    end = latest_release_heading_start(text)
    if end is None:
        end, _ = _require_unreleased_link_span(text)
    if end < start:
        raise StructureError(
            f"Expected the '{UNRELEASED_HEADING}' heading to come before any releases "
            "and the link definitions"
        )
    return text[start:end].strip()


def get_latest_version(text: str) -> Optional[str]:
    """
    Get the version from the first release heading, or ``None`` if there isn't one.
    """
    for _, line in _iter_lines(text):
        match = RELEASE_HEADING_RE.match(line)
        if match is not None:
            return match.group("version")
    return None


def version_link(
    repo_url: str,
    new_version: str,
    previous_version: Optional[str] = None,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> str:
    """
    The link for a new version: a comparison with the previous version, or the release page
    for the tag if this is the first release.
    """
    if previous_version is None:
        return f"{repo_url}{_RELEASE_PATH}{tag_prefix}{new_version}"
    return f"{repo_url}{_COMPARE_PATH}{tag_prefix}{previous_version}...{tag_prefix}{new_version}"


def rewrite_links_footer(
    text: str,
    new_version: str,
    repo_url: str,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> str:
    """
    Replace the ``[unreleased]: <url>`` line with a new ``[unreleased]`` link comparing
    ``new_version`` to ``HEAD``, followed by a link for ``new_version`` itself.
    """
    start, end = _require_unreleased_link_span(text)
    latest_version = get_latest_version(text)

    link = version_link(repo_url, new_version, latest_version, tag_prefix=tag_prefix)
    unreleased_link = f"{repo_url}{_COMPARE_PATH}{tag_prefix}{new_version}...HEAD"
    logger.debug("Previous version is %s, new version link is %s", latest_version, link)

    # Both lines go where the old link ends, then the old link is dropped.
    text = text[:end] + f"[{new_version}]: {link}" + text[end:]
    text = text[:end] + f"{UNRELEASED_LINK_PREFIX}{unreleased_link}\n" + text[end:]
    return text[:start] + text[end:]


def insert_new_version_heading(text: str, version: str, date: _date) -> str:
    """
    Insert a ``## [<version>] - <YYYY-MM-DD>`` heading right after ``## [Unreleased]``.
    """
    if isinstance(date, datetime):
        date = date.date()
    position = unreleased_heading_end(text)
    return text[:position] + f"\n\n## [{version}] - {date.isoformat()}" + text[position:]


def release(
    text: str,
    new_version: str,
    date: _date,
    repo_url: str,
    keep_unreleased: bool = False,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> ReleaseResult:
    """
    Release ``new_version`` in the changelog ``text``.

    The unreleased changes are extracted from the original text and returned along with
    the updated changelog. They're only put back into the document, under ``## [Unreleased]``,
    if ``keep_unreleased`` is ``True``.

    .. note::
        The new version heading is inserted directly under ``## [Unreleased]`` with nothing
        copied under it, so without ``keep_unreleased`` the changes that were listed under
        ``## [Unreleased]`` end up following the new heading.

    :param text: The changelog.
    :param new_version: The version to release, e.g. ``"1.2.0"``.
    :param date: The release date.
    :param repo_url: The base URL of the repository, used to build the comparison links.
    :param keep_unreleased: Put the extracted changes back under ``## [Unreleased]``.
    :param tag_prefix: What goes in front of a version to make a tag name.

    :raises StructureError: If the changelog is missing the ``## [Unreleased]`` heading or
        the ``[unreleased]`` link.
    :raises MissingArgumentError: If ``new_version`` or ``repo_url`` is empty.
    """
    if text is None:
        raise MissingArgumentError("text")
    if not new_version:
        raise MissingArgumentError("new_version")
    if not repo_url:
        raise MissingArgumentError("repo_url")
    if date is None:
        raise MissingArgumentError("date")

    changes = extract_unreleased_changes(text)

    text = rewrite_links_footer(text, new_version, repo_url, tag_prefix=tag_prefix)
    text = insert_new_version_heading(text, new_version, date)

    if keep_unreleased:
        position = unreleased_heading_end(text)
        text = text[:position] + f"\n\n{changes}" + text[position:]

    return ReleaseResult(changelog=text, changes=changes)
