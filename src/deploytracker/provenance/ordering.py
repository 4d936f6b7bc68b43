"""Release ordering by semantic version."""

import re
from typing import Iterable, List, NamedTuple

import structlog

from deploytracker.errors import TagParseError

logger = structlog.get_logger(__name__)

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


class VersionKey(NamedTuple):
    """Numeric (major, minor, patch) triple of a release tag."""

    major: int
    minor: int
    patch: int


def parse_version(tag: str) -> VersionKey:
    """Parse ``[v]MAJOR.MINOR.PATCH`` into a comparable key.

    Raises:
        TagParseError: If the tag does not have three numeric segments
    """
    match = _VERSION_RE.match(tag.strip())
    if match is None:
        raise TagParseError(tag)
    return VersionKey(*(int(segment) for segment in match.groups()))


def order_tags(tags: Iterable[str]) -> List[str]:
    """Order release tags newest version first.

    Unparseable tags are logged and left out. Tags with equal versions keep
    their input order. Duplicate names are kept once.
    """
    keyed = []
    for tag in dict.fromkeys(tags):
        try:
            keyed.append((parse_version(tag), tag))
        except TagParseError as e:
            logger.warning("tag_skipped", tag=tag, reason=e.reason)

    # sorted() is stable, so reverse=True keeps ties in input order
    keyed = sorted(keyed, key=lambda item: item[0], reverse=True)
    return [tag for _, tag in keyed]
