"""Commit range resolution for each release."""

from typing import List, Sequence

import structlog

from deploytracker.errors import SourceQueryError
from deploytracker.extraction.base import BaseVersionSource
from deploytracker.models import FALLBACK_WINDOW, CommitRange

logger = structlog.get_logger(__name__)


def resolve_ranges(
    ordered_tags: Sequence[str],
    source: BaseVersionSource,
    fallback_window: int = FALLBACK_WINDOW,
) -> List[CommitRange]:
    """Map each release to the history attributable to it.

    Ranges follow version order, not commit dates: every release starts at
    the next older tag in ``ordered_tags``. Only the oldest release consults
    the source.

    Args:
        ordered_tags: Release tags, newest version first
        source: Version source used to locate the oldest release's start
        fallback_window: Lookback used when the root commit is unknown

    Returns:
        One CommitRange per tag, in the same order
    """
    ranges = [
        CommitRange(start=older, end=tag)
        for tag, older in zip(ordered_tags, ordered_tags[1:])
    ]
    if ordered_tags:
        ranges.append(resolve_oldest_range(ordered_tags[-1], source, fallback_window))
    return ranges


def resolve_oldest_range(
    tag: str, source: BaseVersionSource, fallback_window: int = FALLBACK_WINDOW
) -> CommitRange:
    """Range for the oldest release: from the root commit, else a lookback window.

    The window is an approximation and may over- or under-include history.
    """
    root = source.root_commit()
    if root is not None:
        return CommitRange(start=root, end=tag)

    window_start = f"{tag}~{fallback_window}"
    try:
        source.resolve_commit(window_start)
    except SourceQueryError:
        # Fewer than fallback_window commits behind the tag: take all of them
        logger.info("fallback_window_clamped", tag=tag, window=fallback_window)
        return CommitRange(start=None, end=tag, approximate=True)

    logger.info("fallback_window_used", tag=tag, window=fallback_window)
    return CommitRange(start=window_start, end=tag, approximate=True)
