"""Merge history mining for a release range."""

from typing import List, Sequence

import structlog

from deploytracker.extraction.base import BaseVersionSource
from deploytracker.extraction.patterns import (
    extract_branch_work_items,
    extract_merge_branches,
    extract_pull_request,
    extract_work_items,
    filter_provenance_branches,
    unique,
)
from deploytracker.models import CommitRange, MergeEvent, MinedHistory
from deploytracker.models.config import DEFAULT_REMOTES

logger = structlog.get_logger(__name__)


def extract_merge_event(
    commit: str, message: str, remotes: Sequence[str] = DEFAULT_REMOTES
) -> MergeEvent:
    """Run every message extractor over one commit message.

    Branch names found in the message also contribute the work item encoded
    in them, if any.
    """
    branches = extract_merge_branches(message, remotes)
    work_items = extract_work_items(message)
    for branch in branches:
        work_items.extend(extract_branch_work_items(branch))

    return MergeEvent(
        commit_hash=commit,
        work_item_ids=unique(work_items),
        pull_request_id=extract_pull_request(message),
        branches=unique(branches),
    )


class HistoryMiner:
    """Extracts work items, pull requests and branches from a commit range."""

    def __init__(self, source: BaseVersionSource, remotes: Sequence[str] = DEFAULT_REMOTES) -> None:
        """Initialize the miner.

        Args:
            source: Version source to query
            remotes: Remote names stripped from branch names found in messages
        """
        self.source = source
        self.remotes = list(remotes)

    def extract_event(self, commit: str, message: str) -> MergeEvent:
        return extract_merge_event(commit, message, self.remotes)

    def mine_merges(self, commit_range: CommitRange) -> List[MergeEvent]:
        """Extract every merge commit in the range, in source order."""
        events = []
        for commit in self.source.merge_commits_in_range(commit_range):
            events.append(self.extract_event(commit, self.source.commit_message(commit)))

        if not events:
            logger.debug("no_merges_in_range", range=str(commit_range))
        return events

    def mine_containing_branches(self, commit: str) -> List[str]:
        """Work branches that contain ``commit``.

        Recovers provenance when merge commits were squashed or rebased away.
        """
        return filter_provenance_branches(self.source.branches_containing(commit))

    def mine(self, commit_range: CommitRange, endpoint: str, endpoint_message: str) -> MinedHistory:
        """Mine everything attributable to a release.

        Args:
            commit_range: Range ending at the release tag
            endpoint: Hash of the tagged commit
            endpoint_message: Full message of the tagged commit

        Returns:
            MinedHistory for the assembler
        """
        history = MinedHistory(
            endpoint=self.extract_event(endpoint, endpoint_message),
            merge_events=self.mine_merges(commit_range),
            containing_branches=self.mine_containing_branches(endpoint),
        )
        logger.debug(
            "range_mined",
            range=str(commit_range),
            merges=len(history.merge_events),
            containing=len(history.containing_branches),
        )
        return history
