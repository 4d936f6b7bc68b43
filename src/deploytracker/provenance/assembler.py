"""Assembly of mined history into one Release record."""

from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional

from deploytracker.extraction.patterns import extract_branch_work_items
from deploytracker.models import CommitRange, MinedHistory, Release


class OrderedSet:
    """Insertion-ordered set of strings compared by exact equality."""

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._items: Dict[str, None] = {}
        self.update(values)

    def add(self, value: str) -> bool:
        """Add ``value``; return False if it was already present."""
        if value in self._items:
            return False
        self._items[value] = None
        return True

    def update(self, values: Iterable[str]) -> None:
        for value in values:
            self.add(value)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def to_list(self) -> List[str]:
        return list(self._items)


def assemble_release(
    tag: str,
    commit_hash: str,
    release_date: datetime,
    is_mainline_commit: bool,
    commit_message: str,
    mined: MinedHistory,
    commit_range: Optional[CommitRange] = None,
) -> Release:
    """Merge the tagged commit's extraction, its merge events and containment results.

    Work items and branches are unioned in discovery order: tagged commit,
    merge events in range order, then containment survivors. The pull request
    comes from the tagged commit when it names one, otherwise from the first
    merge event that does.
    """
    work_items = OrderedSet(mined.endpoint.work_item_ids)
    branches = OrderedSet(mined.endpoint.branches)
    pull_request_id = mined.endpoint.pull_request_id

    for event in mined.merge_events:
        work_items.update(event.work_item_ids)
        branches.update(event.branches)
        if pull_request_id is None and event.pull_request_id:
            pull_request_id = event.pull_request_id

    for branch in mined.containing_branches:
        if branches.add(branch):
            work_items.update(extract_branch_work_items(branch))

    return Release(
        tag=tag,
        commit_hash=commit_hash,
        release_date=release_date,
        is_mainline_commit=is_mainline_commit,
        work_item_ids=work_items.to_list(),
        pull_request_id=pull_request_id,
        branches=branches.to_list(),
        commit_message=commit_message,
        commit_range=commit_range,
    )
