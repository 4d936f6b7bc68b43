"""Unit tests for history mining and release assembly."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from deploytracker.models import CommitRange, MergeEvent, MinedHistory
from deploytracker.provenance.assembler import OrderedSet, assemble_release
from deploytracker.provenance.miner import HistoryMiner, extract_merge_event

RELEASE_DATE = datetime(2024, 3, 1, tzinfo=timezone.utc)


def _assemble(mined):
    return assemble_release(
        tag="v1.1.0",
        commit_hash="abc",
        release_date=RELEASE_DATE,
        is_mainline_commit=True,
        commit_message="msg",
        mined=mined,
    )


class TestOrderedSet:
    def test_first_seen_order(self):
        values = OrderedSet(["b", "a", "b", "c"])
        assert values.to_list() == ["b", "a", "c"]
        assert len(values) == 3

    def test_add_reports_new_values(self):
        values = OrderedSet()
        assert values.add("x")
        assert not values.add("x")
        assert "x" in values

    def test_case_sensitive(self):
        assert OrderedSet(["Fix/1", "fix/1"]).to_list() == ["Fix/1", "fix/1"]


class TestExtractMergeEvent:
    def test_branch_names_contribute_work_items(self):
        event = extract_merge_event("m1", "Merge branch 'fix/123/crash' into main")

        assert event.branches == ["fix/123/crash"]
        assert event.work_item_ids == ["123"]
        assert event.pull_request_id is None

    def test_event_branches_deduplicated(self):
        message = "Merge branch 'feature/1/a' into main\n\nfrom origin/feature/1/a"
        assert extract_merge_event("m1", message).branches == ["feature/1/a"]

    def test_empty_message(self):
        event = extract_merge_event("m1", "")
        assert event == MergeEvent(commit_hash="m1")


class TestAssembleRelease:
    def test_work_items_unioned_once(self):
        mined = MinedHistory(
            endpoint=MergeEvent(commit_hash="abc", work_item_ids=["123"]),
            merge_events=[MergeEvent(commit_hash="m1", work_item_ids=["123", "124"])],
            containing_branches=["fix/123/login"],
        )
        release = _assemble(mined)

        assert release.work_item_ids == ["123", "124"]
        assert release.branches == ["fix/123/login"]

    def test_pull_request_from_endpoint_wins(self):
        mined = MinedHistory(
            endpoint=MergeEvent(commit_hash="abc", pull_request_id="9"),
            merge_events=[MergeEvent(commit_hash="m1", pull_request_id="10")],
        )
        assert _assemble(mined).pull_request_id == "9"

    def test_pull_request_first_merge_event(self):
        mined = MinedHistory(
            endpoint=MergeEvent(commit_hash="abc"),
            merge_events=[
                MergeEvent(commit_hash="m1"),
                MergeEvent(commit_hash="m2", pull_request_id="20"),
                MergeEvent(commit_hash="m3", pull_request_id="30"),
            ],
        )
        assert _assemble(mined).pull_request_id == "20"

    def test_branch_discovery_order(self):
        mined = MinedHistory(
            endpoint=MergeEvent(commit_hash="abc", branches=["feature/3/c"]),
            merge_events=[
                MergeEvent(commit_hash="m1", branches=["fix/1/a", "feature/3/c"]),
                MergeEvent(commit_hash="m2", branches=["chore/2/b"]),
            ],
            containing_branches=["fix/1/a", "hotfix/4/d"],
        )
        release = _assemble(mined)

        assert release.branches == ["feature/3/c", "fix/1/a", "chore/2/b", "hotfix/4/d"]
        assert release.work_item_ids == ["4"]

    def test_no_merges_is_not_an_error(self):
        release = _assemble(MinedHistory(endpoint=MergeEvent(commit_hash="abc")))

        assert release.work_item_ids == []
        assert release.branches == []
        assert release.pull_request_id is None

    def test_release_is_immutable(self):
        release = _assemble(MinedHistory(endpoint=MergeEvent(commit_hash="abc")))
        with pytest.raises(ValidationError):
            release.tag = "v9.9.9"


class TestHistoryMiner:
    def test_mine_collects_all_sources(self, fake_source_class):
        source = fake_source_class(
            tags=["v1.0.0"],
            messages={"m1": "Merged PR 5: from origin/feature/8/x\n\nAB#8", "m2": "Merge branch 'fix/9' into main"},
            merges={"v1.0.0": ["m1", "m2"]},
            containing={"c-v1.0.0": ["main", "feature/8/x", "chore/11/y", "release/1.0"]},
        )
        miner = HistoryMiner(source)
        mined = miner.mine(CommitRange(start="root", end="v1.0.0"), "c-v1.0.0", "Release")

        assert [event.commit_hash for event in mined.merge_events] == ["m1", "m2"]
        assert mined.merge_events[0].pull_request_id == "5"
        assert mined.merge_events[0].branches == ["feature/8/x"]
        assert mined.merge_events[1].work_item_ids == ["9"]
        assert mined.containing_branches == ["feature/8/x", "chore/11/y"]
        assert mined.endpoint.commit_hash == "c-v1.0.0"

    def test_range_without_merges(self, fake_source_class):
        source = fake_source_class(tags=["v1.0.0"])
        mined = HistoryMiner(source).mine(CommitRange(end="v1.0.0"), "c-v1.0.0", "")

        assert mined.merge_events == []
        assert mined.containing_branches == []
