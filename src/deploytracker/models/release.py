"""Data models for release provenance."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommitRange(BaseModel):
    """History attributable to one release: ``(start, end]``."""

    model_config = ConfigDict(frozen=True)

    start: Optional[str] = Field(None, description="Exclusive start revision; None means the repository root")
    end: str = Field(..., description="Inclusive end revision (the release tag)")
    approximate: bool = Field(
        False, description="True when start is a fixed-size lookback window rather than a real boundary"
    )

    @property
    def rev(self) -> str:
        """Revision expression understood by ``git rev-list``."""
        if self.start is None:
            return self.end
        return f"{self.start}..{self.end}"

    def __str__(self) -> str:
        return f"({self.start or 'root'}, {self.end}]"


class MergeEvent(BaseModel):
    """Identifiers extracted from a single commit message."""

    commit_hash: str = Field(..., description="Commit the identifiers were extracted from")
    work_item_ids: List[str] = Field(default_factory=list, description="Work item IDs, deduplicated")
    pull_request_id: Optional[str] = Field(None, description="Pull request ID, if the message names one")
    branches: List[str] = Field(default_factory=list, description="Source branch names mentioned in the message")


class MinedHistory(BaseModel):
    """Everything mined for one release range, before assembly."""

    endpoint: MergeEvent = Field(..., description="Extraction from the tagged commit itself")
    merge_events: List[MergeEvent] = Field(default_factory=list, description="Merge commits in range order")
    containing_branches: List[str] = Field(
        default_factory=list, description="Provenance branches that contain the tagged commit"
    )


class Release(BaseModel):
    """Provenance record for one released version."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "tag": "v1.1.0",
                "commit_hash": "abc123def456",
                "release_date": "2024-01-15T10:30:00Z",
                "is_mainline_commit": True,
                "work_item_ids": ["100", "101"],
                "pull_request_id": "42",
                "branches": ["feature/100-foo"],
                "commit_message": "Merged PR 42: Related work items: #100, #101",
            }
        },
    )

    tag: str = Field(..., description="Release tag name")
    commit_hash: str = Field(..., description="Commit the tag points at")
    release_date: datetime = Field(..., description="Commit date of the tagged commit")
    is_mainline_commit: bool = Field(False, description="Whether the tagged commit is reachable from trunk")
    work_item_ids: List[str] = Field(default_factory=list, description="Work item IDs, deduplicated, first-seen order")
    pull_request_id: Optional[str] = Field(None, description="Pull request that produced the release")
    branches: List[str] = Field(default_factory=list, description="Contributing branches, first-seen order")
    commit_message: str = Field("", description="Full message of the tagged commit")
    commit_range: Optional[CommitRange] = Field(None, description="History range the record was mined from")
