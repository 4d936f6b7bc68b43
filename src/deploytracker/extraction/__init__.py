"""Version source adapters and identifier extraction."""

from deploytracker.extraction.base import BaseVersionSource
from deploytracker.extraction.git_source import GitVersionSource
from deploytracker.extraction.patterns import (
    ALL_PATTERNS,
    ExtractionPattern,
    extract_branch_work_items,
    extract_merge_branches,
    extract_pull_request,
    extract_work_items,
    filter_provenance_branches,
    is_provenance_branch,
)

__all__ = [
    "BaseVersionSource",
    "GitVersionSource",
    "ExtractionPattern",
    "ALL_PATTERNS",
    "extract_work_items",
    "extract_pull_request",
    "extract_branch_work_items",
    "extract_merge_branches",
    "is_provenance_branch",
    "filter_provenance_branches",
]
