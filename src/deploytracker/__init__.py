"""deploytracker: release provenance mined from Git history."""

from deploytracker.extraction import GitVersionSource
from deploytracker.models import CommitRange, MergeEvent, Release, RepositoryConfig
from deploytracker.provenance import ProvenanceAggregator

__version__ = "0.1.0"

__all__ = [
    "GitVersionSource",
    "ProvenanceAggregator",
    "Release",
    "CommitRange",
    "MergeEvent",
    "RepositoryConfig",
]
