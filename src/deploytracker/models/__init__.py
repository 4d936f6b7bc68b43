"""Data models for release provenance."""

from deploytracker.models.config import FALLBACK_WINDOW, RepositoryConfig, Settings
from deploytracker.models.release import CommitRange, MergeEvent, MinedHistory, Release

__all__ = [
    "Release",
    "CommitRange",
    "MergeEvent",
    "MinedHistory",
    "RepositoryConfig",
    "Settings",
    "FALLBACK_WINDOW",
]
