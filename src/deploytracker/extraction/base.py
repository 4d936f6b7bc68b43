"""Base class for version sources."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from deploytracker.models import CommitRange


class BaseVersionSource(ABC):
    """Read-only queries against a version-control backend.

    Implementations raise :class:`deploytracker.errors.SourceQueryError` when a
    query fails for a specific ref or range.
    """

    @abstractmethod
    def list_tags(self) -> List[str]:
        """Return all tag names."""
        pass

    @abstractmethod
    def resolve_commit(self, ref: str) -> str:
        """Resolve a ref (tag, branch, ``tag~N``) to a full commit hash."""
        pass

    @abstractmethod
    def commit_message(self, commit: str) -> str:
        """Return the full message of a commit."""
        pass

    @abstractmethod
    def commit_date(self, commit: str) -> datetime:
        """Return the committer date of a commit."""
        pass

    @abstractmethod
    def merge_commits_in_range(self, commit_range: CommitRange) -> List[str]:
        """Return merge commits in ``commit_range``, newest first.

        The start of the range is excluded, the end included.
        """
        pass

    @abstractmethod
    def branches_containing(self, commit: str) -> List[str]:
        """Return local and remote branch names that contain ``commit``."""
        pass

    @abstractmethod
    def is_reachable_from_trunk(self, commit: str) -> bool:
        """Whether ``commit`` is an ancestor of the designated trunk branch."""
        pass

    @abstractmethod
    def root_commit(self) -> Optional[str]:
        """Return the repository's root commit, or None if it cannot be found."""
        pass

    def release_idle(self) -> None:
        """Free per-thread resources left behind by finished worker threads."""
        pass
