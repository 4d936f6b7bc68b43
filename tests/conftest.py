"""Shared fixtures: an in-memory version source and a real temporary repository."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import git
import pytest

from deploytracker.errors import SourceQueryError
from deploytracker.extraction.base import BaseVersionSource
from deploytracker.models import CommitRange


class FakeVersionSource(BaseVersionSource):
    """Version source answering from dictionaries.

    Tags map to commit hashes of the form ``c-<tag>``. Merge commits are keyed
    by the range end (the tag). Any ref listed in ``failing`` raises
    SourceQueryError from every query that touches it.
    """

    def __init__(
        self,
        tags: Iterable[str] = (),
        messages: Optional[Dict[str, str]] = None,
        merges: Optional[Dict[str, List[str]]] = None,
        containing: Optional[Dict[str, List[str]]] = None,
        trunk: Iterable[str] = (),
        root: Optional[str] = "root",
        resolvable: Iterable[str] = (),
        failing: Iterable[str] = (),
    ) -> None:
        self.tags = list(tags)
        self.messages = messages or {}
        self.merges = merges or {}
        self.containing = containing or {}
        self.trunk = set(trunk)
        self.root = root
        self.resolvable = set(resolvable)
        self.failing = set(failing)
        self.requested_ranges: List[CommitRange] = []
        self.trunk_queries: List[str] = []
        self.idle_releases = 0

    def _check(self, query: str, ref: str) -> None:
        if ref in self.failing or ref.replace("c-", "", 1) in self.failing:
            raise SourceQueryError(query, ref, "simulated failure")

    def release_idle(self) -> None:
        self.idle_releases += 1

    def list_tags(self) -> List[str]:
        return list(self.tags)

    def resolve_commit(self, ref: str) -> str:
        self._check("resolve_commit", ref)
        if ref in self.tags:
            return f"c-{ref}"
        if ref in self.resolvable:
            return f"c-{ref}"
        raise SourceQueryError("resolve_commit", ref, "unknown revision")

    def commit_message(self, commit: str) -> str:
        self._check("commit_message", commit)
        return self.messages.get(commit, "")

    def commit_date(self, commit: str) -> datetime:
        self._check("commit_date", commit)
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        return base + timedelta(days=len(commit))

    def merge_commits_in_range(self, commit_range: CommitRange) -> List[str]:
        self._check("merge_commits_in_range", commit_range.end)
        self.requested_ranges.append(commit_range)
        return list(self.merges.get(commit_range.end, []))

    def branches_containing(self, commit: str) -> List[str]:
        self._check("branches_containing", commit)
        return list(self.containing.get(commit, []))

    def is_reachable_from_trunk(self, commit: str) -> bool:
        self.trunk_queries.append(commit)
        return commit in self.trunk

    def root_commit(self) -> Optional[str]:
        return self.root


@pytest.fixture
def fake_source_class():
    """The FakeVersionSource class, for tests that build their own."""
    return FakeVersionSource


def _commit(repo: git.Repo, path: Path, name: str, content: str, message: str) -> None:
    (path / name).write_text(content)
    repo.git.add(name)
    repo.git.commit("-m", message)


@pytest.fixture
def release_repo():
    """Create a temporary repository with three release tags.

    History::

        v1.0.0  Initial commit (main)
                feature/100/login branched, one commit, merged --no-ff
        v1.1.0  "Merged PR 42: ..." on main (annotated tag)
                feature/200/next created at v1.1.0, no new commits
        v1.1.1  commit on hotfix/9/side, never merged into main
        nightly non-release tag on main
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        repo = git.Repo.init(repo_path)

        # Configure git
        with repo.config_writer() as writer:
            writer.set_value("user", "name", "Test User")
            writer.set_value("user", "email", "test@example.com")
            writer.set_value("commit", "gpgsign", "false")
            writer.set_value("tag", "gpgsign", "false")

        _commit(repo, repo_path, "README.md", "# Test Project\n", "Initial commit")
        repo.git.branch("-M", "main")
        repo.create_tag("v1.0.0")

        repo.git.checkout("-b", "feature/100/login")
        _commit(repo, repo_path, "login.py", "def login():\n    pass\n", "Add login\n\nAB#100")
        repo.git.checkout("main")
        repo.git.merge("--no-ff", "feature/100/login", "-m", "Merge branch 'feature/100/login' into main")

        _commit(
            repo,
            repo_path,
            "CHANGELOG.md",
            "1.1.0\n",
            "Merged PR 42: Release 1.1\n\nRelated work items: #101",
        )
        repo.create_tag("v1.1.0", message="Release 1.1.0")
        repo.create_tag("nightly")
        repo.git.branch("feature/200/next")

        repo.git.checkout("-b", "hotfix/9/side")
        _commit(repo, repo_path, "hotfix.py", "FIX = True\n", "Hotfix side release")
        repo.create_tag("v1.1.1")
        repo.git.checkout("main")

        yield repo_path
        repo.close()
