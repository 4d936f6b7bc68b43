"""Version source backed by a local Git repository."""

import threading
from datetime import datetime
from typing import Dict, List, Optional

import git
import structlog
from git import Repo

from deploytracker.errors import RepositoryError, SourceQueryError
from deploytracker.extraction.base import BaseVersionSource
from deploytracker.extraction.patterns import unique
from deploytracker.models import CommitRange, RepositoryConfig

logger = structlog.get_logger(__name__)

_GIT_ERRORS = (git.GitCommandError, git.BadName, ValueError)


class GitVersionSource(BaseVersionSource):
    """Answers version-source queries with GitPython.

    Each thread gets its own ``Repo`` handle: GitPython keeps persistent
    ``git cat-file`` processes per handle and those must not be shared
    between concurrent workers.
    """

    def __init__(self, config: RepositoryConfig) -> None:
        """Initialize the source.

        Args:
            config: Repository configuration

        Raises:
            RepositoryError: If the path is missing or not a Git repository
        """
        self.config = config
        if not config.repo_path.exists():
            raise RepositoryError(f"Repository path does not exist: {config.repo_path}")

        self._local = threading.local()
        self._lock = threading.Lock()
        self._repos: Dict[int, Repo] = {}

        try:
            repo = self.repo
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryError(f"Invalid Git repository: {config.repo_path}") from e

        self._remote_names = unique([*config.remotes, *(remote.name for remote in repo.remotes)])

    @property
    def repo(self) -> Repo:
        """The calling thread's repository handle."""
        repo = getattr(self._local, "repo", None)
        if repo is None:
            repo = Repo(self.config.repo_path)
            self._local.repo = repo
            with self._lock:
                # A reused thread id belongs to a thread that has exited
                previous = self._repos.pop(threading.get_ident(), None)
                if previous is not None:
                    previous.close()
                self._repos[threading.get_ident()] = repo
        return repo

    def release_idle(self) -> None:
        """Close handles opened by threads that have since exited."""
        alive = {thread.ident for thread in threading.enumerate()}
        with self._lock:
            for ident in [ident for ident in self._repos if ident not in alive]:
                self._repos.pop(ident).close()

    def close(self) -> None:
        """Release every repository handle opened by this source."""
        with self._lock:
            for repo in self._repos.values():
                repo.close()
            self._repos.clear()
        self._local = threading.local()

    def __enter__(self) -> "GitVersionSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list_tags(self) -> List[str]:
        try:
            return [tag.name for tag in self.repo.tags]
        except _GIT_ERRORS as e:
            raise SourceQueryError("list_tags", str(self.config.repo_path), str(e)) from e

    def resolve_commit(self, ref: str) -> str:
        try:
            return self.repo.commit(ref).hexsha
        except _GIT_ERRORS as e:
            raise SourceQueryError("resolve_commit", ref, str(e)) from e

    def commit_message(self, commit: str) -> str:
        try:
            return self.repo.commit(commit).message.strip()
        except _GIT_ERRORS as e:
            raise SourceQueryError("commit_message", commit, str(e)) from e

    def commit_date(self, commit: str) -> datetime:
        try:
            return self.repo.commit(commit).committed_datetime
        except _GIT_ERRORS as e:
            raise SourceQueryError("commit_date", commit, str(e)) from e

    def merge_commits_in_range(self, commit_range: CommitRange) -> List[str]:
        try:
            return [commit.hexsha for commit in self.repo.iter_commits(commit_range.rev, merges=True)]
        except _GIT_ERRORS as e:
            raise SourceQueryError("merge_commits_in_range", commit_range.rev, str(e)) from e

    def branches_containing(self, commit: str) -> List[str]:
        try:
            output = self.repo.git.for_each_ref(
                "--contains", commit, "--format=%(refname)", "refs/heads", "refs/remotes"
            )
        except _GIT_ERRORS as e:
            raise SourceQueryError("branches_containing", commit, str(e)) from e

        branches = []
        for refname in output.splitlines():
            name = self._branch_name(refname.strip())
            if name:
                branches.append(name)
        return unique(branches)

    def _branch_name(self, refname: str) -> Optional[str]:
        """Short branch name for a full ref, None for remote HEAD aliases."""
        if refname.startswith("refs/heads/"):
            return refname[len("refs/heads/"):] or None
        if not refname.startswith("refs/remotes/"):
            return None

        remote_path = refname[len("refs/remotes/"):]
        for remote in self._remote_names:
            if remote_path.startswith(f"{remote}/"):
                name = remote_path[len(remote) + 1:]
                break
        else:
            _, _, name = remote_path.partition("/")
        if not name or name == "HEAD":
            return None
        return name

    def is_reachable_from_trunk(self, commit: str) -> bool:
        for trunk in self.config.trunk_branches:
            candidates = [trunk, *(f"{remote}/{trunk}" for remote in self._remote_names)]
            for candidate in candidates:
                try:
                    if self.repo.is_ancestor(commit, candidate):
                        return True
                except _GIT_ERRORS:
                    # Trunk name absent locally or on this remote
                    continue
        return False

    def root_commit(self) -> Optional[str]:
        try:
            output = self.repo.git.rev_list("--max-parents=0", "HEAD")
        except _GIT_ERRORS as e:
            logger.debug("root_commit_unavailable", error=str(e))
            return None

        roots = output.split()
        # Several roots are possible after unrelated-history merges; rev-list
        # lists them newest first.
        return roots[-1] if roots else None
