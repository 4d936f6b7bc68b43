"""Release provenance aggregation across all tags."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import structlog

from deploytracker.extraction.base import BaseVersionSource
from deploytracker.models import CommitRange, Release, RepositoryConfig
from deploytracker.models.config import DEFAULT_REMOTES, FALLBACK_WINDOW
from deploytracker.provenance.assembler import assemble_release
from deploytracker.provenance.miner import HistoryMiner
from deploytracker.provenance.ordering import order_tags
from deploytracker.provenance.ranges import resolve_ranges

logger = structlog.get_logger(__name__)


class ProvenanceAggregator:
    """Builds one provenance record per release tag.

    Tag ordering and range resolution run first, sequentially. Each release
    is then mined and assembled independently on a bounded thread pool, and
    the results are returned newest version first regardless of which
    finished first. A release whose queries fail is logged and skipped.
    """

    def __init__(
        self,
        source: BaseVersionSource,
        config: Optional[RepositoryConfig] = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            source: Version source to query
            config: Repository configuration; defaults are used when omitted
        """
        self.source = source
        self.config = config
        self.max_workers = config.max_workers if config else 4
        self.fallback_window = config.fallback_window if config else FALLBACK_WINDOW
        self.miner = HistoryMiner(source, config.remotes if config else DEFAULT_REMOTES)

    def plan(self) -> List[CommitRange]:
        """Order the release tags and resolve the range of each.

        Returns:
            One CommitRange per release, newest version first; empty when
            the repository has no release tags
        """
        tags = self.source.list_tags()
        if not tags:
            logger.info("no_tags_found")
            return []

        ordered = order_tags(tags)
        if not ordered:
            logger.info("no_release_tags", tags=len(tags))
            return []

        return resolve_ranges(ordered, self.source, self.fallback_window)

    def build_release(self, commit_range: CommitRange) -> Release:
        """Mine and assemble a single release ending at ``commit_range.end``.

        Raises:
            SourceQueryError: If the version source fails for this release
        """
        tag = commit_range.end
        commit = self.source.resolve_commit(tag)
        message = self.source.commit_message(commit)

        mined = self.miner.mine(commit_range, commit, message)

        return assemble_release(
            tag=tag,
            commit_hash=commit,
            release_date=self.source.commit_date(commit),
            is_mainline_commit=self.source.is_reachable_from_trunk(commit),
            commit_message=message,
            mined=mined,
            commit_range=commit_range,
        )

    async def collect_async(self) -> List[Release]:
        """Collect provenance for every release, mining releases concurrently.

        Returns:
            Release records, newest version first
        """
        ranges = self.plan()
        if not ranges:
            return []

        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="deploytracker"
        ) as executor:
            tasks = [
                loop.run_in_executor(executor, self.build_release, commit_range)
                for commit_range in ranges
            ]
            results = await asyncio.gather(*tasks, return_exceptions=True)
        self.source.release_idle()

        releases = []
        for commit_range, result in zip(ranges, results):
            if isinstance(result, Exception):
                logger.warning("release_skipped", tag=commit_range.end, error=str(result))
                continue
            releases.append(result)

        logger.info("releases_collected", collected=len(releases), skipped=len(ranges) - len(releases))
        return releases

    def collect(self) -> List[Release]:
        """Synchronous wrapper around :meth:`collect_async`."""
        return asyncio.run(self.collect_async())
