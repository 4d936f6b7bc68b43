"""Release provenance: ordering, range resolution, mining and assembly."""

from deploytracker.provenance.aggregator import ProvenanceAggregator
from deploytracker.provenance.assembler import assemble_release
from deploytracker.provenance.miner import HistoryMiner, extract_merge_event
from deploytracker.provenance.ordering import VersionKey, order_tags, parse_version
from deploytracker.provenance.ranges import resolve_oldest_range, resolve_ranges

__all__ = [
    "ProvenanceAggregator",
    "HistoryMiner",
    "extract_merge_event",
    "assemble_release",
    "order_tags",
    "parse_version",
    "VersionKey",
    "resolve_ranges",
    "resolve_oldest_range",
]
