"""View models derived from resolver API snapshots"""

from dnsboard.views.entries import DomainEntry, BlockEntry, normalize_entries
from dnsboard.views.stats import Stats, derive_stats
from dnsboard.views.activity import ActivitySeries, aggregate_activity
from dnsboard.views.distribution import Distribution, aggregate_distribution
from dnsboard.views.memo import SnapshotMemo

__all__ = [
    "DomainEntry",
    "BlockEntry",
    "normalize_entries",
    "Stats",
    "derive_stats",
    "ActivitySeries",
    "aggregate_activity",
    "Distribution",
    "aggregate_distribution",
    "SnapshotMemo",
]
