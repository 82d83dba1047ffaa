"""Memoized view models over the polled collections"""

import random
from datetime import tzinfo
from typing import Callable, List, Optional, Tuple

from dnsboard.client.models import QueryLogRecord
from dnsboard.polling import DashboardStore, LIST_ENTRIES, QUERY_LOGS, STATS
from dnsboard.views.activity import ActivitySeries, aggregate_activity
from dnsboard.views.distribution import Distribution, aggregate_distribution
from dnsboard.views.entries import BlockEntry, DomainEntry, normalize_entries
from dnsboard.views.memo import SnapshotMemo
from dnsboard.views.stats import Stats, derive_stats


class DashboardViews:
    """
    Derived collections for the dashboard widgets.

    Each derivation is recomputed as a whole when its collection publishes a
    new snapshot and reused otherwise. Every accessor returns None while its
    collection has no data yet.
    """

    def __init__(
        self,
        store: DashboardStore,
        tz: Optional[tzinfo] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self._entries = SnapshotMemo(normalize_entries)
        self._stats = SnapshotMemo(derive_stats)
        self._activity = SnapshotMemo(lambda logs: aggregate_activity(logs, tz=tz, rng=rng))
        self._distribution = SnapshotMemo(lambda logs: aggregate_distribution(logs, rng=rng))

    def entries(self) -> Tuple[Optional[List[DomainEntry]], Optional[List[BlockEntry]]]:
        return self._entries(self.store.snapshot(LIST_ENTRIES))

    def domains(self) -> Optional[List[DomainEntry]]:
        return self.entries()[0]

    def block_entries(self) -> Optional[List[BlockEntry]]:
        return self.entries()[1]

    def stats(self) -> Optional[Stats]:
        return self._stats(self.store.snapshot(STATS))

    def query_logs(
        self,
        predicate: Optional[Callable[[QueryLogRecord], bool]] = None,
    ) -> Optional[List[QueryLogRecord]]:
        logs = self.store.snapshot(QUERY_LOGS)
        if logs is None or predicate is None:
            return logs
        return [query for query in logs if predicate(query)]

    def activity(self) -> Optional[ActivitySeries]:
        return self._activity(self.store.snapshot(QUERY_LOGS))

    def distribution(self) -> Optional[Distribution]:
        return self._distribution(self.store.snapshot(QUERY_LOGS))
