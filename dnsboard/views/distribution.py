"""Query type and outcome distribution over the last 24 hours"""

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from dnsboard.client.models import QueryLogRecord
from dnsboard.views.activity import in_window, now_millis, random_color
from dnsboard.views.constants import UNKNOWN_SOURCE, query_type_label, response_source_label

VIEW_TYPE = "type"
VIEW_STATUS = "status"
DISTRIBUTION_VIEWS = {
    VIEW_TYPE: "Query Type",
    VIEW_STATUS: "Status",
}


@dataclass
class Slice:
    """One pie slice"""
    value: str  # dimension value, e.g. "28" or "unknown"
    label: str
    total: int
    color: str


@dataclass
class Distribution:
    """Both groupings of the same window; the view toggle picks one"""
    total: int
    by_type: List[Slice]
    by_status: List[Slice]

    def view(self, name: str) -> List[Slice]:
        if name == VIEW_TYPE:
            return self.by_type
        if name == VIEW_STATUS:
            return self.by_status
        raise ValueError(f"Unknown distribution view: {name}")


def aggregate_distribution(
    logs: Optional[Sequence[QueryLogRecord]],
    now_ms: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Distribution]:
    """Count the last 24 hours of queries by query type and by outcome code"""
    if logs is None:
        return None

    if now_ms is None:
        now_ms = now_millis()

    window = in_window(logs, now_ms)

    by_qtype: Dict[str, int] = {}
    by_status: Dict[str, int] = {}
    for query in window:
        qtype = str(query.qtype)
        by_qtype[qtype] = by_qtype.get(qtype, 0) + 1

        status = UNKNOWN_SOURCE if query.source is None else str(query.source)
        by_status[status] = by_status.get(status, 0) + 1

    return Distribution(
        total=len(window),
        by_type=[
            Slice(value=qtype, label=query_type_label(qtype), total=total, color=random_color(rng))
            for qtype, total in by_qtype.items()
        ],
        by_status=[
            Slice(
                value=status,
                label=response_source_label(None if status == UNKNOWN_SOURCE else status),
                total=total,
                color=random_color(rng),
            )
            for status, total in by_status.items()
        ],
    )
