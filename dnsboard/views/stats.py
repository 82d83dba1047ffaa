"""Dashboard counters derived from the raw stats snapshot"""

from dataclasses import dataclass
from typing import Optional

from dnsboard.client.models import ResponseSource, StatsRaw


@dataclass(frozen=True)
class Stats:
    """Summary shown on the dashboard, in display order"""
    total_requests: int
    blocked_requests: int
    cached_queries_percentage: str
    uptime_percentage: str


STATS_LABELS = {
    "total_requests": "Total Requests",
    "blocked_requests": "Blocked",
    "cached_queries_percentage": "Cached",
    "uptime_percentage": "Uptime",
}


def _percentage(value: float) -> str:
    return f"{value:.2f}%"


def derive_stats(raw: Optional[StatsRaw]) -> Optional[Stats]:
    """Compute totals and percentages; None while no snapshot is available"""
    if raw is None:
        return None

    per_source = raw.per_source_stats
    total = sum(per_source.values())

    if total == 0:
        uptime = "--"
    else:
        uptime = _percentage(100 * (1 - raw.failed_requests_count / total))

    blocked = per_source.get(ResponseSource.DENYLIST.value) or 0

    cached_count = per_source.get(ResponseSource.CACHE.value)
    if total == 0 or not cached_count:
        cached = "0%"
    else:
        cached = _percentage(100 * cached_count / total)

    return Stats(
        total_requests=total,
        blocked_requests=blocked,
        cached_queries_percentage=cached,
        uptime_percentage=uptime,
    )
