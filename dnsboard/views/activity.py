"""Hourly request activity over the last 24 hours"""

import random
import time
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from dnsboard.client.models import QueryLogRecord
from dnsboard.views.constants import DAY_IN_MILLIS
from dnsboard.views.formatting import hours_between, to_datetime

# Corner radius of the rounded end of a bar: (top-left, top-right, bottom-right, bottom-left)
BAR_RADIUS = 4
TOP_ROUNDED = (BAR_RADIUS, BAR_RADIUS, 0, 0)
BOTTOM_ROUNDED = (0, 0, BAR_RADIUS, BAR_RADIUS)

MODE_TOTAL = "total"
MODE_PER_CLIENT = "perClient"
ACTIVITY_MODES = {
    MODE_TOTAL: "Total",
    MODE_PER_CLIENT: "Per-client",
}


def now_millis() -> int:
    return int(time.time() * 1000)


def random_color(rng: Optional[random.Random] = None) -> str:
    """Random hex color, e.g. '#3fa2c0'"""
    rng = rng or random
    return f"#{rng.randrange(0xFFFFFF):06x}"


def in_window(
    logs: Iterable[QueryLogRecord],
    now_ms: int,
    require_client: bool = False,
) -> List[QueryLogRecord]:
    """Records from the last 24 hours, optionally only those with a client id"""
    cutoff = now_ms - DAY_IN_MILLIS
    return [
        q for q in logs
        if q.timestamp * 1000 >= cutoff and (not require_client or q.client)
    ]


@dataclass
class ActivityRow:
    """One hour bucket"""
    hour: int
    total: int = 0
    per_client: Dict[str, int] = field(default_factory=dict)


@dataclass
class ClientSeries:
    """Stacked bar series for one client"""
    client: str
    color: str
    values: List[int]
    radius: Optional[Tuple[int, int, int, int]]


@dataclass
class ActivitySeries:
    """Hour buckets in rolling-window order plus the clients seen"""
    rows: List[ActivityRow]
    clients: List[str]
    colors: Dict[str, str]

    @property
    def hours(self) -> List[int]:
        return [row.hour for row in self.rows]

    def total_series(self) -> List[int]:
        return [row.total for row in self.rows]

    def client_series(self) -> List[ClientSeries]:
        series = []
        for idx, client in enumerate(self.clients):
            series.append(ClientSeries(
                client=client,
                color=self.colors[client],
                values=[row.per_client.get(client, 0) for row in self.rows],
                radius=stacked_bar_radius(idx, len(self.clients)),
            ))
        return series


def stacked_bar_radius(idx: int, count: int) -> Optional[Tuple[int, int, int, int]]:
    """Only the outer segments of a stack get rounded corners"""
    if idx == 0:
        return BOTTOM_ROUNDED
    if idx == count - 1:
        return TOP_ROUNDED
    return None


def aggregate_activity(
    logs: Optional[Sequence[QueryLogRecord]],
    now_ms: Optional[int] = None,
    tz: Optional[tzinfo] = None,
    rng: Optional[random.Random] = None,
) -> Optional[ActivitySeries]:
    """
    Bucket the last 24 hours of queries by hour of day and by client.

    Only records with a client id count. Buckets are ordered the way the
    window runs, which crosses midnight, so the oldest hour comes first.
    Every client gets a color for this pass only.
    """
    if logs is None:
        return None

    if now_ms is None:
        now_ms = now_millis()

    # Drop the partial hour at the start of the window, it repeats at the end
    hours = hours_between(now_ms - DAY_IN_MILLIS, now_ms, tz)[1:]
    buckets: Dict[int, ActivityRow] = {hour: ActivityRow(hour=hour) for hour in hours}
    clients: Dict[str, None] = {}

    for query in in_window(logs, now_ms, require_client=True):
        hour = to_datetime(query.timestamp * 1000, tz).hour
        bucket = buckets.setdefault(hour, ActivityRow(hour=hour))
        bucket.total += 1
        bucket.per_client[query.client] = bucket.per_client.get(query.client, 0) + 1
        clients[query.client] = None

    order = {hour: idx for idx, hour in enumerate(hours)}
    rows = sorted(buckets.values(), key=lambda row: order.get(row.hour, len(order)))

    client_list = list(clients)
    colors = {client: random_color(rng) for client in client_list}

    return ActivitySeries(rows=rows, clients=client_list, colors=colors)
