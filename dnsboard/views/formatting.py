"""Date helpers for the dashboard views"""

from datetime import datetime, tzinfo
from typing import List, Optional

from dnsboard.views.constants import HOUR_IN_MILLIS


def to_datetime(timestamp_ms: float, tz: Optional[tzinfo] = None) -> datetime:
    """Millisecond timestamp to datetime (local time unless tz is given)"""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz)


def format_date(timestamp_ms: float, tz: Optional[tzinfo] = None) -> str:
    """Format a millisecond timestamp as locale date and time"""
    date = to_datetime(timestamp_ms, tz)
    return f"{date.strftime('%x')} {date.strftime('%X')}"


def hours_between(start_ms: float, end_ms: float, tz: Optional[tzinfo] = None) -> List[int]:
    """
    Hour-of-day values from the hour containing start up to end.

    Both ends are included, so a 24 hour window yields 25 values whose first
    and last entries are the same hour of day.
    """
    if start_ms > end_ms:
        raise ValueError("Start date must be before end date")

    start = to_datetime(start_ms, tz).replace(minute=0, second=0, microsecond=0)
    current = start.timestamp() * 1000

    hours = []
    while current <= end_ms:
        hours.append(to_datetime(current, tz).hour)
        current += HOUR_IN_MILLIS

    return hours


def format_hour(hour) -> str:
    """Axis label for an hour bucket, e.g. 7 -> '07:00'"""
    return f"{int(hour):02d}:00"
