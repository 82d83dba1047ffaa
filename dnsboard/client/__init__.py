"""Resolver API client

Talks to the resolver's management API: counters, allow/deny list entries
and the recent query log.
"""

from dnsboard.client.client import ResolverAPIClient
from dnsboard.client.models import (
    EntryKind,
    ResponseSource,
    ListEntryRaw,
    QueryLogRecord,
    StatsRaw,
)
from dnsboard.client.exceptions import (
    ResolverError,
    ResolverConnectionError,
    ResolverAPIError,
    ResolverResponseError,
)

__all__ = [
    "ResolverAPIClient",
    "EntryKind",
    "ResponseSource",
    "ListEntryRaw",
    "QueryLogRecord",
    "StatsRaw",
    "ResolverError",
    "ResolverConnectionError",
    "ResolverAPIError",
    "ResolverResponseError",
]
