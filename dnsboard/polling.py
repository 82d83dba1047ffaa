"""Polled collections: the last-poll cache for each remote dataset

Each named collection keeps the most recent snapshot fetched from the
resolver API and moves through Fresh -> Stale -> Fetching -> Fresh. A
successful mutation marks a collection stale, and the next read fetches it
again before answering.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from dnsboard.client import ResolverAPIClient, ResolverError
from dnsboard.config import PollingConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

LIST_ENTRIES = "list-entries"
QUERY_LOGS = "query-logs"
STATS = "stats"


class CollectionState(Enum):
    """Freshness of a polled collection"""
    FRESH = "fresh"
    STALE = "stale"
    FETCHING = "fetching"


@dataclass
class CollectionStatus:
    """Status of a polled collection"""
    state: CollectionState
    has_data: bool
    last_fetch: Optional[datetime] = None
    last_success: Optional[datetime] = None
    error_message: Optional[str] = None


class PolledCollection(Generic[T]):
    """A named dataset refreshed from the API on a fixed interval"""

    def __init__(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[T]],
        interval_seconds: int,
    ):
        self.key = key
        self.interval_seconds = interval_seconds
        self._fetcher = fetcher

        self._snapshot: Optional[T] = None
        self._error: Optional[str] = None
        self._state = CollectionState.STALE  # Never fetched
        self._generation = 0
        self._last_fetch: Optional[datetime] = None
        self._last_success: Optional[datetime] = None

    @property
    def snapshot(self) -> Optional[T]:
        """Last successfully fetched value, replaced as a whole on each poll"""
        return self._snapshot

    @property
    def error(self) -> Optional[str]:
        """Error of the last poll, cleared by the next successful one"""
        return self._error

    @property
    def state(self) -> CollectionState:
        return self._state

    @property
    def is_pending(self) -> bool:
        """No data and no error yet"""
        return self._snapshot is None and self._error is None

    async def refresh(self) -> Optional[T]:
        """Fetch now. Transport errors are recorded, not raised."""
        generation = self._generation
        self._state = CollectionState.FETCHING
        self._last_fetch = datetime.utcnow()

        try:
            data = await self._fetcher()
        except ResolverError as e:
            self._error = str(e)
            self._state = CollectionState.STALE
            logger.warning(f"Polling {self.key} failed: {e}")
            return self._snapshot
        except BaseException:
            self._state = CollectionState.STALE
            raise

        # A late response still wins; it is only fresh if nothing invalidated it meanwhile
        self._snapshot = data
        self._error = None
        self._last_success = datetime.utcnow()
        if generation == self._generation:
            self._state = CollectionState.FRESH
        else:
            self._state = CollectionState.STALE
        logger.debug(f"Polled {self.key}")
        return data

    def invalidate(self) -> None:
        self._generation += 1
        self._state = CollectionState.STALE

    async def read(self) -> Optional[T]:
        """Current snapshot, fetching first when the collection is stale"""
        if self._state == CollectionState.STALE:
            await self.refresh()
        return self._snapshot

    def status(self) -> CollectionStatus:
        return CollectionStatus(
            state=self._state,
            has_data=self._snapshot is not None,
            last_fetch=self._last_fetch,
            last_success=self._last_success,
            error_message=self._error,
        )


class DashboardStore:
    """The collections the dashboard polls, keyed by name"""

    def __init__(self, client: ResolverAPIClient, polling: Optional[PollingConfig] = None):
        self.client = client
        polling = polling or PollingConfig()

        self.collections: Dict[str, PolledCollection[Any]] = {
            LIST_ENTRIES: PolledCollection(
                LIST_ENTRIES, client.get_list_entries, polling.entries_seconds
            ),
            QUERY_LOGS: PolledCollection(
                QUERY_LOGS, client.get_query_logs, polling.logs_seconds
            ),
            STATS: PolledCollection(
                STATS, client.get_stats, polling.stats_seconds
            ),
        }

    def collection(self, key: str) -> PolledCollection[Any]:
        try:
            return self.collections[key]
        except KeyError:
            raise ValueError(f"Unknown collection: {key}")

    def invalidate(self, key: str) -> None:
        logger.info(f"Marking {key} stale")
        self.collection(key).invalidate()

    async def refresh(self, key: str) -> Any:
        return await self.collection(key).refresh()

    async def refresh_all(self) -> None:
        for collection in self.collections.values():
            await collection.refresh()

    async def read(self, key: str) -> Any:
        return await self.collection(key).read()

    def snapshot(self, key: str) -> Any:
        return self.collection(key).snapshot

    def status(self) -> Dict[str, CollectionStatus]:
        return {key: collection.status() for key, collection in self.collections.items()}
