"""Create, update and delete allow/deny list entries"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, Set

from dnsboard.client import ResolverAPIClient, ResolverError
from dnsboard.polling import DashboardStore, LIST_ENTRIES
from dnsboard.schemas import BlockEntryUpdate, DeleteEntriesRequest, DomainEntryUpdate

logger = logging.getLogger(__name__)


@dataclass
class MutationResult:
    """Outcome of a mutation request"""
    ok: bool
    error: Optional[str] = None


class EntryMutations:
    """
    Sends entry changes to the resolver.

    Input is validated before anything is sent; invalid input raises
    pydantic.ValidationError and makes no request. On success the entries
    collection is marked stale so the next read refetches it. Failures are
    logged and returned, and the collection is left as it was. Nothing is
    retried.
    """

    def __init__(self, client: ResolverAPIClient, store: DashboardStore):
        self.client = client
        self.store = store
        self._background: Set[asyncio.Task] = set()

    async def _submit(self, description: str, request: Callable[[], Awaitable[Any]]) -> MutationResult:
        try:
            await request()
        except ResolverError as e:
            logger.error(f"Failed to {description}: {e}")
            return MutationResult(ok=False, error=str(e))

        logger.info(f"Submitted: {description}")
        self.store.invalidate(LIST_ENTRIES)
        return MutationResult(ok=True)

    async def modify_domain(
        self,
        domain: str,
        ip: str,
        label: Optional[str] = None,
        id: Optional[int] = None,
    ) -> MutationResult:
        """Add a hosts override, or edit the one with the given id"""
        entry = DomainEntryUpdate(domain=domain, ip=ip, label=label, id=id)
        action = "update" if id is not None else "add"
        return await self._submit(
            f"{action} hosts entry {entry.domain} -> {entry.ip}",
            lambda: self.client.modify_entry(entry.to_payload()),
        )

    async def modify_block_entry(
        self,
        block_directive: str,
        label: Optional[str] = None,
        id: Optional[int] = None,
    ) -> MutationResult:
        """Add a block directive, or edit the one with the given id"""
        entry = BlockEntryUpdate(block_directive=block_directive, label=label, id=id)
        action = "update" if id is not None else "add"
        return await self._submit(
            f"{action} {entry.kind.value} entry {entry.block_directive}",
            lambda: self.client.modify_entry(entry.to_payload()),
        )

    async def delete_entries(self, ids: Iterable[int]) -> MutationResult:
        """Delete entries in a single request"""
        request = DeleteEntriesRequest(ids=list(ids))
        return await self._submit(
            f"delete entries {request.ids}",
            lambda: self.client.delete_entries(request.ids),
        )

    def fire_and_forget(self, mutation: Awaitable[MutationResult]) -> asyncio.Task:
        """Run a mutation in the background, for synchronous callers such as row actions"""
        task = asyncio.ensure_future(mutation)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task
