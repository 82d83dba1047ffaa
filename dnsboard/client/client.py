"""Resolver API Client

REST API client for the resolver's management API.
"""

import httpx
import logging
from typing import Optional, Dict, Any, List, Callable, TypeVar

from dnsboard.client.models import ListEntryRaw, QueryLogRecord, StatsRaw
from dnsboard.version import get_user_agent
from dnsboard.client.exceptions import (
    ResolverError,
    ResolverAPIError,
    ResolverConnectionError,
    ResolverResponseError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolverAPIClient:
    """Client for the resolver management REST API"""

    def __init__(
        self,
        base_url: str,
        verify_ssl: bool = False,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.verify_ssl = verify_ssl
        self.timeout = timeout

        self._transport = transport
        self._session: Optional[httpx.AsyncClient] = None

    async def _get_session(self) -> httpx.AsyncClient:
        """Get or create HTTP session"""
        if self._session is None:
            self._session = httpx.AsyncClient(
                verify=self.verify_ssl,
                timeout=self.timeout,
                follow_redirects=True,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": get_user_agent(),
                },
                transport=self._transport,
            )
        return self._session

    async def close(self) -> None:
        """Close session"""
        if self._session:
            await self._session.aclose()
            self._session = None

    async def _api_request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        """Make an API request and return the decoded JSON body"""
        session = await self._get_session()
        url = f"{self.base_url}/{endpoint}"

        try:
            if method.upper() == "GET":
                response = await session.get(url)
            else:
                response = await session.request(method, url, json=body)
        except httpx.RequestError as e:
            raise ResolverConnectionError(f"Request to {endpoint} failed: {str(e)}")

        if response.status_code >= 400:
            raise ResolverAPIError(
                f"API request failed (HTTP {response.status_code}): {method} {endpoint}",
                status_code=response.status_code,
            )

        # Mutations answer with an empty body
        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ResolverResponseError(f"Invalid JSON from {endpoint}: {str(e)}")

    def _parse_list(
        self,
        data: Any,
        parser: Callable[[Dict[str, Any]], T],
        endpoint: str,
    ) -> List[T]:
        """Parse a JSON array, skipping records that do not fit the model"""
        if not isinstance(data, list):
            raise ResolverResponseError(f"Expected a list from {endpoint}")

        items = []
        for raw in data:
            try:
                items.append(parser(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed record from {endpoint}: {e}")
        return items

    async def get_stats(self) -> StatsRaw:
        """Get server counters"""
        data = await self._api_request("stats")
        if not isinstance(data, dict):
            raise ResolverResponseError("Expected an object from stats")
        try:
            return StatsRaw.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ResolverResponseError(f"Malformed stats: {e}")

    async def get_list_entries(self) -> List[ListEntryRaw]:
        """Get all allow/deny list entries"""
        data = await self._api_request("entry")
        return self._parse_list(data, ListEntryRaw.from_dict, "entry")

    async def get_query_logs(self) -> List[QueryLogRecord]:
        """Get the recent query log"""
        data = await self._api_request("logs")
        return self._parse_list(data, QueryLogRecord.from_dict, "logs")

    async def modify_entry(self, payload: Dict[str, Any]) -> None:
        """Create an entry, or update it when the payload carries an id"""
        await self._api_request("entry", method="POST", body=payload)

    async def delete_entries(self, ids: List[int]) -> None:
        """Delete entries by id"""
        await self._api_request("entry", method="DELETE", body=list(ids))

    async def test_connection(self) -> Dict[str, Any]:
        """Test connection and return status info"""
        try:
            stats = await self.get_stats()
            return {
                "connected": True,
                "failed_requests_count": stats.failed_requests_count,
            }
        except ResolverError as e:
            return {"connected": False, "error": str(e)}
