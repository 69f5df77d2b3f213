"""
Supabase REST Client
====================

Thin async client for the PostgREST API that Supabase exposes under
``/rest/v1``. Only the operations the store adapters need are provided:
select, insert and update with ``eq`` filters.
"""

from typing import Any, Dict, List, Optional

import httpx

from helpdesk.config import settings
from helpdesk.core import ConfigurationException, ExternalServiceException
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class SupabaseException(ExternalServiceException):
    """Raised when the Supabase REST API fails or is unreachable."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Supabase", message, details)


class SupabaseRestClient:
    """
    Async PostgREST client backed by httpx.

    The underlying ``httpx.AsyncClient`` is created lazily and shared by all
    calls until ``close()``.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._url = (url or settings.supabase_url or "").rstrip("/")
        self._api_key = api_key or settings.supabase_api_key
        if not self._url or not self._api_key:
            raise ConfigurationException("Supabase URL and API key must be configured")

        self._timeout = timeout_seconds or settings.supabase_timeout_seconds
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=f"{self._url}/rest/v1",
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    "apikey": self._api_key,
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                }
            )
        return self._http_client

    @staticmethod
    def _eq_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    async def _send(self, method: str, table: str, **kwargs: Any) -> Any:
        client = await self._get_client()
        try:
            response = await client.request(method, f"/{table}", **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "Supabase request failed",
                extra={"table": table, "method": method, "error": str(e)}
            )
            raise SupabaseException(f"{method} {table} failed: {e}") from e

        if response.status_code >= 400:
            logger.warning(
                "Supabase returned an error status",
                extra={"table": table, "method": method, "status_code": response.status_code}
            )
            raise SupabaseException(
                f"{method} {table} returned {response.status_code}",
                {"status_code": response.status_code, "body": response.text[:500]}
            )

        if not response.content:
            return []
        return response.json()

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        columns: str = "*",
        order: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Select rows from a table.

        Args:
            table: Table name
            filters: Column -> value equality filters
            columns: PostgREST select expression
            order: PostgREST order expression (e.g. ``created_at.desc``)
            limit: Maximum rows to return
        """
        params: Dict[str, Any] = {"select": columns, **self._eq_filters(filters)}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        return await self._send("GET", table, params=params)

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        rows = await self._send(
            "POST", table, json=row, headers={"Prefer": "return=representation"}
        )
        if not rows:
            raise SupabaseException(f"Insert into {table} returned no row")
        return rows[0]

    async def update(
        self,
        table: str,
        filters: Dict[str, Any],
        values: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Update rows matching ``filters`` and return them."""
        return await self._send(
            "PATCH",
            table,
            params=self._eq_filters(filters),
            json=values,
            headers={"Prefer": "return=representation"}
        )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
