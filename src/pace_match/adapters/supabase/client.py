"""Thin async PostgREST client for the hosted store.

Speaks the REST dialect the hosted backend exposes under ``/rest/v1``:

- ``GET    /{table}?select=...&col=eq.value&order=col.desc&limit=n``
- ``PATCH  /{table}?col=eq.value``
- ``POST   /rpc/{function}``

Every failure (transport or non-2xx) surfaces as ``RemoteFailureError``
carrying the store's own message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import orjson
import structlog

from pace_match.domain.errors import RemoteFailureError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pace_match.settings import SupabaseSettings

log = structlog.get_logger(__name__)


def _eq_filters(filters: Mapping[str, Any]) -> dict[str, str]:
    """Translate ``{column: value}`` into PostgREST ``column=eq.value`` params."""
    return {column: f"eq.{value}" for column, value in filters.items()}


def _error_message(response: httpx.Response) -> str:
    """Extract the store's error text from a failed response."""
    try:
        body = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


class SupabaseRestClient:
    """Async PostgREST client bound to one base URL and API key."""

    def __init__(self, http_client: httpx.AsyncClient, schema_name: str = "public") -> None:
        self._http = http_client
        self._schema = schema_name

    # -- lifecycle ----------------------------------------------------------

    @classmethod
    def create(
        cls,
        settings: SupabaseSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> SupabaseRestClient:
        """Factory: build a client from settings."""
        http_client = httpx.AsyncClient(
            base_url=f"{settings.url.rstrip('/')}/rest/v1",
            headers={
                "apikey": settings.key,
                "Authorization": f"Bearer {settings.key}",
            },
            timeout=httpx.Timeout(settings.timeout_seconds),
            transport=transport,
        )
        return cls(http_client, schema_name=settings.schema_name)

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self._http.aclose()
        log.info("supabase_client_closed")

    # -- requests -----------------------------------------------------------

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Issue one request and decode its JSON body (``None`` when empty)."""
        request_headers = dict(headers or {})
        if body is not None:
            request_headers["Content-Type"] = "application/json"
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                content=orjson.dumps(body) if body is not None else None,
                headers=request_headers,
            )
        except httpx.HTTPError as exc:
            log.warning("supabase_request_failed", operation=operation, error=str(exc))
            raise RemoteFailureError(operation, str(exc)) from exc

        if response.is_error:
            message = _error_message(response)
            log.warning(
                "supabase_error_response",
                operation=operation,
                status_code=response.status_code,
                error=message,
            )
            raise RemoteFailureError(operation, message, status_code=response.status_code)

        if not response.content:
            return None
        return orjson.loads(response.content)

    async def select(
        self,
        table: str,
        columns: Iterable[str],
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows from ``table``. Returns an empty list when nothing matches."""
        params = {"select": ",".join(columns), **_eq_filters(filters or {})}
        if order is not None:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)

        rows = await self._send(
            f"select:{table}",
            "GET",
            f"/{table}",
            params=params,
            headers={"Accept-Profile": self._schema},
        )
        return rows or []

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> None:
        """Overwrite ``values`` on every row of ``table`` matching ``filters``."""
        await self._send(
            f"update:{table}",
            "PATCH",
            f"/{table}",
            params=_eq_filters(filters),
            body=dict(values),
            headers={"Content-Profile": self._schema, "Prefer": "return=minimal"},
        )

    async def rpc(self, function: str, params: Mapping[str, Any]) -> Any:
        """Call a stored procedure and return its decoded result."""
        return await self._send(
            f"rpc:{function}",
            "POST",
            f"/rpc/{function}",
            body=dict(params),
            headers={"Content-Profile": self._schema},
        )

    async def ping(self) -> None:
        """Cheap reachability check against the REST root."""
        await self._send("ping", "GET", "/", headers={"Accept-Profile": self._schema})
