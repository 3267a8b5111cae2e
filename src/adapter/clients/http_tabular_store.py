"""
Tabular store over the table service's HTTP API.

Transport problems and error responses are turned into StoreResponse errors;
nothing here raises for a failed call.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from src.app.repositories.tabular_store import (
    Filters,
    ITabularStore,
    Row,
    StoreResponse,
)

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"

TokenProvider = Callable[[], Optional[str]]

# Fallback codes for error bodies without the {"error": {...}} envelope
STATUS_CODES = {
    401: "NOT_AUTHENTICATED",
    403: "TENANT_FORBIDDEN",
    404: "UNKNOWN_TABLE",
    422: "INVALID_ROW",
}


def _query_params(filters: Filters) -> Dict[str, str]:
    params = {}
    for column, value in filters.items():
        if isinstance(value, bool):
            params[column] = "true" if value else "false"
        else:
            params[column] = str(value)
    return params


def _error_response(response: httpx.Response) -> StoreResponse:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        return StoreResponse.failure(
            error.get("code", "STORE_ERROR"), error.get("message", "")
        )

    code = STATUS_CODES.get(response.status_code, "STORE_ERROR")
    detail = body.get("detail") if isinstance(body, dict) else response.text
    return StoreResponse.failure(code, f"HTTP {response.status_code}: {detail}")


class HttpTabularStore(ITabularStore):
    def __init__(self, client: httpx.AsyncClient, token_provider: TokenProvider):
        self.client = client
        self.token_provider = token_provider

    def _headers(self) -> Dict[str, str]:
        token = self.token_provider()
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _send(
        self,
        method: str,
        table: str,
        filters: Optional[Filters] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> StoreResponse:
        try:
            response = await self.client.request(
                method,
                f"/tables/{table}",
                params=_query_params(filters or {}),
                json=body,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning(f"{method} /tables/{table} failed: {exc!r}")
            return StoreResponse.failure(NETWORK_ERROR, str(exc) or exc.__class__.__name__)

        if response.is_error:
            failure = _error_response(response)
            logger.warning(
                f"{method} /tables/{table} returned {response.status_code}: "
                f"{failure.error.code}"
            )
            return failure

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            logger.warning(
                f"{method} /tables/{table} returned {response.status_code} without a JSON object"
            )
            return StoreResponse.failure(
                "STORE_ERROR", f"HTTP {response.status_code}: unexpected response body"
            )
        return StoreResponse.success(body.get("data"))

    async def select(self, table: str, filters: Filters) -> StoreResponse:
        return await self._send("GET", table, filters=filters)

    async def insert(self, table: str, row: Row) -> StoreResponse:
        return await self._send("POST", table, body={"row": row})

    async def update(self, table: str, patch: Row, filters: Filters) -> StoreResponse:
        return await self._send("PATCH", table, filters=filters, body={"patch": patch})

    async def delete(self, table: str, filters: Filters) -> StoreResponse:
        return await self._send("DELETE", table, filters=filters)
