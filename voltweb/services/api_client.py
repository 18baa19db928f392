from __future__ import annotations

import logging
from typing import Any

import httpx

from voltweb.constants import API_BASE_URL, HTTP_TIMEOUT_S


class ApiError(Exception):
    """A site API call failed; message is the upstream one when it sent any."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SiteClient:
    """Async JSON client for the site API (listings and server status queries)."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = HTTP_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def get_json(self, path: str) -> Any:
        """
        GET a JSON document.

        Raises:
            ApiError: On transport errors, non-2xx answers or undecodable bodies
        """
        try:
            response = await self.http.get(path)
        except httpx.HTTPError as e:
            raise ApiError(f"Request to {path} failed: {e}") from e
        if response.is_error:
            raise ApiError(_error_message(response), response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {path}") from e

    async def get_list(self, path: str) -> list[Any]:
        """GET a JSON list; any failure degrades to an empty list."""
        try:
            data = await self.get_json(path)
        except ApiError as e:
            logging.warning("Listing %s unavailable: %s", path, e.message)
            return []
        if not isinstance(data, list):
            logging.warning("Listing %s returned %s, expected list", path, type(data).__name__)
            return []
        return data

    async def query_server(self, address: str, port: int) -> httpx.Response:
        """Raw status query; callers decide what a failure means."""
        return await self.http.get(f"/api/query-server/{address}/{port}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed ({response.status_code})"


# Module-level singleton instance
client = SiteClient()
