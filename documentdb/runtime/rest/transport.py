"""REST transport bound to one account endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from .http_client import HTTPClient, HTTPResponse


class Transport(Protocol):
    """Anything able to send one request and hand back the raw response."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HTTPResponse: ...


class RESTTransport:
    """Thin wrapper over HTTPClient that resolves paths against the account URL."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str | None:
        return self._http.base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HTTPResponse:
        return await self._http.request(method, path, headers=headers, data=body)

    async def close(self) -> None:
        await self._http.close()
