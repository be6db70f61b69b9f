"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ...auth.signer import Clock, signed_headers, utc_now
from ...core.constants import CONTENT_TYPE_JSON, HEADER_ACCEPT
from .errors import raise_for_response
from .http_client import HTTPResponse
from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST" | "PUT" | "DELETE"
    resource_type: str
    build_path: Callable[[dict[str, Any]], str]
    # Link that gets signed; usually the path without the trailing resource type
    build_resource_link: Callable[[dict[str, Any]], str]
    build_body: Callable[[dict[str, Any]], str] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Non-2xx statuses handed to the adapter instead of raising (e.g. 404 for exists checks)
    passthrough_statuses: frozenset[int] = frozenset()


class ResponseAdapter:
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> Any:
        return response


class RestRunner:
    def __init__(self, transport: Transport, secret_key: str, clock: Clock = utc_now) -> None:
        self._t = transport
        self._secret_key = secret_key
        self._clock = clock

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        body = spec.build_body(params) if spec.build_body else None

        headers = {HEADER_ACCEPT: CONTENT_TYPE_JSON}
        headers.update(
            signed_headers(
                spec.method,
                spec.resource_type,
                spec.build_resource_link(params),
                self._secret_key,
                self._clock,
            )
        )
        if spec.build_headers:
            headers.update(spec.build_headers(params))

        response = await self._t.request(spec.method, path, headers=headers, body=body)
        logger.debug(
            "Request completed",
            extra={"endpoint_id": spec.id, "status": response.status},
        )

        if response.status not in spec.passthrough_statuses:
            raise_for_response(response)
        return adapter.parse(response, params)
