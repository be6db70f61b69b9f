"""Fakes and response builders shared by unit tests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from documentdb.runtime.rest import HTTPResponse

TEST_KEY = (
    "dsZQi3KtZmCv1ljt3VNWNm7sQUF1y5rJfC6kv5JiwvW0EndXdDku/dkKBp8/ufDToSxLzR4y+O/0H/t4bQtVNw=="
)
FIXED_TIME = datetime(2017, 4, 27, 0, 51, 12, tzinfo=UTC)
FIXED_HTTP_DATE = "Thu, 27 Apr 2017 00:51:12 GMT"


def make_response(
    status: int = 200,
    body: Any = None,
    headers: Mapping[str, str] | None = None,
) -> HTTPResponse:
    """Build an HTTPResponse; dict/list bodies are JSON-encoded."""
    if body is None:
        text = ""
    elif isinstance(body, str):
        text = body
    else:
        text = json.dumps(body)
    return HTTPResponse(
        status=status,
        headers={k.lower(): v for k, v in (headers or {}).items()},
        body=text,
    )


def query_page(
    documents: list[Any],
    *,
    charge: str = "1.0",
    continuation: str | None = None,
    session: str | None = "0:1",
) -> HTTPResponse:
    """Build a successful query page response."""
    headers = {"x-ms-request-charge": charge}
    if continuation is not None:
        headers["x-ms-continuation"] = continuation
    if session is not None:
        headers["x-ms-session-token"] = session
    return make_response(200, {"Documents": documents, "_count": len(documents)}, headers)


class FakeTransport:
    """Transport replaying canned responses and recording requests."""

    def __init__(self, responses: list[HTTPResponse]) -> None:
        self._responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HTTPResponse:
        self.requests.append(
            {"method": method, "path": path, "headers": dict(headers or {}), "body": body}
        )
        if not self._responses:
            raise AssertionError(f"Unexpected request: {method} {path}")
        return self._responses.pop(0)


class RecordingSleep:
    """Sleep replacement recording requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def fixed_clock() -> datetime:
    return FIXED_TIME
