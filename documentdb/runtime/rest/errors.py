"""Translation of error responses into library exceptions."""

from __future__ import annotations

from ...core.constants import HEADER_RETRY_AFTER_MS
from ...core.exceptions import (
    QueryError,
    RateLimitError,
    RemoteServiceError,
    ResourceNotFoundError,
)
from ...models import RemoteError
from .http_client import HTTPResponse


def retry_after_ms(response: HTTPResponse) -> float | None:
    """Server-suggested wait in milliseconds, if the header is present and numeric."""
    raw = response.header(HEADER_RETRY_AFTER_MS)
    if raw is None or raw == "":
        return None
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return None


def error_from_response(response: HTTPResponse) -> RemoteServiceError:
    """Build the exception matching a non-2xx response."""
    remote = RemoteError.from_body(response.body, response.status)
    if response.status == 429:
        return RateLimitError(
            f"A {remote.code} error occurred during the request. Error Message: {remote.message}",
            retry_after_ms=retry_after_ms(response),
            remote_message=remote.message,
        )
    if response.status == 404:
        return ResourceNotFoundError.from_remote(remote.code, remote.message, response.status)
    return QueryError.from_remote(remote.code, remote.message, response.status)


def raise_for_response(response: HTTPResponse) -> None:
    """Raise the matching exception unless the response is 2xx."""
    if not response.ok:
        raise error_from_response(response)
