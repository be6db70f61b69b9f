"""Custom exception hierarchy."""

from __future__ import annotations


class DocumentDBError(Exception):
    """Base exception for all library errors."""

    pass


class AuthenticationError(DocumentDBError):
    """Signing inputs are malformed (bad key encoding, missing fields)."""

    pass


class ConfigurationError(DocumentDBError):
    """Invalid connection settings or call arguments."""

    pass


class RemoteServiceError(DocumentDBError):
    """Error response returned by the remote service.

    Carries the service's error code and message verbatim.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        remote_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.remote_message = remote_message

    @classmethod
    def from_remote(
        cls, code: str, remote_message: str, status_code: int | None = None
    ) -> RemoteServiceError:
        """Build an error whose message names both the code and the remote message."""
        message = (
            f"A {code} error occurred during the request. Error Message: {remote_message}"
        )
        return cls(message, status_code=status_code, code=code, remote_message=remote_message)


class QueryError(RemoteServiceError):
    """Non-retryable failure returned for a request."""

    pass


class ResourceNotFoundError(QueryError):
    """Requested resource does not exist (HTTP 404)."""

    pass


class RateLimitError(RemoteServiceError):
    """Request rate too large and retries are exhausted or disabled."""

    def __init__(
        self,
        message: str,
        retry_after_ms: float | None = None,
        remote_message: str | None = None,
    ) -> None:
        super().__init__(
            message, status_code=429, code="TooManyRequests", remote_message=remote_message
        )
        self.retry_after_ms = retry_after_ms


class QueryCancelledError(DocumentDBError):
    """Query deadline passed before the next page was fetched."""

    def __init__(self, message: str, pages_fetched: int = 0) -> None:
        super().__init__(message)
        self.pages_fetched = pages_fetched
