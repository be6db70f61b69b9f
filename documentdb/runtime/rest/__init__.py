"""REST runtime abstractions."""

from .errors import error_from_response, raise_for_response, retry_after_ms
from .http_client import HTTPClient, HTTPResponse
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import RESTTransport, Transport

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RESTTransport",
    "Transport",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "error_from_response",
    "raise_for_response",
    "retry_after_ms",
]
