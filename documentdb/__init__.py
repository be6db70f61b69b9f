"""documentdb - Async client for a document database REST API."""

from .auth import SigningRequest, http_date, sign, signed_headers
from .clients import DocumentClient
from .core import (
    AuthenticationError,
    ConfigurationError,
    ConnectionInfo,
    ConsistencyLevel,
    DocumentDBError,
    QueryCancelledError,
    QueryError,
    RateLimitError,
    RemoteServiceError,
    RequestOptions,
    ResourceNotFoundError,
    ResourceType,
    Verb,
)
from .models import (
    Collection,
    CountResult,
    Database,
    ExistsResult,
    Offer,
    OperationResult,
    RemoteError,
)
from .runtime.pagination import (
    QueryExecutor,
    QueryPage,
    QueryResult,
    RetryPolicy,
    merge_records,
)
from .runtime.rest import HTTPClient, HTTPResponse, RESTTransport
from .utils import escape_text_for_json

__version__ = "0.1.0"

__all__ = [
    # Client
    "DocumentClient",
    "ConnectionInfo",
    "RequestOptions",
    # Signing
    "SigningRequest",
    "sign",
    "signed_headers",
    "http_date",
    # Queries
    "QueryExecutor",
    "QueryPage",
    "QueryResult",
    "RetryPolicy",
    "merge_records",
    # Transport
    "HTTPClient",
    "HTTPResponse",
    "RESTTransport",
    # Enums
    "Verb",
    "ResourceType",
    "ConsistencyLevel",
    # Models
    "Database",
    "Collection",
    "Offer",
    "OperationResult",
    "ExistsResult",
    "CountResult",
    "RemoteError",
    # Exceptions
    "DocumentDBError",
    "AuthenticationError",
    "ConfigurationError",
    "RemoteServiceError",
    "QueryError",
    "ResourceNotFoundError",
    "RateLimitError",
    "QueryCancelledError",
    # Utils
    "escape_text_for_json",
]
