"""Core components."""

from .config import ConnectionInfo, RequestOptions
from .enums import ConsistencyLevel, ResourceType, Verb
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DocumentDBError,
    QueryCancelledError,
    QueryError,
    RateLimitError,
    RemoteServiceError,
    ResourceNotFoundError,
)

__all__ = [
    "ConnectionInfo",
    "RequestOptions",
    "Verb",
    "ResourceType",
    "ConsistencyLevel",
    "DocumentDBError",
    "AuthenticationError",
    "ConfigurationError",
    "RemoteServiceError",
    "QueryError",
    "ResourceNotFoundError",
    "RateLimitError",
    "QueryCancelledError",
]
