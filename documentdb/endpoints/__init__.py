"""Resource endpoint definitions.

Each module exposes ``RestEndpointSpec`` constants (one per operation) and
the response adapters that decode their payloads.
"""

from . import collections, databases, documents, offers
from .common import ExistsAdapter, OperationAdapter

__all__ = [
    "collections",
    "databases",
    "documents",
    "offers",
    "ExistsAdapter",
    "OperationAdapter",
]
