"""Data models.

Architecture:
    Pydantic v2 models for payloads crossing the wire. All models are
    immutable (frozen=True). Resource models keep unknown properties as
    extras because documents and system metadata are open-ended.
"""

from .remote_error import RemoteError
from .resources import (
    Collection,
    CountResult,
    Database,
    ExistsResult,
    Offer,
    OfferContent,
    OperationResult,
    PartitionKeyDefinition,
    Resource,
)

__all__ = [
    "RemoteError",
    "Resource",
    "Database",
    "Collection",
    "PartitionKeyDefinition",
    "Offer",
    "OfferContent",
    "OperationResult",
    "ExistsResult",
    "CountResult",
]
