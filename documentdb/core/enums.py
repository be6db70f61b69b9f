"""Core enumerations for standardized request values.

Architecture:
    String enums keep the wire values next to their Python names so they can
    be passed straight into headers and signing payloads.

Key Types:
    - Verb: HTTP methods the service accepts for signed requests
    - ResourceType: Resource kinds used in the signing payload
    - ConsistencyLevel: Values accepted by the consistency override header
"""

from enum import Enum
from typing import Optional


class Verb(str, Enum):
    """HTTP verbs accepted by the signer."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, verb: str) -> Optional["Verb"]:
        """Get verb from string value (case-insensitive). Returns None if no match."""
        try:
            return cls(verb.upper())
        except (ValueError, AttributeError):
            return None


class ResourceType(str, Enum):
    """Resource kinds as they appear in resource links and signing payloads."""

    DATABASES = "dbs"
    COLLECTIONS = "colls"
    DOCUMENTS = "docs"
    OFFERS = "offers"

    def __str__(self) -> str:
        return self.value


class ConsistencyLevel(str, Enum):
    """Consistency override values.

    The service interprets these; the client only passes them through.
    """

    STRONG = "Strong"
    BOUNDED = "Bounded"
    SESSION = "Session"
    EVENTUAL = "Eventual"

    def __str__(self) -> str:
        return self.value
