"""Pagination data structures and retry policy.

This module defines the page and result containers folded together by the
query executor, and the policy bounding its rate-limit retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ...core.constants import (
    HEADER_CONTINUATION,
    HEADER_REQUEST_CHARGE,
    HEADER_SESSION_TOKEN,
    SCALAR_FIELD,
)
from ..rest.http_client import HTTPResponse

logger = logging.getLogger(__name__)

Record = dict[str, Any]


@dataclass(frozen=True)
class RetryPolicy:
    """Bounds for the rate-limit retry loop.

    Both limits apply per page: the counters reset once a page succeeds.

    Attributes:
        max_retries: Maximum consecutive 429 retries (None = unbounded)
        max_wait: Maximum cumulative seconds spent waiting (None = unbounded)
        enabled: When False the first 429 is raised as RateLimitError

    Examples:
        # Up to 9 retries or 30 seconds of waiting per page
        RetryPolicy()

        # Retry forever, honouring the server's suggested delays
        RetryPolicy(max_retries=None, max_wait=None)

        # Give up after 5 retries or 10 seconds of waiting
        RetryPolicy(max_retries=5, max_wait=10.0)
    """

    max_retries: int | None = 9
    max_wait: float | None = 30.0
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate retry policy configuration."""
        if self.max_retries is not None and self.max_retries < 0:
            raise ValueError("RetryPolicy max_retries must be >= 0")
        if self.max_wait is not None and self.max_wait < 0:
            raise ValueError("RetryPolicy max_wait must be >= 0")

    def allows(self, attempt: int, waited: float, next_wait: float) -> bool:
        """Whether retry number ``attempt`` (1-based) may go ahead.

        Args:
            attempt: Retry about to be made for the current page
            waited: Seconds already spent waiting for the current page
            next_wait: Seconds the next wait would add
        """
        if not self.enabled:
            return False
        if self.max_retries is not None and attempt > self.max_retries:
            return False
        if self.max_wait is not None and waited + next_wait > self.max_wait:
            return False
        return True


@dataclass(frozen=True)
class QueryPage:
    """One successful response of a paginated query.

    Attributes:
        documents: Records of this page (possibly empty)
        request_charge: Cost of this page
        continuation: Token for the next page, None when this is the last one
        session_token: Session token returned with this page
    """

    documents: list[Record]
    request_charge: float = 0.0
    continuation: str | None = None
    session_token: str | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.continuation)

    @classmethod
    def from_response(cls, response: HTTPResponse) -> QueryPage:
        """Parse a 2xx query response.

        A body without a ``Documents`` list contributes zero records.
        Scalar entries (``SELECT VALUE ...``) are wrapped as ``{"$1": value}``.
        """
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Query page body is not JSON", extra={"status": response.status})
            payload = None
        raw = payload.get("Documents") if isinstance(payload, dict) else None
        if not isinstance(raw, list):
            raw = []
        documents = [item if isinstance(item, dict) else {SCALAR_FIELD: item} for item in raw]

        return cls(
            documents=documents,
            request_charge=_parse_charge(response.header(HEADER_REQUEST_CHARGE)),
            continuation=response.header(HEADER_CONTINUATION) or None,
            session_token=response.header(HEADER_SESSION_TOKEN),
        )


def _parse_charge(raw: str | None) -> float:
    if not raw:
        return 0.0
    try:
        charge = float(raw)
    except ValueError:
        logger.warning("Unparseable request charge", extra={"value": raw})
        return 0.0
    return max(charge, 0.0)


@dataclass
class QueryResult:
    """Result of a paginated query.

    Attributes:
        documents: Records of all pages; every record carries the union of fields
        request_charge: Sum of all page costs
        session_token: Session token of the last page
        pages: Number of pages fetched successfully
        retries: Number of rate-limit retries performed
    """

    documents: list[Record] = field(default_factory=list)
    request_charge: float = 0.0
    session_token: str | None = None
    pages: int = 0
    retries: int = 0

    @property
    def fields(self) -> list[str]:
        return list(self.documents[0]) if self.documents else []

    def column(self, name: str) -> list[Any]:
        """Values of one field across all records."""
        return [record.get(name) for record in self.documents]
