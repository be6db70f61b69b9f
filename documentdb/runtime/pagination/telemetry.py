"""Structured logging for paginated queries.

This module provides telemetry hooks for the query executor, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import QueryResult

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    resource_link: str,
    page_index: int,
    rows: int,
    request_charge: float,
    has_more: bool,
    latency_ms: float | None = None,
) -> None:
    """Log one successfully fetched page.

    Args:
        resource_link: Collection being queried
        page_index: Zero-based index of the page
        rows: Number of records in the page
        request_charge: Cost of the page
        has_more: Whether a continuation token was returned
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "query_page_fetched",
        extra={
            "resource_link": resource_link,
            "page_index": page_index,
            "rows": rows,
            "request_charge": request_charge,
            "has_more": has_more,
            "latency_ms": latency_ms,
        },
    )


def log_rate_limited(
    *,
    resource_link: str,
    page_index: int,
    attempt: int,
    retry_after_ms: float | None,
) -> None:
    """Log a 429 response that will be retried."""
    logger.warning(
        "query_rate_limited",
        extra={
            "resource_link": resource_link,
            "page_index": page_index,
            "attempt": attempt,
            "retry_after_ms": retry_after_ms,
        },
    )


def log_query_failed(
    *,
    resource_link: str,
    page_index: int,
    status: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a query that ended with an error response."""
    logger.error(
        "query_failed",
        extra={
            "resource_link": resource_link,
            "page_index": page_index,
            "status": status,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_query_complete(
    *,
    resource_link: str,
    result: QueryResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a paginated query."""
    logger.info(
        "query_completed",
        extra={
            "resource_link": resource_link,
            "pages": result.pages,
            "retries": result.retries,
            "total_rows": len(result.documents),
            "request_charge": result.request_charge,
            "total_latency_ms": total_latency_ms,
        },
    )
