"""Paginated query execution.

This module provides the QueryExecutor class that posts a SQL query,
follows continuation tokens until the service stops returning one, retries
rate-limited pages after the server-suggested delay, and folds every page
into a single QueryResult.

State machine:
    Init -> Fetch -> (429) RateLimited -> Fetch (same continuation)
                  -> (non-2xx) Failed: raise QueryError
                  -> (2xx) Accumulate -> Fetch while a continuation exists
                                      -> Done
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Mapping
from time import perf_counter

from ...auth.signer import Clock, signed_headers, utc_now
from ...core.constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_QUERY,
    DEFAULT_MAX_ITEM_COUNT,
    HEADER_ACCEPT,
    HEADER_CONTENT_TYPE,
    HEADER_CONTINUATION,
    HEADER_ENABLE_CROSS_PARTITION,
    HEADER_IS_QUERY,
    HEADER_MAX_ITEM_COUNT,
)
from ...core.enums import ResourceType, Verb
from ...core.exceptions import QueryCancelledError
from ...utils.text import query_body
from ..rest.errors import error_from_response, retry_after_ms
from ..rest.transport import Transport
from .definitions import QueryPage, QueryResult, RetryPolicy
from .merge import RecordMerger
from .telemetry import (
    log_page_fetched,
    log_query_complete,
    log_query_failed,
    log_rate_limited,
)

Sleep = Callable[[float], Awaitable[None]]


class QueryExecutor:
    """Executes a query across all of its pages.

    The executor holds no per-query state; every call to ``execute`` owns
    its own accumulator and continuation token, so one executor can serve
    concurrent queries.
    """

    def __init__(
        self,
        transport: Transport,
        secret_key: str,
        *,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
        retry_policy: RetryPolicy | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize query executor.

        Args:
            transport: Sends requests (RESTTransport or any compatible object)
            secret_key: Base64-encoded master key used to sign each page request
            clock: Source of the request timestamp
            sleep: Awaitable used to wait out rate limiting
            retry_policy: Bounds for rate-limit retries (default: 9 retries, 30s of waiting)
            monotonic: Time source for deadlines, in seconds
        """
        self._t = transport
        self._secret_key = secret_key
        self._clock = clock
        self._sleep = sleep
        self._retry_policy = retry_policy or RetryPolicy()
        self._monotonic = monotonic

    def build_headers(
        self,
        collection_link: str,
        headers_template: Mapping[str, str] | None,
        page_size_hint: int,
        continuation: str | None,
    ) -> dict[str, str]:
        """Headers for one page request, freshly signed."""
        headers = {
            HEADER_CONTENT_TYPE: CONTENT_TYPE_QUERY,
            HEADER_ACCEPT: CONTENT_TYPE_JSON,
            HEADER_IS_QUERY: "True",
            HEADER_ENABLE_CROSS_PARTITION: "true",
            HEADER_MAX_ITEM_COUNT: str(page_size_hint),
        }
        if headers_template:
            headers.update(headers_template)
        headers.update(
            signed_headers(
                Verb.POST.value,
                ResourceType.DOCUMENTS.value,
                collection_link,
                self._secret_key,
                self._clock,
            )
        )
        if continuation:
            headers[HEADER_CONTINUATION] = continuation
        return headers

    async def execute(
        self,
        collection_link: str,
        query_text: str,
        headers_template: Mapping[str, str] | None = None,
        page_size_hint: int = DEFAULT_MAX_ITEM_COUNT,
        *,
        deadline: float | None = None,
    ) -> QueryResult:
        """Run a query and merge all of its pages.

        Args:
            collection_link: Collection path, e.g. "dbs/MyDatabase/colls/Items"
            query_text: SQL-like query text
            headers_template: Extra headers sent with every page (partition key,
                consistency level, session token, user agent, ...)
            page_size_hint: Value of the max-item-count header
            deadline: Optional ``monotonic()`` value after which no further page is fetched

        Returns:
            QueryResult with merged records, total charge and last session token

        Raises:
            QueryError: On any non-2xx, non-429 response
            RateLimitError: When the retry policy refuses another retry
            QueryCancelledError: When the deadline passes between pages
        """
        path = f"{collection_link}/docs"
        body = query_body(query_text)

        merger = RecordMerger()
        result = QueryResult()
        continuation: str | None = None
        attempt = 0
        waited = 0.0
        query_start = perf_counter()

        while True:
            if deadline is not None and self._monotonic() >= deadline:
                raise QueryCancelledError(
                    f"Query deadline passed after {result.pages} page(s)",
                    pages_fetched=result.pages,
                )

            headers = self.build_headers(
                collection_link, headers_template, page_size_hint, continuation
            )
            page_start = perf_counter()
            response = await self._t.request(Verb.POST.value, path, headers=headers, body=body)

            if response.status == 429:
                wait_ms = retry_after_ms(response)
                wait_s = wait_ms / 1000.0 if wait_ms else 0.0
                attempt += 1
                if not self._retry_policy.allows(attempt, waited, wait_s):
                    error = error_from_response(response)
                    log_query_failed(
                        resource_link=collection_link,
                        page_index=result.pages,
                        status=response.status,
                        error_type=type(error).__name__,
                        error_message=str(error),
                    )
                    raise error
                log_rate_limited(
                    resource_link=collection_link,
                    page_index=result.pages,
                    attempt=attempt,
                    retry_after_ms=wait_ms,
                )
                result.retries += 1
                if wait_s > 0:
                    await self._sleep(wait_s)
                    waited += wait_s
                continue

            if not response.ok:
                error = error_from_response(response)
                log_query_failed(
                    resource_link=collection_link,
                    page_index=result.pages,
                    status=response.status,
                    error_type=type(error).__name__,
                    error_message=str(error),
                )
                raise error

            page = QueryPage.from_response(response)
            merger.add(page.documents)
            result.request_charge += page.request_charge
            if page.session_token is not None:
                result.session_token = page.session_token
            result.pages += 1
            attempt = 0
            waited = 0.0

            log_page_fetched(
                resource_link=collection_link,
                page_index=result.pages - 1,
                rows=len(page.documents),
                request_charge=page.request_charge,
                has_more=page.has_more,
                latency_ms=(perf_counter() - page_start) * 1000.0,
            )

            if not page.has_more:
                break
            continuation = page.continuation

        result.documents = merger.records()
        log_query_complete(
            resource_link=collection_link,
            result=result,
            total_latency_ms=(perf_counter() - query_start) * 1000.0,
        )
        return result
