"""Unit tests for QueryExecutor (paginated query loop)."""

from __future__ import annotations

import asyncio
import json
import time

import pytest

from documentdb.core import QueryCancelledError, QueryError, RateLimitError
from documentdb.runtime.pagination import QueryExecutor, RetryPolicy
from tests.unit.helpers import (
    TEST_KEY,
    FakeTransport,
    RecordingSleep,
    fixed_clock,
    make_response,
    query_page,
)

COLLECTION = "dbs/db1/colls/coll1"


def _executor(transport, **kwargs) -> QueryExecutor:
    kwargs.setdefault("sleep", RecordingSleep())
    return QueryExecutor(transport, TEST_KEY, clock=fixed_clock, **kwargs)


def _rate_limited(retry_after: str | None = "50"):
    headers = {"x-ms-retry-after-ms": retry_after} if retry_after is not None else {}
    return make_response(
        429, {"code": "TooManyRequests", "message": "Request rate is large"}, headers
    )


@pytest.mark.asyncio
async def test_follows_continuation_until_exhausted():
    transport = FakeTransport(
        [
            query_page([{"id": "1"}], continuation="t1"),
            query_page([{"id": "2"}], continuation="t2"),
            query_page([{"id": "3"}]),
        ]
    )
    result = await _executor(transport).execute(COLLECTION, "SELECT * FROM c")

    assert len(transport.requests) == 3
    assert result.pages == 3
    assert result.column("id") == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_request_shape_and_continuation_header():
    transport = FakeTransport(
        [query_page([{"id": "1"}], continuation="token-1"), query_page([{"id": "2"}])]
    )
    await _executor(transport).execute(
        COLLECTION,
        'SELECT * FROM c WHERE c.name = "x"',
        {"x-ms-documentdb-partitionkey": '["p"]'},
        page_size_hint=25,
    )

    first, second = transport.requests
    assert first["method"] == "POST"
    assert first["path"] == f"{COLLECTION}/docs"
    assert json.loads(first["body"]) == {"query": 'SELECT * FROM c WHERE c.name = "x"'}
    headers = first["headers"]
    assert headers["Content-Type"] == "application/query+json"
    assert headers["x-ms-documentdb-isquery"] == "True"
    assert headers["x-ms-max-item-count"] == "25"
    assert headers["x-ms-documentdb-partitionkey"] == '["p"]'
    assert headers["x-ms-date"] == "Thu, 27 Apr 2017 00:51:12 GMT"
    assert headers["authorization"].startswith("type%3dmaster%26ver%3d1.0%26sig%3d")
    assert "x-ms-continuation" not in headers
    assert second["headers"]["x-ms-continuation"] == "token-1"


@pytest.mark.asyncio
async def test_heterogeneous_pages_merge_to_field_union():
    transport = FakeTransport(
        [
            query_page([{"a": 1}], continuation="t1"),
            query_page([{"b": 2}]),
        ]
    )
    result = await _executor(transport).execute(COLLECTION, "SELECT * FROM c")

    assert result.documents == [{"a": 1, "b": None}, {"a": None, "b": 2}]
    assert result.fields == ["a", "b"]


@pytest.mark.asyncio
async def test_request_charges_are_summed():
    transport = FakeTransport(
        [
            query_page([{"id": "1"}], charge="1.5", continuation="t1"),
            query_page([{"id": "2"}], charge="2.5", continuation="t2"),
            query_page([], charge="0.0"),
        ]
    )
    result = await _executor(transport).execute(COLLECTION, "SELECT * FROM c")

    assert result.request_charge == pytest.approx(4.0)


@pytest.mark.asyncio
async def test_session_token_is_from_last_page():
    transport = FakeTransport(
        [
            query_page([{"id": "1"}], session="0:1", continuation="t1"),
            query_page([{"id": "2"}], session="0:7"),
        ]
    )
    result = await _executor(transport).execute(COLLECTION, "SELECT * FROM c")

    assert result.session_token == "0:7"


@pytest.mark.asyncio
async def test_rate_limited_page_is_retried_after_suggested_delay():
    sleep = RecordingSleep()
    transport = FakeTransport(
        [
            query_page([{"id": "1"}], continuation="t1"),
            _rate_limited("50"),
            query_page([{"id": "2"}]),
        ]
    )
    result = await _executor(transport, sleep=sleep).execute(COLLECTION, "SELECT * FROM c")

    assert sleep.calls == [pytest.approx(0.05)]
    assert result.retries == 1
    assert result.pages == 2
    assert result.column("id") == ["1", "2"]
    # The retry re-sends the same continuation token
    assert transport.requests[1]["headers"]["x-ms-continuation"] == "t1"
    assert transport.requests[2]["headers"]["x-ms-continuation"] == "t1"


@pytest.mark.asyncio
async def test_rate_limit_wait_uses_real_sleep():
    transport = FakeTransport([_rate_limited("50"), query_page([{"id": "1"}])])
    executor = QueryExecutor(transport, TEST_KEY, clock=fixed_clock, sleep=asyncio.sleep)

    start = time.monotonic()
    result = await executor.execute(COLLECTION, "SELECT * FROM c")

    assert time.monotonic() - start >= 0.045
    assert result.retries == 1


@pytest.mark.asyncio
async def test_rate_limit_without_header_retries_immediately():
    sleep = RecordingSleep()
    transport = FakeTransport([_rate_limited(None), query_page([{"id": "1"}])])
    result = await _executor(transport, sleep=sleep).execute(COLLECTION, "SELECT * FROM c")

    assert sleep.calls == []
    assert result.retries == 1


@pytest.mark.asyncio
async def test_retry_limit_raises_rate_limit_error():
    transport = FakeTransport([_rate_limited("10"), _rate_limited("20")])
    executor = _executor(transport, retry_policy=RetryPolicy(max_retries=1))

    with pytest.raises(RateLimitError) as exc_info:
        await executor.execute(COLLECTION, "SELECT * FROM c")

    assert exc_info.value.retry_after_ms == 20.0
    assert len(transport.requests) == 2


@pytest.mark.asyncio
async def test_disabled_retries_raise_first_rate_limit():
    transport = FakeTransport([_rate_limited("10")])
    executor = _executor(transport, retry_policy=RetryPolicy(enabled=False))

    with pytest.raises(RateLimitError):
        await executor.execute(COLLECTION, "SELECT * FROM c")


@pytest.mark.asyncio
async def test_error_response_raises_query_error():
    transport = FakeTransport(
        [make_response(400, {"code": "BadRequest", "message": "bad syntax"})]
    )
    with pytest.raises(QueryError) as exc_info:
        await _executor(transport).execute(COLLECTION, "SELEC * FROM c")

    assert exc_info.value.code == "BadRequest"
    assert "BadRequest" in str(exc_info.value)
    assert "bad syntax" in str(exc_info.value)


@pytest.mark.asyncio
async def test_error_after_first_page_discards_partial_results():
    transport = FakeTransport(
        [
            query_page([{"id": "1"}], continuation="t1"),
            make_response(500, "Internal failure"),
        ]
    )
    with pytest.raises(QueryError) as exc_info:
        await _executor(transport).execute(COLLECTION, "SELECT * FROM c")

    assert exc_info.value.status_code == 500
    assert exc_info.value.remote_message == "Internal failure"


@pytest.mark.asyncio
async def test_missing_documents_field_yields_no_records():
    transport = FakeTransport([make_response(200, {"_rid": "abc"})])
    result = await _executor(transport).execute(COLLECTION, "SELECT * FROM c")

    assert result.documents == []
    assert result.pages == 1


@pytest.mark.asyncio
async def test_scalar_results_are_wrapped():
    transport = FakeTransport([query_page([7], continuation="t1"), query_page([5])])
    result = await _executor(transport).execute(COLLECTION, "SELECT VALUE count(1) FROM c")

    assert result.documents == [{"$1": 7}, {"$1": 5}]


@pytest.mark.asyncio
async def test_expired_deadline_cancels_before_next_page():
    ticks = iter([0.0, 5.0])
    transport = FakeTransport(
        [query_page([{"id": "1"}], continuation="t1"), query_page([{"id": "2"}])]
    )
    executor = _executor(transport, monotonic=lambda: next(ticks))

    with pytest.raises(QueryCancelledError) as exc_info:
        await executor.execute(COLLECTION, "SELECT * FROM c", deadline=1.0)

    assert exc_info.value.pages_fetched == 1
    assert len(transport.requests) == 1

