"""Precise unit tests for RESTTransport.

Tests focus on HTTPClient delegation.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from documentdb.runtime.rest import HTTPResponse, RESTTransport


class TestRESTTransport:
    """Test RESTTransport wrapper."""

    def test_init(self):
        transport = RESTTransport(base_url="https://acct.example.com", timeout=5.0)
        assert transport.base_url == "https://acct.example.com"
        assert transport._http.timeout.total == 5.0

    @pytest.mark.asyncio
    async def test_request_delegates_to_http_client(self):
        transport = RESTTransport(base_url="https://acct.example.com")
        expected = HTTPResponse(status=200, body="{}")
        transport._http.request = AsyncMock(return_value=expected)

        result = await transport.request(
            "POST", "dbs", headers={"Accept": "application/json"}, body='{"id":"db1"}'
        )

        assert result is expected
        transport._http.request.assert_called_once_with(
            "POST", "dbs", headers={"Accept": "application/json"}, data='{"id":"db1"}'
        )

    @pytest.mark.asyncio
    async def test_close_delegates_to_http_client(self):
        transport = RESTTransport(base_url="https://acct.example.com")
        transport._http.close = AsyncMock()

        await transport.close()

        transport._http.close.assert_called_once()
