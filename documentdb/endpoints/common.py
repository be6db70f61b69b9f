"""Helpers shared by resource endpoint definitions."""

from __future__ import annotations

import json
from typing import Any

from ..core.config import RequestOptions
from ..core.constants import HEADER_REQUEST_CHARGE, HEADER_SESSION_TOKEN
from ..models import ExistsResult, OperationResult
from ..runtime.rest import HTTPResponse, ResponseAdapter


def request_charge(response: HTTPResponse) -> float:
    """Cost header as a number; 0.0 when missing or unparseable."""
    raw = response.header(HEADER_REQUEST_CHARGE)
    if not raw:
        return 0.0
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return 0.0


def option_headers(params: dict[str, Any]) -> dict[str, str]:
    """Headers for the optional RequestOptions stored under ``params["options"]``."""
    options: RequestOptions | None = params.get("options")
    return options.to_headers() if options else {}


def json_body(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))


class OperationAdapter(ResponseAdapter):
    """Adapter returning cost and session token, plus the decoded body."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> OperationResult:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        return OperationResult(
            request_charge=request_charge(response),
            session_token=response.header(HEADER_SESSION_TOKEN),
            resource=payload,
        )


class ExistsAdapter(ResponseAdapter):
    """Adapter mapping 2xx to True and 404 to False."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> ExistsResult:
        return ExistsResult(
            exists=response.ok,
            request_charge=request_charge(response),
            session_token=response.header(HEADER_SESSION_TOKEN),
        )
