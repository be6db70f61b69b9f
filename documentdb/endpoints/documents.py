"""Document endpoint definitions (get, upsert, delete)."""

from __future__ import annotations

from typing import Any

from ..core.constants import CONTENT_TYPE_JSON, HEADER_CONTENT_TYPE, HEADER_IS_UPSERT
from ..core.enums import ResourceType, Verb
from ..runtime.rest import RestEndpointSpec
from .common import json_body, option_headers


def _collection_link(params: dict[str, Any]) -> str:
    return f"dbs/{params['database_id']}/colls/{params['collection_id']}"


def _document_link(params: dict[str, Any]) -> str:
    return f"{_collection_link(params)}/docs/{params['document_id']}"


def _upsert_body(params: dict[str, Any]) -> str:
    document = params["document"]
    if isinstance(document, str):
        # Already serialized JSON
        return document
    return json_body(document)


def _upsert_headers(params: dict[str, Any]) -> dict[str, str]:
    headers = option_headers(params)
    headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
    headers[HEADER_IS_UPSERT] = "True"
    return headers


GET_SPEC = RestEndpointSpec(
    id="get_document",
    method=Verb.GET.value,
    resource_type=ResourceType.DOCUMENTS.value,
    build_path=_document_link,
    build_resource_link=_document_link,
    build_headers=option_headers,
)

UPSERT_SPEC = RestEndpointSpec(
    id="upsert_document",
    method=Verb.POST.value,
    resource_type=ResourceType.DOCUMENTS.value,
    build_path=lambda params: f"{_collection_link(params)}/docs",
    build_resource_link=_collection_link,
    build_body=_upsert_body,
    build_headers=_upsert_headers,
)

DELETE_SPEC = RestEndpointSpec(
    id="delete_document",
    method=Verb.DELETE.value,
    resource_type=ResourceType.DOCUMENTS.value,
    build_path=_document_link,
    build_resource_link=_document_link,
    build_headers=option_headers,
)
