"""Collection endpoint definitions (list, create, delete, exists)."""

from __future__ import annotations

from typing import Any

from ..core.constants import HEADER_OFFER_THROUGHPUT, HEADER_SESSION_TOKEN
from ..core.enums import ResourceType, Verb
from ..models import Collection, OperationResult
from ..runtime.rest import HTTPResponse, ResponseAdapter, RestEndpointSpec
from .common import json_body, option_headers, request_charge


def _database_link(params: dict[str, Any]) -> str:
    return f"dbs/{params['database_id']}"


def _collection_link(params: dict[str, Any]) -> str:
    return f"dbs/{params['database_id']}/colls/{params['collection_id']}"


def _create_body(params: dict[str, Any]) -> str:
    """Build the collection definition.

    Optional ``partition_key`` is a path such as "/city"; optional
    ``indexing_policy`` is passed through as-is.
    """
    body: dict[str, Any] = {"id": params["collection_id"]}
    if params.get("indexing_policy"):
        body["indexingPolicy"] = params["indexing_policy"]
    if params.get("partition_key_path"):
        body["partitionKey"] = {"paths": [params["partition_key_path"]], "kind": "Hash"}
    return json_body(body)


def _create_headers(params: dict[str, Any]) -> dict[str, str]:
    headers = option_headers(params)
    if params.get("throughput"):
        headers[HEADER_OFFER_THROUGHPUT] = str(int(params["throughput"]))
    return headers


LIST_SPEC = RestEndpointSpec(
    id="get_collections",
    method=Verb.GET.value,
    resource_type=ResourceType.COLLECTIONS.value,
    build_path=lambda params: f"{_database_link(params)}/colls",
    build_resource_link=_database_link,
    build_headers=option_headers,
)

CREATE_SPEC = RestEndpointSpec(
    id="create_collection",
    method=Verb.POST.value,
    resource_type=ResourceType.COLLECTIONS.value,
    build_path=lambda params: f"{_database_link(params)}/colls",
    build_resource_link=_database_link,
    build_body=_create_body,
    build_headers=_create_headers,
)

DELETE_SPEC = RestEndpointSpec(
    id="delete_collection",
    method=Verb.DELETE.value,
    resource_type=ResourceType.COLLECTIONS.value,
    build_path=_collection_link,
    build_resource_link=_collection_link,
    build_headers=option_headers,
)

EXISTS_SPEC = RestEndpointSpec(
    id="exists_collection",
    method=Verb.GET.value,
    resource_type=ResourceType.COLLECTIONS.value,
    build_path=_collection_link,
    build_resource_link=_collection_link,
    build_headers=option_headers,
    passthrough_statuses=frozenset({404}),
)


class CollectionsAdapter(ResponseAdapter):
    """Parse ``{"DocumentCollections": [...]}`` into Collection models."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> OperationResult:
        payload = response.json() or {}
        collections = [
            Collection.model_validate(item) for item in payload.get("DocumentCollections", [])
        ]
        return OperationResult(
            request_charge=request_charge(response),
            session_token=response.header(HEADER_SESSION_TOKEN),
            resource=collections,
        )
