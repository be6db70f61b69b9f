"""Database endpoint definitions (create, delete, exists)."""

from __future__ import annotations

from typing import Any

from ..core.enums import ResourceType, Verb
from ..runtime.rest import RestEndpointSpec
from .common import json_body, option_headers


def _database_link(params: dict[str, Any]) -> str:
    return f"dbs/{params['database_id']}"


def _create_body(params: dict[str, Any]) -> str:
    return json_body({"id": params["database_id"]})


CREATE_SPEC = RestEndpointSpec(
    id="create_database",
    method=Verb.POST.value,
    resource_type=ResourceType.DATABASES.value,
    build_path=lambda _params: "dbs",
    # Account-level: the signed link is empty
    build_resource_link=lambda _params: "",
    build_body=_create_body,
    build_headers=option_headers,
)

DELETE_SPEC = RestEndpointSpec(
    id="delete_database",
    method=Verb.DELETE.value,
    resource_type=ResourceType.DATABASES.value,
    build_path=_database_link,
    build_resource_link=_database_link,
    build_headers=option_headers,
)

EXISTS_SPEC = RestEndpointSpec(
    id="exists_database",
    method=Verb.GET.value,
    resource_type=ResourceType.DATABASES.value,
    build_path=_database_link,
    build_resource_link=_database_link,
    build_headers=option_headers,
    passthrough_statuses=frozenset({404}),
)
