"""Resource payload models.

The service decorates every resource with system properties prefixed with
an underscore (``_rid``, ``_self``, ``_etag``, ``_ts``). Pydantic does not
allow leading underscores in field names, so they are exposed through
aliases. Unknown properties are kept as extras.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """Common system properties."""

    id: str = Field(..., min_length=1)
    rid: str | None = Field(None, alias="_rid")
    self_link: str | None = Field(None, alias="_self")
    etag: str | None = Field(None, alias="_etag")
    ts: int | None = Field(None, alias="_ts")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class Database(Resource):
    """Database resource."""

    pass


class PartitionKeyDefinition(BaseModel):
    """Partition key paths of a collection."""

    paths: list[str] = Field(default_factory=list)
    kind: str = "Hash"

    model_config = ConfigDict(frozen=True, extra="allow")


class Collection(Resource):
    """Collection resource."""

    indexing_policy: dict[str, Any] | None = Field(None, alias="indexingPolicy")
    partition_key: PartitionKeyDefinition | None = Field(None, alias="partitionKey")


class OfferContent(BaseModel):
    """Throughput settings of an offer."""

    offer_throughput: int | None = Field(None, alias="offerThroughput")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class Offer(Resource):
    """Throughput offer attached to a collection."""

    offer_version: str | None = Field(None, alias="offerVersion")
    offer_type: str | None = Field(None, alias="offerType")
    content: OfferContent | None = None
    resource: str | None = None
    offer_resource_id: str | None = Field(None, alias="offerResourceId")

    @property
    def throughput(self) -> int | None:
        return self.content.offer_throughput if self.content else None


class OperationResult(BaseModel):
    """Cost and session state of a single-request operation.

    ``resource`` holds the decoded payload for calls that return one.
    """

    request_charge: float = Field(0.0, ge=0)
    session_token: str | None = None
    resource: Any = None

    model_config = ConfigDict(frozen=True)


class ExistsResult(OperationResult):
    """Outcome of an existence check."""

    exists: bool = False


class CountResult(OperationResult):
    """Outcome of a count query."""

    count: int = 0
