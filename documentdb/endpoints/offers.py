"""Offer (throughput) endpoint definitions and validation rules."""

from __future__ import annotations

from typing import Any

from ..core.constants import HEADER_SESSION_TOKEN, THROUGHPUT_STEP
from ..core.enums import ResourceType, Verb
from ..core.exceptions import ConfigurationError
from ..models import Collection, Offer, OperationResult
from ..runtime.rest import HTTPResponse, ResponseAdapter, RestEndpointSpec
from .common import json_body, option_headers, request_charge

MIN_THROUGHPUT = 400
# Single-partition collections cannot go above this; partitioned ones cannot go to or below it
SINGLE_PARTITION_MAX_THROUGHPUT = 10_000
OFFER_VERSION_V2 = "V2"


def _replace_body(params: dict[str, Any]) -> str:
    collection: Collection = params["collection"]
    offer: Offer = params["offer"]
    throughput: int = params["throughput"]
    return json_body(
        {
            "offerVersion": OFFER_VERSION_V2,
            "offerType": "Invalid",
            "content": {
                "offerThroughput": throughput,
                "userSpecifiedThroughput": throughput,
            },
            "resource": collection.self_link,
            "offerResourceId": collection.rid,
            "id": offer.rid,
            "_rid": offer.rid,
        }
    )


LIST_SPEC = RestEndpointSpec(
    id="get_offers",
    method=Verb.GET.value,
    resource_type=ResourceType.OFFERS.value,
    build_path=lambda _params: "offers",
    build_resource_link=lambda _params: "",
    build_headers=option_headers,
)

REPLACE_SPEC = RestEndpointSpec(
    id="replace_offer",
    method=Verb.PUT.value,
    resource_type=ResourceType.OFFERS.value,
    build_path=lambda params: f"offers/{params['offer'].rid}",
    # Offer links are signed lower-cased
    build_resource_link=lambda params: params["offer"].rid.lower(),
    build_body=_replace_body,
    build_headers=option_headers,
)


class OffersAdapter(ResponseAdapter):
    """Parse ``{"Offers": [...]}`` into Offer models."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> OperationResult:
        payload = response.json() or {}
        offers = [Offer.model_validate(item) for item in payload.get("Offers", [])]
        return OperationResult(
            request_charge=request_charge(response),
            session_token=response.header(HEADER_SESSION_TOKEN),
            resource=offers,
        )


def validate_throughput(throughput: Any, offer: Offer, collection_id: str) -> int:
    """Check a requested throughput against the collection's current offer.

    Raises:
        ConfigurationError: If the value is not an integer multiple of 100,
            below the minimum, or crosses the single-partition limit
    """
    try:
        value = int(throughput)
    except (TypeError, ValueError) as e:
        raise ConfigurationError('"throughput" must be an integer value.') from e
    if isinstance(throughput, float) and not throughput.is_integer():
        raise ConfigurationError('"throughput" must be an integer value.')
    if value % THROUGHPUT_STEP != 0:
        raise ConfigurationError('"throughput" must be a multiple of 100.')
    if value < MIN_THROUGHPUT:
        raise ConfigurationError(f"The minimum throughput supported is {MIN_THROUGHPUT} RU's")

    if offer.offer_version != OFFER_VERSION_V2:
        if value > SINGLE_PARTITION_MAX_THROUGHPUT:
            raise ConfigurationError(
                f'Collection "{collection_id}" currently has an offer version of '
                f"{offer.offer_version}. When switching to a user-defined throughput, "
                "the maximum throughput is 10,000."
            )
        return value

    current = offer.throughput or 0
    if current <= SINGLE_PARTITION_MAX_THROUGHPUT and value > SINGLE_PARTITION_MAX_THROUGHPUT:
        raise ConfigurationError(
            f'The maximum throughput for collection "{collection_id}" is 10,000 '
            "because it has only one partition."
        )
    if current > SINGLE_PARTITION_MAX_THROUGHPUT and value <= SINGLE_PARTITION_MAX_THROUGHPUT:
        raise ConfigurationError(
            f'The minimum throughput for collection "{collection_id}" is 10,100 '
            "because it has multiple partitions."
        )
    return value
