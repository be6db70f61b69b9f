"""Shared protocol constants.

This module centralizes header names, the REST API version and default
values used by the signer, the query executor and the resource endpoints.
"""

from __future__ import annotations

# REST API version sent with every request
API_VERSION = "2016-07-11"

# Master-key token parameters
KEY_TYPE_MASTER = "master"
TOKEN_VERSION = "1.0"

# Request headers
HEADER_AUTHORIZATION = "authorization"
HEADER_DATE = "x-ms-date"
HEADER_VERSION = "x-ms-version"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"
HEADER_USER_AGENT = "User-Agent"
HEADER_IS_QUERY = "x-ms-documentdb-isquery"
HEADER_ENABLE_CROSS_PARTITION = "x-ms-documentdb-query-enablecrosspartition"
HEADER_MAX_ITEM_COUNT = "x-ms-max-item-count"
HEADER_PARTITION_KEY = "x-ms-documentdb-partitionkey"
HEADER_CONSISTENCY_LEVEL = "x-ms-consistency-level"
HEADER_IS_UPSERT = "x-ms-documentdb-is-upsert"
HEADER_OFFER_THROUGHPUT = "x-ms-offer-throughput"

# Headers shared by requests and responses
HEADER_CONTINUATION = "x-ms-continuation"
HEADER_SESSION_TOKEN = "x-ms-session-token"

# Response headers
HEADER_REQUEST_CHARGE = "x-ms-request-charge"
HEADER_RETRY_AFTER_MS = "x-ms-retry-after-ms"

CONTENT_TYPE_QUERY = "application/query+json"
CONTENT_TYPE_JSON = "application/json"

# Query defaults
DEFAULT_MAX_ITEM_COUNT = 100
DELETE_BATCH_SIZE = 1000

# Offer (throughput) constraints
THROUGHPUT_STEP = 100

# Key the service uses for unnamed projections, e.g. SELECT VALUE count(1)
SCALAR_FIELD = "$1"
