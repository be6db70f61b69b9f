"""Connection and per-request configuration models."""

from __future__ import annotations

import base64
import binascii
import json

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    HEADER_CONSISTENCY_LEVEL,
    HEADER_PARTITION_KEY,
    HEADER_SESSION_TOKEN,
    HEADER_USER_AGENT,
)
from .enums import ConsistencyLevel


class ConnectionInfo(BaseModel):
    """Everything needed to reach one account, database and collection.

    ``database_id`` and ``collection_id`` may stay empty for account-level
    and database-level operations respectively.
    """

    account_url: str = Field(..., min_length=1)
    primary_or_secondary_key: str = Field(..., min_length=1)
    database_id: str = ""
    collection_id: str = ""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("account_url")
    @classmethod
    def validate_account_url(cls, v: str) -> str:
        """Require an http(s) URL and drop a trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("account_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("primary_or_secondary_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Require a base64-encoded master key."""
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("primary_or_secondary_key must be base64-encoded") from e
        return v


class RequestOptions(BaseModel):
    """Optional per-call headers shared by most operations."""

    partition_key: str = ""
    consistency_level: ConsistencyLevel | None = None
    session_token: str = ""
    user_agent: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def partition_key_header(self) -> str:
        """Partition key as the JSON array literal the service expects, or empty."""
        if not self.partition_key:
            return ""
        return json.dumps([self.partition_key])

    def to_headers(self) -> dict[str, str]:
        """Render the non-empty options as request headers."""
        headers: dict[str, str] = {}
        if self.partition_key:
            headers[HEADER_PARTITION_KEY] = self.partition_key_header
        if self.consistency_level is not None:
            headers[HEADER_CONSISTENCY_LEVEL] = self.consistency_level.value
        if self.session_token:
            headers[HEADER_SESSION_TOKEN] = self.session_token
        if self.user_agent:
            headers[HEADER_USER_AGENT] = self.user_agent
        return headers
