"""Master-key request signing.

Architecture:
    Every request carries an ``authorization`` header derived from the verb,
    resource type, resource link and request date, signed with the account's
    master key. The service recomputes the same value, so the payload layout
    and URL encoding below must match byte for byte.

Algorithm:
    1. Lower-case verb, resource type and date; resource link keeps its case
    2. payload = verb \\n type \\n link \\n date \\n "" \\n
    3. HMAC-SHA256 over the payload with the base64-decoded key
    4. Base64 the digest and append it to ``type=master&ver=1.0&sig=``
       (prefix percent-encoded then lower-cased, signature percent-encoded)
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime
from urllib.parse import quote

from ..core.constants import (
    API_VERSION,
    HEADER_AUTHORIZATION,
    HEADER_DATE,
    HEADER_VERSION,
    KEY_TYPE_MASTER,
    TOKEN_VERSION,
)
from ..core.enums import Verb
from ..core.exceptions import AuthenticationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


def http_date(moment: datetime) -> str:
    """Format a datetime as an RFC 1123 HTTP date, e.g. ``Thu, 27 Apr 2017 00:51:12 GMT``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return format_datetime(moment.astimezone(UTC), usegmt=True)


@dataclass(frozen=True)
class SigningRequest:
    """Inputs of one signature. Built fresh for every outbound request.

    Attributes:
        verb: HTTP verb (GET, POST, PUT, DELETE)
        resource_type: Resource kind, e.g. "dbs", "colls", "docs", "offers"
        resource_link: Path of the resource instance; empty for account-level calls
        timestamp: HTTP date also sent in the ``x-ms-date`` header
        secret_key: Base64-encoded master key
        key_type: Always "master"
        token_version: Always "1.0"
    """

    verb: str
    resource_type: str
    resource_link: str
    timestamp: str
    secret_key: str
    key_type: str = KEY_TYPE_MASTER
    token_version: str = TOKEN_VERSION

    def __post_init__(self) -> None:
        """Validate signing inputs."""
        required = ("verb", "resource_type", "timestamp", "secret_key", "key_type", "token_version")
        for name in required:
            if not getattr(self, name):
                raise AuthenticationError(f"{name} must not be empty")
        if Verb.from_str(self.verb) is None:
            raise AuthenticationError(f"Unsupported verb: {self.verb!r}")

    @property
    def payload(self) -> str:
        """Canonical string that gets signed."""
        fields = [
            self.verb.lower(),
            self.resource_type.lower(),
            self.resource_link,
            self.timestamp.lower(),
            "",
        ]
        return "\n".join(fields) + "\n"

    def decoded_key(self) -> bytes:
        """Decode the master key.

        Raises:
            AuthenticationError: If the key is not valid base64
        """
        try:
            return base64.b64decode(self.secret_key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AuthenticationError("Secret key is not valid base64") from e

    def sign(self) -> str:
        """Compute the authorization token for this request."""
        digest = hmac.new(
            self.decoded_key(), self.payload.encode("utf-8"), hashlib.sha256
        ).digest()
        signature = base64.b64encode(digest).decode("ascii")
        prefix = f"type={self.key_type}&ver={self.token_version}&sig="
        return quote(prefix, safe="").lower() + quote(signature, safe="")


def sign(
    verb: str,
    resource_type: str,
    resource_link: str,
    timestamp: str,
    secret_key: str,
) -> str:
    """Generate a master-key authorization token.

    Args:
        verb: HTTP verb, any case
        resource_type: Resource kind ("dbs", "colls", "docs", "offers")
        resource_link: Resource path such as "dbs/MyDatabase"; may be empty
        timestamp: HTTP date of the request
        secret_key: Base64-encoded master key

    Returns:
        URL-encoded token for the ``authorization`` header

    Raises:
        AuthenticationError: If the key is not base64 or a required field is empty

    Examples:
        >>> key = (
        ...     "dsZQi3KtZmCv1ljt3VNWNm7sQUF1y5rJfC6kv5JiwvW0EndXdDku/dkKBp8/"
        ...     "ufDToSxLzR4y+O/0H/t4bQtVNw=="
        ... )
        >>> sign("GET", "dbs", "dbs/ToDoList", "Thu, 27 Apr 2017 00:51:12 GMT", key)
        'type%3dmaster%26ver%3d1.0%26sig%3dc09PEVJrgp2uQRkr934kFbTqhByc7TVr3OHyqlu%2Bc%2Bc%3D'
    """
    return SigningRequest(
        verb=verb,
        resource_type=resource_type,
        resource_link=resource_link,
        timestamp=timestamp,
        secret_key=secret_key,
    ).sign()


def signed_headers(
    verb: str,
    resource_type: str,
    resource_link: str,
    secret_key: str,
    clock: Clock = utc_now,
) -> dict[str, str]:
    """Build the authorization, date and version headers for one request.

    The date header always carries the exact timestamp that was signed.
    """
    timestamp = http_date(clock())
    return {
        HEADER_AUTHORIZATION: sign(verb, resource_type, resource_link, timestamp, secret_key),
        HEADER_DATE: timestamp,
        HEADER_VERSION: API_VERSION,
    }
