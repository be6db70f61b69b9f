"""Structured error body returned by the service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError


class RemoteError(BaseModel):
    """Error payload, e.g. ``{"code": "BadRequest", "message": "..."}``."""

    code: str
    message: str

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_body(cls, body: str, status: int) -> RemoteError:
        """Decode an error body once at the boundary.

        Bodies that are empty or lack ``code``/``message`` fall back to the
        HTTP status as code and the raw text as message.
        """
        fallback = cls(code=str(status), message=body or f"HTTP {status}")
        if not body:
            return fallback
        try:
            return cls.model_validate_json(body)
        except ValidationError:
            return fallback
