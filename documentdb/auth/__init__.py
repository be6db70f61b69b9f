"""Request authentication."""

from .signer import Clock, SigningRequest, http_date, sign, signed_headers, utc_now

__all__ = [
    "Clock",
    "SigningRequest",
    "http_date",
    "sign",
    "signed_headers",
    "utc_now",
]
