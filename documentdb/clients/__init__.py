"""Client entry points."""

from .document_client import DocumentClient

__all__ = ["DocumentClient"]
