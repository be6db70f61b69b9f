"""Utility helpers."""

from .text import escape_text_for_json, query_body

__all__ = ["escape_text_for_json", "query_body"]
