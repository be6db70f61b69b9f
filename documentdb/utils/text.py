"""Text helpers for hand-built JSON bodies."""

from __future__ import annotations

# Backslash must come first so later replacements are not double-escaped
_JSON_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\b", "\\b"),
    ("\f", "\\f"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)


def escape_text_for_json(text: str) -> str:
    """Escape text for embedding inside a JSON string literal."""
    result = text
    for raw, escaped in _JSON_ESCAPES:
        result = result.replace(raw, escaped)
    return result


def query_body(query_text: str) -> str:
    """Build the ``{"query": "..."}`` request body for a SQL query."""
    return '{"query":"' + escape_text_for_json(query_text) + '"}'
