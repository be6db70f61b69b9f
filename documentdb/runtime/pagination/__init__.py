"""Continuation-token pagination for SQL queries.

Architecture:
    The pagination layer consists of:
    - definitions.py: RetryPolicy, QueryPage and QueryResult
    - merge.py: Outer-join style merging of differently shaped pages
    - executors.py: The fetch / retry / accumulate loop
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import QueryPage, QueryResult, Record, RetryPolicy
from .executors import QueryExecutor, Sleep
from .merge import RecordMerger, merge_records

__all__ = [
    "QueryPage",
    "QueryResult",
    "Record",
    "RetryPolicy",
    "QueryExecutor",
    "Sleep",
    "RecordMerger",
    "merge_records",
]
