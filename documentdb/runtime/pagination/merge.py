"""Merging of differently shaped result pages.

Aggregate queries (``SELECT count(...)``) return scalar-shaped pages while
projections return document-shaped ones. Pages are combined like an outer
join on field names: every merged record carries the union of all fields,
with ``None`` where a record lacked one.
"""

from __future__ import annotations

from collections.abc import Iterable

from .definitions import Record


class RecordMerger:
    """Accumulates records page by page and normalizes them on demand.

    Field order is the order in which fields were first seen.
    """

    def __init__(self) -> None:
        self._records: list[Record] = []
        self._fields: dict[str, None] = {}

    def add(self, records: Iterable[Record]) -> int:
        """Add one page of records. Returns how many were added."""
        added = 0
        for record in records:
            for name in record:
                self._fields.setdefault(name, None)
            self._records.append(record)
            added += 1
        return added

    @property
    def fields(self) -> list[str]:
        return list(self._fields)

    def __len__(self) -> int:
        return len(self._records)

    def records(self) -> list[Record]:
        """All records, each with every known field."""
        fields = self.fields
        return [{name: record.get(name) for name in fields} for record in self._records]


def merge_records(*pages: Iterable[Record]) -> list[Record]:
    """Merge pages of records into one list with a shared field set.

    Examples:
        >>> merge_records([{"a": 1}], [{"b": 2}])
        [{'a': 1, 'b': None}, {'a': None, 'b': 2}]
    """
    merger = RecordMerger()
    for page in pages:
        merger.add(page)
    return merger.records()
