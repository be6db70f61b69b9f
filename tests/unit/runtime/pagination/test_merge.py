"""Unit tests for record merging across pages."""

from __future__ import annotations

from documentdb.runtime.pagination import RecordMerger, merge_records


def test_union_of_fields_with_none_fill():
    merged = merge_records([{"a": 1}], [{"b": 2}])
    assert merged == [{"a": 1, "b": None}, {"a": None, "b": 2}]


def test_field_order_follows_first_appearance():
    merged = merge_records([{"id": "1", "name": "x"}], [{"count": 3, "id": "2"}])
    assert [list(record) for record in merged] == [["id", "name", "count"]] * 2


def test_record_count_is_total_of_pages():
    merged = merge_records([{"a": 1}, {"a": 2}], [], [{"a": 3}])
    assert len(merged) == 3
    assert [record["a"] for record in merged] == [1, 2, 3]


def test_empty_pages_merge_to_empty_list():
    assert merge_records() == []
    assert merge_records([], []) == []


def test_merger_tracks_fields_incrementally():
    merger = RecordMerger()
    assert merger.add([{"a": 1}]) == 1
    assert merger.fields == ["a"]
    assert merger.add([{"b": 2}, {"a": 3, "c": 4}]) == 2
    assert merger.fields == ["a", "b", "c"]
    assert len(merger) == 3
    assert merger.records()[0] == {"a": 1, "b": None, "c": None}


def test_existing_none_values_are_kept():
    merged = merge_records([{"a": None, "b": 1}])
    assert merged == [{"a": None, "b": 1}]
