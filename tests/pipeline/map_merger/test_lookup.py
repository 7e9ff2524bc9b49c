"""Tests for lookup index construction."""

from mapmerge.pipeline.map_merger.lookup import (
    EntityAttributes,
    LookupIndex,
    build_lookup_index,
)


def test_build_indexes_by_id_and_label():
    index = build_lookup_index(
        [{"id": "p1", "label": "North", "value": "7", "region": "2"}]
    )
    assert index.by_id == {"p1": EntityAttributes("7", "2", label="North")}
    assert index.by_label == {"North": EntityAttributes("7", "2", id="p1")}


def test_keys_are_trimmed_and_values_default_to_zero():
    index = build_lookup_index(
        [{"id": "  p1 ", "label": " North ", "value": "  ", "region": ""}]
    )
    entry = index.by_id["p1"]
    assert entry.value == "0"
    assert entry.region == "0"
    assert entry.label == "North"
    assert "North" in index.by_label


def test_missing_columns_are_treated_as_empty():
    index = build_lookup_index([{"id": "p1"}])
    assert index.by_id["p1"] == EntityAttributes("0", "0", label="")
    assert index.by_label == {}


def test_label_only_row_is_indexed_by_label():
    index = build_lookup_index([{"label": "Norte", "value": "5", "region": "1"}])
    assert index.by_id == {}
    assert index.by_label["Norte"] == EntityAttributes("5", "1", id="")


def test_row_without_keys_is_dropped():
    index = build_lookup_index([{"id": " ", "label": "", "value": "9"}])
    assert index.by_id == {}
    assert index.by_label == {}


def test_last_row_wins_on_duplicate_keys():
    index = build_lookup_index(
        [
            {"id": "p1", "label": "A", "value": "1", "region": "1"},
            {"id": "p1", "label": "A", "value": "2", "region": "3"},
        ]
    )
    assert index.by_id["p1"].value == "2"
    assert index.by_label["A"].region == "3"


def test_empty_index_defaults():
    index = LookupIndex()
    assert index.by_id == {} and index.by_label == {}
    assert build_lookup_index([]) == LookupIndex()


def test_empty_index_is_truthy():
    assert LookupIndex()
