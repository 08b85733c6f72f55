# -*- coding: utf-8 -*-
"""
Unit Tests for applying updates and merging missing keys.
"""

from core.update_engine import apply_updates, merge_missing
from locforge_models import Entry


def E(key, value):
    return Entry(key, value)


class TestApplyUpdates:

    def test_unknown_key_is_noop(self):
        store = [E("a", "1"), E("b", "2")]
        result = apply_updates(store, [E("X_NOT_PRESENT", "v")])
        assert result.entries == store
        assert result.not_found == ["X_NOT_PRESENT"]
        assert result.not_found_count == 1
        assert result.updated_count == 0

    def test_updates_every_occurrence(self):
        store = [E("a", "1"), E("b", "2"), E("a", "3")]
        result = apply_updates(store, [E("a", "Z")])
        assert result.entries == [E("a", "Z"), E("b", "2"), E("a", "Z")]
        assert result.updated_count == 2

    def test_tuple_updates_and_last_wins(self):
        result = apply_updates([E("a", "1")], [("a", "x"), ("a", "y")])
        assert result.entries == [E("a", "y")]

    def test_unchanged_value_not_counted(self):
        result = apply_updates([E("a", "1")], [E("a", "1")])
        assert result.updated_count == 0
        assert result.not_found == []

    def test_length_and_order_preserved(self):
        store = [E(f"k{i}", str(i)) for i in range(10)]
        result = apply_updates(store, [E("k3", "three"), E("k7", "seven")])
        assert [e.key for e in result.entries] == [e.key for e in store]
        assert result.entries[3].value == "three"
        assert result.entries[7].value == "seven"

    def test_input_not_mutated(self):
        store = [E("a", "1")]
        apply_updates(store, [E("a", "2")])
        assert store == [E("a", "1")]


class TestMergeMissing:

    def test_inserts_after_reference_neighbour(self):
        target = [E("a", "A"), E("c", "C")]
        reference = [E("a", "a"), E("b", "b"), E("c", "c")]
        result = merge_missing(target, reference, [E("b", "B")])
        assert result.entries == [E("a", "A"), E("b", "B"), E("c", "C")]
        assert result.added_count == 1

    def test_inserts_at_start_without_anchor(self):
        target = [E("c", "C")]
        reference = [E("x", "x"), E("c", "c")]
        result = merge_missing(target, reference, [E("x", "X")])
        assert result.entries == [E("x", "X"), E("c", "C")]

    def test_consecutive_missing_keep_reference_order(self):
        target = [E("a", "A")]
        reference = [E("a", "a"), E("b", "b"), E("c", "c")]
        result = merge_missing(target, reference, [E("c", "C"), E("b", "B")])
        assert [e.key for e in result.entries] == ["a", "b", "c"]

    def test_existing_keys_are_updates(self):
        target = [E("a", "old")]
        result = merge_missing(target, [E("a", "x")], [E("a", "new")])
        assert result.entries == [E("a", "new")]
        assert result.updated_count == 1
        assert result.added_count == 0

    def test_unknown_keys_appended(self):
        result = merge_missing([E("a", "A")], [E("a", "a")], [E("zz", "Z")])
        assert result.entries == [E("a", "A"), E("zz", "Z")]

    def test_duplicated_anchor_uses_first_occurrence(self):
        target = [E("a", "1"), E("q", "Q"), E("a", "2")]
        reference = [E("a", "a"), E("b", "b")]
        result = merge_missing(target, reference, [E("b", "B")])
        assert [e.key for e in result.entries] == ["a", "b", "q", "a"]
