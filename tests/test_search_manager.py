# -*- coding: utf-8 -*-
"""
Unit Tests for the editor's search / sort / replace logic.
"""

import pytest

from core.search_manager import SearchManager
from locforge_enums import SortField, SortOrder
from locforge_exceptions import InputError
from locforge_models import Entry


@pytest.fixture
def entries():
    return [
        Entry("b_key", "Banana"),
        Entry("a_key", "cherry"),
        Entry("c_key", "apple pie"),
    ]


@pytest.fixture
def manager():
    return SearchManager()


class TestFilterAndSort:

    def test_filter_keeps_positions(self, manager, entries):
        view = manager.filter_entries(entries, "APPLE")
        assert view == [(2, entries[2])]

    def test_filter_matches_key(self, manager, entries):
        assert [i for i, _ in manager.filter_entries(entries, "a_k")] == [1]

    def test_empty_filter(self, manager, entries):
        assert [i for i, _ in manager.filter_entries(entries, " ")] == [0, 1, 2]

    def test_sort_by_key(self, manager, entries):
        view = manager.build_view(entries, field=SortField.KEY)
        assert [i for i, _ in view] == [1, 0, 2]

    def test_sort_by_value_desc_case_insensitive(self, manager, entries):
        view = manager.build_view(entries, field=SortField.VALUE, order=SortOrder.DESC)
        assert [e.value for _, e in view] == ["cherry", "Banana", "apple pie"]

    def test_no_sort_keeps_file_order(self, manager, entries):
        assert [i for i, _ in manager.build_view(entries)] == [0, 1, 2]


class TestReplace:

    def test_replace_all(self, manager, entries):
        result = manager.replace_in_values(entries, "an", "AN")
        assert result.entries[0].value == "BANANa"
        assert result.replaced_indices == [0]
        assert entries[0].value == "Banana"

    def test_replace_restricted_to_indices(self, manager, entries):
        result = manager.replace_in_values(entries, "e", "E", indices=[2])
        assert result.replaced_count == 1
        assert result.entries[1].value == "cherry"
        assert result.entries[2].value == "applE piE"

    def test_empty_find_rejected(self, manager, entries):
        with pytest.raises(InputError):
            manager.replace_in_values(entries, "", "x")
