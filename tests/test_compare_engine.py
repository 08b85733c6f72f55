# -*- coding: utf-8 -*-
"""
Unit Tests for the compare engine.
"""

import pytest

from core.compare_engine import (
    DiffRow, DuplicateRow, compare, compare_files, count_duplicate_keys, filter_rows,
)
from locforge_enums import CompareMode
from locforge_exceptions import (
    EmptyQueryError, InputError, InvalidCompareModeError, LocaleFileNotFoundError,
)
from locforge_models import Entry


def E(key, value):
    return Entry(key, value)


class TestMissingMode:

    def test_basic_example(self):
        result = compare([E("k1", "v1")], [E("k1", "v1"), E("k2", "v2")], "missing")
        assert result.rows == [DiffRow("k2", "v2")]
        assert result.mode == CompareMode.MISSING

    def test_reference_order(self):
        reference = [E("z", "1"), E("a", "2"), E("m", "3")]
        result = compare([E("a", "x")], reference, CompareMode.MISSING)
        assert result.keys() == ["z", "m"]

    def test_repeated_reference_key_is_one_row(self):
        reference = [E("k", "x"), E("b", "2"), E("k", "y")]
        result = compare([E("b", "2")], reference, "missing")
        assert result.rows == [DiffRow("k", "y")]
        assert result.duplicate_key_count == 1

    def test_nothing_missing(self):
        result = compare([E("a", "1")], [E("a", "other")], "missing")
        assert result.is_empty
        assert result.current_count == 1
        assert result.reference_count == 1


class TestValueMode:

    def test_trimmed_values_are_equal(self):
        result = compare([E("k1", " Hello ")], [E("k1", "Hello")], "value")
        assert result.rows == []

    def test_quoted_and_invisible_equal(self):
        result = compare([E("k1", '"Hel\u200blo"')], [E("k1", "Hello")], "value")
        assert result.rows == []

    def test_difference_reports_both_values(self):
        result = compare([E("k1", "Old"), E("k2", "Same")],
                         [E("k2", "Same"), E("k1", "New")], "value")
        assert result.rows == [DiffRow("k1", "New", "Old")]

    def test_keys_only_in_one_side_ignored(self):
        result = compare([E("only_cur", "a")], [E("only_ref", "b")], "value")
        assert result.is_empty

    def test_last_write_wins_and_warns_count(self):
        current = [E("k", "A"), E("k", "B")]
        result = compare(current, [E("k", "B")], "value")
        # the first occurrence differs from the reference, the last one does not
        assert result.rows == [DiffRow("k", "B", "A")]
        assert result.duplicate_key_count == 1


class TestDuplicateKeysMode:

    def test_example(self):
        current = [E("k1", "a"), E("k2", "b"), E("k1", "c")]
        result = compare(current, None, "duplicateKeys")
        assert result.rows == [DuplicateRow("k1", "a", 1), DuplicateRow("k1", "c", 3)]
        assert result.duplicate_key_count == 1

    def test_grouped_by_first_occurrence(self):
        current = [E("b", "1"), E("a", "2"), E("a", "3"), E("b", "4")]
        result = compare(current, [E("ignored", "x")], CompareMode.DUPLICATE_KEYS)
        assert [(r.key, r.line_number) for r in result.rows] == [
            ("b", 1), ("b", 4), ("a", 2), ("a", 3)]

    def test_no_duplicates(self):
        assert compare([E("a", "1")], None, "duplicateKeys").is_empty


class TestSearchValueMode:

    def test_matches_key_or_either_value(self):
        current = [E("greet", "Hallo Welt"), E("only_cur", "Foo")]
        reference = [E("greet", "Hello World"), E("bye", "Goodbye")]
        result = compare(current, reference, "searchValue", query="WORLD")
        assert result.rows == [DiffRow("greet", "Hello World", "Hallo Welt")]

    def test_reference_keys_first_then_current_only(self):
        current = [E("c_only", "match"), E("shared", "match")]
        reference = [E("shared", "x"), E("r_only", "match")]
        result = compare(current, reference, "searchValue", query="match")
        assert result.keys() == ["shared", "r_only", "c_only"]
        assert result.rows[2] == DiffRow("c_only", "", "match")

    def test_key_matches(self):
        result = compare([], [E("ui_menu_title", "x")], "searchValue", query="menu")
        assert result.keys() == ["ui_menu_title"]

    @pytest.mark.parametrize("query", [None, "", "   ", "\u200b"])
    def test_empty_query_rejected(self, query):
        with pytest.raises(EmptyQueryError):
            compare([E("a", "1")], [E("a", "1")], "searchValue", query=query)


class TestContract:

    def test_unknown_mode(self):
        with pytest.raises(InvalidCompareModeError):
            compare([], [], "bogus")

    def test_reference_required(self):
        with pytest.raises(InputError):
            compare([], None, "missing")

    def test_count_duplicate_keys(self):
        assert count_duplicate_keys([E("a", "1"), E("a", "2"), E("b", "3"), E("b", "4")]) == 2


class TestCompareFiles:

    def test_reads_both_files(self, tmp_path):
        cur = tmp_path / "cur.ini"
        ref = tmp_path / "ref.ini"
        cur.write_text("k1=v1\n", encoding="utf-8")
        ref.write_bytes(b"\xef\xbb\xbfk1=v1\r\nk2=v2\r\n")
        result = compare_files(cur, ref, "missing")
        assert result.rows == [DiffRow("k2", "v2")]

    def test_duplicate_mode_ignores_reference(self, tmp_path):
        cur = tmp_path / "cur.ini"
        cur.write_text("a=1\na=2\n", encoding="utf-8")
        result = compare_files(cur, tmp_path / "does_not_exist.ini", "duplicateKeys")
        assert result.count == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(LocaleFileNotFoundError):
            compare_files(tmp_path / "nope.ini", tmp_path / "nope2.ini", "missing")


class TestFilterRows:

    def test_filters_all_columns(self):
        rows = [DiffRow("alpha", "one", "uno"), DiffRow("beta", "two", None)]
        assert filter_rows(rows, "UNO") == [rows[0]]
        assert filter_rows(rows, "bet") == [rows[1]]
        assert filter_rows(rows, "") == rows

    def test_duplicate_rows(self):
        rows = [DuplicateRow("k", "Value", 1)]
        assert filter_rows(rows, "value") == rows
