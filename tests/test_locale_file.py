# -*- coding: utf-8 -*-
"""
Unit Tests for locale file I/O and the LocaleFile model.
"""

import pytest

from locforge_exceptions import LocaleFileNotFoundError
from locforge_models import Entry
from models.locale_file import (
    LocaleFile, LocaleFileFormat, detect_file_format, read_locale_file, write_locale_file,
)


class TestFileIO:

    def test_write_default_crlf_bom(self, tmp_path):
        path = write_locale_file(tmp_path / "out" / "global.ini", [Entry("a", "1"), Entry("b", "2")])
        assert path.read_bytes() == b"\xef\xbb\xbfa=1\r\nb=2\r\n"

    def test_write_lf_without_bom(self, tmp_path):
        path = write_locale_file(tmp_path / "g.ini", [Entry("a", "1")], LocaleFileFormat("\n", False))
        assert path.read_bytes() == b"a=1\n"

    def test_read_strips_bom(self, tmp_path, sample_text):
        path = tmp_path / "g.ini"
        path.write_text(sample_text, encoding="utf-8", newline="")
        entries = read_locale_file(path)
        assert entries[0] == Entry("ui_ok", "OK")
        assert len(entries) == 5

    def test_read_missing(self, tmp_path):
        with pytest.raises(LocaleFileNotFoundError):
            read_locale_file(tmp_path / "missing.ini")

    def test_write_keeps_entry_order(self, tmp_path):
        entries = [Entry("z", "1"), Entry("a", "2"), Entry("z", "3")]
        path = write_locale_file(tmp_path / "g.ini", entries)
        assert read_locale_file(path) == entries

    def test_detect_format(self, tmp_path):
        crlf = tmp_path / "crlf.ini"
        crlf.write_bytes(b"\xef\xbb\xbfa=1\r\n")
        lf = tmp_path / "lf.ini"
        lf.write_bytes(b"a=1\n")
        assert detect_file_format(crlf) == LocaleFileFormat("\r\n", True)
        assert detect_file_format(lf) == LocaleFileFormat("\n", False)
        assert detect_file_format(tmp_path / "none.ini") == LocaleFileFormat()


class TestLocaleFileModel:

    @pytest.fixture
    def locale_file(self, tmp_path):
        path = tmp_path / "g.ini"
        path.write_bytes(b"a=1\nb=2\na=3\n")
        return LocaleFile.load(path)

    def test_load_keeps_format(self, locale_file):
        assert locale_file.file_format == LocaleFileFormat("\n", False)
        assert locale_file.entry_count == 3

    def test_set_value_by_position(self, locale_file):
        events = []
        locale_file.subscribe('entries_updated', events.append)
        assert locale_file.set_value(2, "X")
        assert locale_file.entries[0].value == "1"
        assert locale_file.entries[2].value == "X"
        assert locale_file.is_modified
        assert locale_file.get_modified_indices() == [2]
        assert events == [[2]]

    def test_set_value_out_of_range(self, locale_file):
        assert not locale_file.set_value(10, "X")

    def test_revert_all(self, locale_file):
        locale_file.set_value(0, "X")
        assert locale_file.revert_all() == 1
        assert not locale_file.is_modified

    def test_save_round_trip(self, locale_file):
        saved = []
        locale_file.subscribe('saved', saved.append)
        locale_file.set_value(1, "two")
        path = locale_file.save()
        assert path.read_bytes() == b"a=1\nb=two\na=3\n"
        assert not locale_file.is_modified
        assert saved == [str(path)]

    def test_entries_returns_copy(self, locale_file):
        locale_file.entries.clear()
        assert locale_file.entry_count == 3
