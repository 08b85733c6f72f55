# -*- coding: utf-8 -*-
"""
Unit Tests for the order profile store.
"""

import json

import pytest

from core.order_profile_store import (
    OrderProfileStore, sanitize_profile_name, validate_profile_document,
)
from locforge_exceptions import (
    InputError, NotFoundError, ProfileFormatError, ProfileNotFoundError,
)


@pytest.fixture
def store(tmp_path):
    return OrderProfileStore(tmp_path / "Sort")


class TestNamedProfiles:

    def test_round_trip_and_delete(self, store):
        store.save_profile("x", ["a", "b"])
        assert store.load_profile("x") == ["a", "b"]
        store.delete_profile("x")
        with pytest.raises(NotFoundError):
            store.load_profile("x")

    def test_document_shape_on_disk(self, store):
        path = store.save_profile("fleet", ["a"])
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document == {"type": "vehicle_order", "version": 1, "baseKeys": ["a"]}

    def test_name_sanitized(self, store):
        path = store.save_profile('  a/b:c*?  ', ["k"])
        assert path.name == "a_b_c__.json"
        assert store.load_profile("a/b:c*?") == ["k"]

    def test_empty_name_rejected(self, store):
        with pytest.raises(InputError):
            store.save_profile("   ", ["a"])

    def test_list_sorted(self, store):
        assert store.list_profiles() == []
        store.save_profile("zeta", [])
        store.save_profile("alpha", [])
        (store.save_dir / "notes.txt").write_text("x")
        assert store.list_profiles() == ["alpha", "zeta"]

    def test_delete_missing(self, store):
        with pytest.raises(ProfileNotFoundError):
            store.delete_profile("ghost")

    def test_malformed_json(self, store):
        store.ensure_dirs()
        (store.save_dir / "bad.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ProfileFormatError):
            store.load_profile("bad")


class TestActiveProfile:

    def test_absent(self, store):
        assert store.load_active() is None
        assert not store.has_active()

    def test_save_load_clear(self, store):
        store.save_active(["b", "a"])
        assert store.load_active() == ["b", "a"]
        store.clear_active()
        assert store.load_active() is None

    def test_activate_profile(self, store):
        store.save_profile("race", ["x", "y"])
        assert store.activate_profile("race") == ["x", "y"]
        assert store.load_active() == ["x", "y"]


class TestImportExport:

    def test_export_then_import(self, store, tmp_path):
        store.save_profile("mine", ["a"])
        exported = store.export_profile("mine", tmp_path / "shared.json")
        name = store.import_profile(exported)
        assert name == "shared"
        assert store.load_profile("shared") == ["a"]

    def test_import_rejects_wrong_type(self, store, tmp_path):
        source = tmp_path / "other.json"
        source.write_text(json.dumps({"type": "something", "version": 1, "baseKeys": []}))
        with pytest.raises(ProfileFormatError):
            store.import_profile(source)
        assert store.list_profiles() == []

    def test_import_missing_file(self, store, tmp_path):
        with pytest.raises(ProfileNotFoundError):
            store.import_profile(tmp_path / "missing.json")


class TestValidation:

    @pytest.mark.parametrize("document", [
        [],
        {"type": "vehicle_order", "version": 0, "baseKeys": []},
        {"type": "vehicle_order", "version": True, "baseKeys": []},
        {"type": "vehicle_order", "version": "1", "baseKeys": []},
        {"type": "vehicle_order", "version": 1, "baseKeys": "a"},
        {"type": "vehicle_order", "version": 1, "baseKeys": [1, 2]},
        {"version": 1, "baseKeys": []},
    ])
    def test_rejects(self, document):
        with pytest.raises(ProfileFormatError):
            validate_profile_document(document)

    def test_accepts_newer_version(self):
        assert validate_profile_document(
            {"type": "vehicle_order", "version": 2, "baseKeys": ["a"]}) == ["a"]

    def test_sanitize(self):
        assert sanitize_profile_name(' a\\b|c"d ') == "a_b_c_d"
