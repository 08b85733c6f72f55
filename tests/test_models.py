# -*- coding: utf-8 -*-
"""
Unit Tests for LocForge Models

Tests for SettingsModel, SessionModel and ChangeLog.
"""

import json

import pytest

from core.change_log import ChangeLog, ChangeRecord, ChangeSource, record_entry_changes
from locforge_enums import InsertPosition
from locforge_exceptions import InvalidLocaleError, LocForgeError
from locforge_models import Entry, VehicleGroup


class TestSettingsModel:
    """Tests for SettingsModel."""

    def test_singleton(self, settings_model):
        from models.settings_model import SettingsModel
        assert SettingsModel.instance() is settings_model
        assert SettingsModel() is settings_model

    def test_defaults(self, settings_model):
        assert settings_model.game_path is None
        assert settings_model.ui_language == "zh_TW"
        assert settings_model.insert_position == InsertPosition.APPEND
        assert settings_model.write_bom is True
        assert settings_model.line_ending == "\r\n"
        assert settings_model.recent_files == []

    def test_observer(self, settings_model):
        seen = []
        settings_model.subscribe("game_path", seen.append)
        settings_model.game_path = "/games/sc"
        settings_model.game_path = "/games/sc"
        assert seen == ["/games/sc"]
        assert settings_model.is_dirty

    def test_save_and_reload(self, settings_model, settings_path):
        from models.settings_model import SettingsModel
        settings_model.insert_position = "prepend"
        settings_model.line_ending = "lf"
        settings_model.save()
        assert json.loads(settings_path.read_text(encoding="utf-8"))["line_ending"] == "lf"

        SettingsModel.reset_instance()
        reloaded = SettingsModel.instance()
        assert reloaded.insert_position == InsertPosition.PREPEND
        assert reloaded.line_ending == "\n"

    def test_invalid_values_fall_back(self, settings_path):
        from models.settings_model import SettingsModel
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({
            "ui_language": "klingon",
            "order_insert_position": "middle",
            "line_ending": "cr",
            "write_bom": "yes",
        }), encoding="utf-8")
        SettingsModel.reset_instance()
        settings = SettingsModel.instance()
        assert settings.ui_language == "zh_TW"
        assert settings.insert_position == InsertPosition.APPEND
        assert settings.line_ending == "\r\n"
        assert settings.write_bom is True
        SettingsModel.reset_instance()

    def test_corrupt_file_uses_defaults(self, settings_path):
        from models.settings_model import SettingsModel
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{broken", encoding="utf-8")
        SettingsModel.reset_instance()
        assert SettingsModel.instance().ui_language == "zh_TW"
        SettingsModel.reset_instance()

    def test_setter_validation(self, settings_model):
        with pytest.raises(ValueError):
            settings_model.ui_language = "xx"
        with pytest.raises(ValueError):
            settings_model.insert_position = "middle"

    def test_recent_files(self, settings_model):
        for i in range(12):
            settings_model.add_recent_file(f"f{i}")
        settings_model.add_recent_file("f5")
        assert settings_model.recent_files[0] == "f5"
        assert len(settings_model.recent_files) == 10


class TestSessionModel:
    """Tests for SessionModel."""

    def test_paths(self, session, game_root):
        assert session.locale_ini_path().parent.name == "chinese"
        assert session.locale_ini_path("english").parent.name == "english"
        assert session.profile_store().sort_dir == game_root / "LIVE" / "data" / "Sort"

    def test_requires_game_root(self):
        from models.session_model import SessionModel
        with pytest.raises(InvalidLocaleError):
            SessionModel().profile_store()

    def test_game_root_change_resets_order(self, session, tmp_path):
        events = []
        session.subscribe('game_root_changed', events.append)
        session.active_order = ["a"]
        session.game_root = tmp_path
        assert session.active_order is None
        assert events == [tmp_path]

    def test_active_order_is_copied(self, session):
        order = ["a", "b"]
        session.active_order = order
        order.append("c")
        assert session.active_order == ["a", "b"]


class TestChangeLog:
    """Tests for ChangeLog."""

    def test_record_entry_changes(self):
        log = ChangeLog()
        before = [Entry("a", "1"), Entry("b", "2"), Entry("c", "3")]
        after = [Entry("a", "1"), Entry("b", "X"), Entry("c", "Y")]
        added = record_entry_changes(log, "g.ini", before, after, ChangeSource.REPLACE)
        assert added == 2
        assert [r.line_number for r in log.get_records("g.ini")] == [2, 3]
        assert log.get_records(source=ChangeSource.MANUAL) == []

    def test_clear_and_listeners(self):
        log = ChangeLog()
        calls = []
        log.add_listener(lambda: calls.append(1))
        log.add_record(ChangeRecord("f", 1, "k", "a", "b", ChangeSource.MANUAL))
        log.clear()
        assert len(log) == 0
        assert calls == [1, 1]

    def test_diff_summary(self):
        record = ChangeRecord("f", 4, "key", "old", "new", ChangeSource.MANUAL)
        assert record.diff_summary == "Line 4 [key]: 'old' -> 'new'"


class TestDataModels:

    def test_entry_with_value(self):
        entry = Entry("k", "v")
        assert entry.with_value("w") == Entry("k", "w")
        assert entry.to_dict() == {"key": "k", "value": "v"}

    def test_vehicle_group_display_name(self):
        assert VehicleGroup("b").display_name == ""
        assert VehicleGroup("b", short_key="b_short", short_value="S").display_name == "S"

    def test_error_str(self):
        error = LocForgeError("boom", details={"x": 1})
        assert str(error) == "boom | Details: {'x': 1}"
