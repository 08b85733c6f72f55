# -*- coding: utf-8 -*-
"""
LocForge Test Fixtures

Shared fixtures for all tests.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def sample_text() -> str:
    """A small global.ini with a comment, a blank line and a BOM."""
    return (
        "\ufeff; header comment\r\n"
        "ui_ok=OK\r\n"
        "ui_cancel=Cancel\r\n"
        "\r\n"
        "vehicle_Name_AEGS_Avenger=002 Avenger\r\n"
        "vehicle_Name_AEGS_Avenger_short=002 AVG\r\n"
        "vehicle_Name_ANVL_Hornet=Hornet\r\n"
    )


@pytest.fixture
def sample_entries():
    from locforge_models import Entry
    return [
        Entry("ui_ok", "OK"),
        Entry("ui_cancel", "Cancel"),
        Entry("vehicle_Name_AEGS_Avenger", "002 Avenger"),
        Entry("vehicle_Name_AEGS_Avenger_short", "002 AVG"),
        Entry("vehicle_Name_ANVL_Hornet", "Hornet"),
    ]


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================

@pytest.fixture
def settings_path(tmp_path, monkeypatch) -> Path:
    """Redirect the settings file into tmp_path."""
    import locforge_config as config
    path = tmp_path / "settings" / "settings.json"
    monkeypatch.setattr(config, "SETTINGS_FILE_PATH", path)
    return path


@pytest.fixture
def settings_model(settings_path):
    """Fresh SettingsModel instance backed by a temp file."""
    from models.settings_model import SettingsModel
    SettingsModel.reset_instance()
    yield SettingsModel.instance()
    SettingsModel.reset_instance()


# =============================================================================
# GAME TREE FIXTURES
# =============================================================================

def write_ini(path: Path, lines, bom: bool = True):
    path.parent.mkdir(parents=True, exist_ok=True)
    content = "".join(f"{line}\r\n" for line in lines)
    path.write_bytes((b"\xef\xbb\xbf" if bom else b"") + content.encode("utf-8"))
    return path


@pytest.fixture
def game_root(tmp_path) -> Path:
    """
    <root>/LIVE/data/Localization/{english,chinese}/global.ini and system.cfg
    selecting chinese.
    """
    root = tmp_path / "StarCitizen"
    loc = root / "LIVE" / "data" / "Localization"
    write_ini(loc / "english" / "global.ini", [
        "ui_ok=OK",
        "vehicle_Name_AEGS_Avenger=Avenger",
        "vehicle_Name_AEGS_Avenger_short=AVG",
        "vehicle_Name_ANVL_Hornet=Hornet",
    ])
    write_ini(loc / "chinese" / "global.ini", [
        "ui_ok=確定",
        "vehicle_Name_AEGS_Avenger=復仇者",
        "vehicle_Name_AEGS_Avenger_short=復仇",
        "vehicle_Name_ANVL_Hornet=大黃蜂",
        "vehicle_Name_RSI_Aurora=極光",
    ])
    (root / "LIVE" / "data" / "system.cfg").write_text(
        "sys_languages=chinese\ng_language=chinese\ng_languageAudio=english\n", encoding="utf-8")
    return root


@pytest.fixture
def session(game_root):
    from models.session_model import SessionModel
    return SessionModel(str(game_root), "chinese")


@pytest.fixture(scope="session")
def qapp():
    """Core application so Qt signal delivery works without a display."""
    from PySide6.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
