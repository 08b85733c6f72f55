import re
from pathlib import Path

VERSION = "0.4.2"
APP_NAME = "LocForge"
DEFAULT_UI_LANGUAGE = "zh_TW"  # Supported: "zh_TW", "en"

SETTINGS_DIR = Path.home() / ".locforge"
SETTINGS_FILE_PATH = SETTINGS_DIR / "settings.json"

# Game directory layout
VERSION_FOLDERS = ("LIVE", "PTU", "EPTU")
DEFAULT_VERSION_FOLDER = "LIVE"
DATA_DIR_NAME = "data"
LOCALIZATION_DIR_NAME = "Localization"
LOCALE_FILE_NAME = "global.ini"
SYSTEM_CFG_NAME = "system.cfg"
SYSTEM_CFG_LANGUAGE_KEY = "g_language"
SYSTEM_CFG_SYS_LANGUAGES_KEY = "sys_languages"
SYSTEM_CFG_AUDIO_DEFAULT = "g_languageAudio=english"

# Vehicle order storage, next to Localization
SORT_DIR_NAME = "Sort"
SORT_SAVE_DIR_NAME = "save"
ACTIVE_ORDER_FILE_NAME = "active.json"
ORDER_PROFILE_TYPE = "vehicle_order"
ORDER_PROFILE_VERSION = 1

# Vehicle name keys and the display-order prefix ("001 Avenger")
VEHICLE_KEY_MARKER = "vehicle_name"
SHORT_SUFFIX = "_short"
SHORT_P_SUFFIX = "_short,p"
SHORT_P_REPLACEMENT = ",P"
ORDER_PREFIX_REGEX = re.compile(r'^([0-9]{3})\s+')
ORDER_PREFIX_WIDTH = 3

DEFAULT_INSERT_POSITION = "append"  # "append" or "prepend"

# The game reads global.ini as CRLF + UTF-8 BOM
DEFAULT_LINE_ENDING = "\r\n"
DEFAULT_WRITE_BOM = True
UTF8_BOM = "\ufeff"

# Characters replaced by "_" in profile file names
PROFILE_NAME_FORBIDDEN = '\\/:*?"<>|'

RECENT_FILES_LIMIT = 10

__all__ = [
    "VERSION", "APP_NAME", "DEFAULT_UI_LANGUAGE",
    "SETTINGS_DIR", "SETTINGS_FILE_PATH",
    "VERSION_FOLDERS", "DEFAULT_VERSION_FOLDER", "DATA_DIR_NAME",
    "LOCALIZATION_DIR_NAME", "LOCALE_FILE_NAME", "SYSTEM_CFG_NAME",
    "SYSTEM_CFG_LANGUAGE_KEY", "SYSTEM_CFG_SYS_LANGUAGES_KEY", "SYSTEM_CFG_AUDIO_DEFAULT",
    "SORT_DIR_NAME", "SORT_SAVE_DIR_NAME", "ACTIVE_ORDER_FILE_NAME",
    "ORDER_PROFILE_TYPE", "ORDER_PROFILE_VERSION",
    "VEHICLE_KEY_MARKER", "SHORT_SUFFIX", "SHORT_P_SUFFIX", "SHORT_P_REPLACEMENT",
    "ORDER_PREFIX_REGEX", "ORDER_PREFIX_WIDTH", "DEFAULT_INSERT_POSITION",
    "DEFAULT_LINE_ENDING", "DEFAULT_WRITE_BOM", "UTF8_BOM",
    "PROFILE_NAME_FORBIDDEN", "RECENT_FILES_LIMIT",
]

# Import logger at the end to avoid circular imports
from locforge_logger import get_logger
_logger = get_logger("config")
_logger.debug("locforge_config.py loaded")
