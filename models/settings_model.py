# -*- coding: utf-8 -*-
"""
LocForge Settings Model

Abstracts application settings with:
- Type-safe access to settings
- Change notifications via observer callbacks
- Validation and defaults
"""

from typing import Optional, Dict, Any, List, Callable
import json

from locforge_enums import InsertPosition
from locforge_exceptions import SettingsSaveError
from locforge_logger import get_logger
import locforge_config as config

logger = get_logger("models.settings")


class SettingsModel:
    """
    Singleton model for application settings.

    Provides:
    - Type-safe property access
    - Change notifications (Observer pattern)
    - Persistence as JSON in SETTINGS_FILE_PATH
    - Validation
    """

    _instance: Optional['SettingsModel'] = None
    _initialized: bool = False

    # Setting keys
    KEY_GAME_PATH = "game_path"
    KEY_UI_LANGUAGE = "ui_language"
    KEY_INSERT_POSITION = "order_insert_position"
    KEY_LAST_REFERENCE = "last_reference_path"
    KEY_WRITE_BOM = "write_bom"
    KEY_LINE_ENDING = "line_ending"  # "crlf" or "lf"
    KEY_RECENT_FILES = "recent_files"

    LINE_ENDINGS = {"crlf": "\r\n", "lf": "\n"}

    def __new__(cls) -> 'SettingsModel':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if SettingsModel._initialized:
            return

        self._settings: Dict[str, Any] = {}
        self._observers: Dict[str, List[Callable]] = {}
        self._dirty = False

        self._load()

        SettingsModel._initialized = True
        logger.debug("SettingsModel initialized")

    # =============================================================================
    # SINGLETON ACCESS
    # =============================================================================

    @classmethod
    def instance(cls) -> 'SettingsModel':
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = SettingsModel()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Reset singleton (for testing)."""
        cls._instance = None
        cls._initialized = False

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def _get_defaults(self) -> Dict[str, Any]:
        return {
            self.KEY_GAME_PATH: None,
            self.KEY_UI_LANGUAGE: config.DEFAULT_UI_LANGUAGE,
            self.KEY_INSERT_POSITION: config.DEFAULT_INSERT_POSITION,
            self.KEY_LAST_REFERENCE: None,
            self.KEY_WRITE_BOM: config.DEFAULT_WRITE_BOM,
            self.KEY_LINE_ENDING: "crlf" if config.DEFAULT_LINE_ENDING == "\r\n" else "lf",
            self.KEY_RECENT_FILES: [],
        }

    def _load(self):
        """Load settings from file."""
        self._settings = self._get_defaults()
        settings_file = config.SETTINGS_FILE_PATH

        if not settings_file.is_file():
            logger.info("Settings file not found, using defaults")
            return

        try:
            with settings_file.open('r', encoding='utf-8') as f:
                loaded = json.load(f)

            if isinstance(loaded, dict):
                self._settings.update(loaded)
                self._validate_all()
                logger.debug("Settings loaded successfully")
            else:
                logger.warning("Settings file format invalid, using defaults")

        except json.JSONDecodeError:
            logger.error("Settings file corrupted, using defaults")
        except OSError as e:
            logger.error(f"Error loading settings: {e}")

    def save(self):
        """
        Save settings to file.

        Raises:
            SettingsSaveError: the file cannot be written
        """
        settings_file = config.SETTINGS_FILE_PATH

        try:
            settings_file.parent.mkdir(parents=True, exist_ok=True)
            with settings_file.open('w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            raise SettingsSaveError(f"Failed to save settings: {e}", details=str(settings_file)) from e

        self._dirty = False
        logger.info("Settings saved successfully")

    def _validate_all(self):
        defaults = self._get_defaults()

        if self._settings.get(self.KEY_UI_LANGUAGE) not in ("zh_TW", "en"):
            self._settings[self.KEY_UI_LANGUAGE] = defaults[self.KEY_UI_LANGUAGE]

        if self._settings.get(self.KEY_INSERT_POSITION) not in [p.value for p in InsertPosition]:
            self._settings[self.KEY_INSERT_POSITION] = defaults[self.KEY_INSERT_POSITION]

        if self._settings.get(self.KEY_LINE_ENDING) not in self.LINE_ENDINGS:
            self._settings[self.KEY_LINE_ENDING] = defaults[self.KEY_LINE_ENDING]

        if not isinstance(self._settings.get(self.KEY_WRITE_BOM), bool):
            self._settings[self.KEY_WRITE_BOM] = defaults[self.KEY_WRITE_BOM]

        if not isinstance(self._settings.get(self.KEY_RECENT_FILES), list):
            self._settings[self.KEY_RECENT_FILES] = []

    # =============================================================================
    # OBSERVER PATTERN
    # =============================================================================

    def subscribe(self, key: str, callback: Callable[[Any], None]):
        """
        Subscribe to changes on a specific setting.

        Args:
            key: Setting key to watch
            callback: Function called with new value when setting changes
        """
        self._observers.setdefault(key, []).append(callback)

    def unsubscribe(self, key: str, callback: Callable):
        if key in self._observers and callback in self._observers[key]:
            self._observers[key].remove(callback)

    def _notify(self, key: str, value: Any):
        for callback in self._observers.get(key, []):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Error in settings observer for '{key}': {e}")

    # =============================================================================
    # GENERIC ACCESS
    # =============================================================================

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    def set(self, key: str, value: Any, save: bool = False):
        """
        Set a setting value.

        Args:
            key: Setting key
            value: New value
            save: If True, immediately persist to disk
        """
        if self._settings.get(key) != value:
            self._settings[key] = value
            self._dirty = True
            self._notify(key, value)

            if save:
                self.save()

    # =============================================================================
    # TYPED PROPERTIES
    # =============================================================================

    @property
    def game_path(self) -> Optional[str]:
        return self._settings.get(self.KEY_GAME_PATH)

    @game_path.setter
    def game_path(self, value: Optional[str]):
        self.set(self.KEY_GAME_PATH, value)

    @property
    def ui_language(self) -> str:
        return self._settings.get(self.KEY_UI_LANGUAGE, config.DEFAULT_UI_LANGUAGE)

    @ui_language.setter
    def ui_language(self, value: str):
        if value not in ("zh_TW", "en"):
            raise ValueError(f"Invalid UI language: {value}")
        self.set(self.KEY_UI_LANGUAGE, value)

    @property
    def insert_position(self) -> InsertPosition:
        return InsertPosition(self._settings.get(self.KEY_INSERT_POSITION, config.DEFAULT_INSERT_POSITION))

    @insert_position.setter
    def insert_position(self, value):
        self.set(self.KEY_INSERT_POSITION, InsertPosition(value).value)

    @property
    def last_reference_path(self) -> Optional[str]:
        return self._settings.get(self.KEY_LAST_REFERENCE)

    @last_reference_path.setter
    def last_reference_path(self, value: Optional[str]):
        self.set(self.KEY_LAST_REFERENCE, value)

    @property
    def write_bom(self) -> bool:
        return self._settings.get(self.KEY_WRITE_BOM, config.DEFAULT_WRITE_BOM)

    @write_bom.setter
    def write_bom(self, value: bool):
        self.set(self.KEY_WRITE_BOM, bool(value))

    @property
    def line_ending(self) -> str:
        """Actual line terminator used when writing locale files."""
        return self.LINE_ENDINGS[self._settings.get(self.KEY_LINE_ENDING, "crlf")]

    @line_ending.setter
    def line_ending(self, value: str):
        if value not in self.LINE_ENDINGS:
            raise ValueError(f"Invalid line ending: {value}")
        self.set(self.KEY_LINE_ENDING, value)

    # =============================================================================
    # RECENT FILES
    # =============================================================================

    @property
    def recent_files(self) -> List[str]:
        return self._settings.get(self.KEY_RECENT_FILES, [])

    def add_recent_file(self, file_path: str, max_count: int = config.RECENT_FILES_LIMIT):
        """Add a file to recents (moves to front if exists)."""
        recents = self.recent_files.copy()
        if file_path in recents:
            recents.remove(file_path)
        recents.insert(0, file_path)
        self.set(self.KEY_RECENT_FILES, recents[:max_count])

    # =============================================================================
    # UTILITY
    # =============================================================================

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def to_dict(self) -> Dict[str, Any]:
        return self._settings.copy()

    def __repr__(self) -> str:
        return f"SettingsModel(dirty={self._dirty})"
