# -*- coding: utf-8 -*-
"""
LocForge Locale Controller

Manages installed locales of the selected game root:
- Listing and switching the game language (system.cfg)
- Importing / exporting global.ini files
- Deleting locales that are not in use
"""

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from core.vehicle_order import strip_order
from locales import tr
from locforge_exceptions import LocForgeError, ProfileFormatError
from locforge_logger import get_logger
from models.locale_file import LocaleFileFormat, read_locale_file, write_locale_file
from models.session_model import SessionModel
from models.settings_model import SettingsModel
from utils import game_layout

logger = get_logger("controllers.locale")


class LocaleController(QObject):
    """
    Controller for locale management.

    Signals:
        locales_changed(list): installed locale names changed
        language_changed(str): the game language was switched ("" after reset)
        status_message(str): user-facing status text
        error_occurred(str): an operation failed
    """

    locales_changed = Signal(list)
    language_changed = Signal(str)
    status_message = Signal(str)
    error_occurred = Signal(str)

    def __init__(self, session: Optional[SessionModel] = None,
                 settings: Optional[SettingsModel] = None):
        super().__init__()
        self._session = session or SessionModel()
        self._settings = settings or SettingsModel.instance()

        logger.debug("LocaleController initialized")

    def _report_error(self, error: LocForgeError):
        logger.error(f"Locale operation failed: {error}")
        self.error_occurred.emit(error.message)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def list_locales(self) -> List[str]:
        try:
            return game_layout.list_installed_locales(self._session.require_game_root())
        except LocForgeError as e:
            self._report_error(e)
            return []

    def current_language(self) -> str:
        """Language configured in system.cfg, "" when the game default is used."""
        if self._session.game_root is None:
            return ""
        return game_layout.get_user_language(self._session.game_root)

    # =========================================================================
    # GAME LANGUAGE
    # =========================================================================

    def switch_language(self, locale: str) -> bool:
        try:
            game_layout.set_user_language(self._session.require_game_root(), locale)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self._session.active_locale = locale
        self.status_message.emit(tr("locale_switched", locale=locale))
        self.language_changed.emit(locale)
        return True

    def reset_language(self) -> bool:
        try:
            game_layout.reset_to_default_language(self._session.require_game_root())
        except LocForgeError as e:
            self._report_error(e)
            return False
        self.status_message.emit(tr("locale_reset"))
        self.language_changed.emit("")
        return True

    # =========================================================================
    # FILES
    # =========================================================================

    def import_locale(self, locale: str, source_path: str) -> bool:
        try:
            game_layout.import_locale_file(self._session.require_game_root(), locale, source_path)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self.status_message.emit(tr("locale_imported", locale=locale))
        self.locales_changed.emit(self.list_locales())
        return True

    def export_locale(self, locale: str, dest_path: str, strip_prefixes: bool = False) -> bool:
        """
        Copy a locale's global.ini to dest_path.

        With strip_prefixes, vehicles of the active order are written without
        their order prefix; the installed file is left untouched.
        """
        try:
            game_root = self._session.require_game_root()
            if strip_prefixes:
                self._export_stripped(game_root, locale, dest_path)
            else:
                game_layout.export_locale_file(game_root, locale, dest_path)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self.status_message.emit(tr("locale_exported", locale=locale, path=dest_path))
        return True

    def _export_stripped(self, game_root, locale: str, dest_path: str):
        entries = read_locale_file(game_layout.get_locale_ini_path(game_root, locale))
        base_keys = self._session.active_order
        if base_keys is None:
            try:
                base_keys = self._session.profile_store().load_active() or []
            except ProfileFormatError as e:
                logger.warning(f"Active order unreadable, exporting unchanged: {e}")
                base_keys = []
        file_format = LocaleFileFormat(eol=self._settings.line_ending, bom=self._settings.write_bom)
        write_locale_file(dest_path, strip_order(entries, base_keys), file_format)

    def delete_locale(self, locale: str) -> bool:
        try:
            game_layout.delete_locale(self._session.require_game_root(), locale)
        except LocForgeError as e:
            self._report_error(e)
            return False
        if self._session.active_locale == locale:
            self._session.active_locale = None
        self.status_message.emit(tr("locale_deleted", locale=locale))
        self.locales_changed.emit(self.list_locales())
        return True
