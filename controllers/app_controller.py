# -*- coding: utf-8 -*-
"""
LocForge App Controller

Main application controller that:
- Owns the settings model and the session
- Creates the feature controllers and forwards their status / errors
- Applies the persisted UI language and game path at startup
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

import locales
from controllers.compare_controller import CompareController
from controllers.editor_controller import EditorController
from controllers.locale_controller import LocaleController
from controllers.vehicle_order_controller import VehicleOrderController
from locforge_logger import flush_startup_buffer, get_logger
from models.session_model import SessionModel
from models.settings_model import SettingsModel
from utils import game_layout

logger = get_logger("controllers.app")


class AppController(QObject):
    """
    Main application controller - coordinates all other controllers.

    Signals:
        app_ready: Emitted when application is fully initialized
        game_path_changed(str): a new game root was selected
        status_updated(str): status bar message from any controller
        error_reported(str): error message from any controller
    """

    app_ready = Signal()
    game_path_changed = Signal(str)
    status_updated = Signal(str)
    error_reported = Signal(str)

    def __init__(
        self,
        settings: Optional[SettingsModel] = None,
        session: Optional[SessionModel] = None,
    ):
        """
        Initialize the application controller.

        Args:
            settings: Injected settings model (DI)
            session: Injected session (DI); built from settings.game_path otherwise
        """
        super().__init__()

        self._settings = settings or SettingsModel.instance()
        self._session = session or SessionModel(self._settings.game_path)

        self._compare_controller = CompareController(self._session, self._settings)
        self._editor_controller = EditorController(self._session, self._settings)
        self._order_controller = VehicleOrderController(self._session, self._settings)
        self._locale_controller = LocaleController(self._session, self._settings)

        self._connect_signals()

        logger.debug("AppController initialized")

    def _connect_signals(self):
        for controller in self.controllers:
            controller.status_message.connect(self.status_updated.emit)
            controller.error_occurred.connect(self._on_error)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def settings(self) -> SettingsModel:
        return self._settings

    @property
    def session(self) -> SessionModel:
        return self._session

    @property
    def compare_controller(self) -> CompareController:
        return self._compare_controller

    @property
    def editor_controller(self) -> EditorController:
        return self._editor_controller

    @property
    def order_controller(self) -> VehicleOrderController:
        return self._order_controller

    @property
    def locale_controller(self) -> LocaleController:
        return self._locale_controller

    @property
    def controllers(self) -> tuple:
        return (self._compare_controller, self._editor_controller,
                self._order_controller, self._locale_controller)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def initialize(self):
        """Apply persisted settings and pick the game's current locale."""
        locales.set_language(self._settings.ui_language)

        game_root = self._session.game_root
        if game_root is not None and self._session.active_locale is None:
            current = game_layout.get_user_language(game_root)
            if current:
                self._session.active_locale = current

        logger.info(f"LocForge ready (game_path={game_root})")
        self.app_ready.emit()

    def set_game_path(self, path: str) -> bool:
        """
        Select a game install root.

        The root is accepted when it has a Localization folder under one of
        the version folders.
        """
        if not game_layout.has_localization_base(path):
            logger.warning(f"No Localization folder under {path}")
            self._on_error(f"Localization folder not found under {path}")
            return False

        self._settings.game_path = str(path)
        self._settings.save()
        self._session.game_root = path
        self._session.active_locale = game_layout.get_user_language(path) or None

        self.game_path_changed.emit(str(path))
        return True

    def attach_log_handler(self, handler: logging.Handler):
        """Install a UI log handler and replay records buffered since startup."""
        logging.getLogger("locforge").addHandler(handler)
        flush_startup_buffer(handler)

    def shutdown(self):
        if self._settings.is_dirty:
            self._settings.save()
        logger.info("LocForge shutting down")

    def _on_error(self, message: str):
        self.error_reported.emit(message)
