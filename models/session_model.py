# -*- coding: utf-8 -*-
"""
LocForge Session Model

Explicit session context shared by the controllers:
- The game root chosen by the user
- The locale currently being worked on
- The cached active vehicle order
- The session change log
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional

from core.change_log import ChangeLog
from core.order_profile_store import OrderProfileStore
from locforge_exceptions import InvalidLocaleError
from locforge_logger import get_logger
from utils import game_layout

logger = get_logger("models.session")


class SessionModel:
    """
    State that several views share during one run of the application.

    Each controller gets the session instead of reaching for globals; it
    keeps only its own view state locally.
    """

    def __init__(self, game_root: Optional[str] = None, active_locale: Optional[str] = None):
        self._game_root: Optional[Path] = Path(game_root) if game_root else None
        self._active_locale = active_locale
        self._active_order: Optional[List[str]] = None
        self.change_log = ChangeLog()

        self._observers: Dict[str, List[Callable]] = {
            'game_root_changed': [],
            'active_locale_changed': [],
            'active_order_changed': [],
        }

        logger.debug(f"SessionModel created (game_root={self._game_root})")

    # =============================================================================
    # PROPERTIES
    # =============================================================================

    @property
    def game_root(self) -> Optional[Path]:
        return self._game_root

    @game_root.setter
    def game_root(self, value):
        new_root = Path(value) if value else None
        if new_root != self._game_root:
            self._game_root = new_root
            self._active_order = None
            self._notify('game_root_changed', new_root)

    @property
    def active_locale(self) -> Optional[str]:
        return self._active_locale

    @active_locale.setter
    def active_locale(self, value: Optional[str]):
        if value != self._active_locale:
            self._active_locale = value
            self._notify('active_locale_changed', value)

    @property
    def active_order(self) -> Optional[List[str]]:
        """Cached active order; None until loaded or saved once."""
        return list(self._active_order) if self._active_order is not None else None

    @active_order.setter
    def active_order(self, value: Optional[List[str]]):
        self._active_order = list(value) if value is not None else None
        self._notify('active_order_changed', self.active_order)

    # =============================================================================
    # DERIVED HANDLES
    # =============================================================================

    def require_game_root(self) -> Path:
        if self._game_root is None:
            raise InvalidLocaleError("Game path is not set")
        return self._game_root

    def profile_store(self) -> OrderProfileStore:
        """Profile store rooted at the game's Sort folder."""
        return OrderProfileStore(game_layout.get_sort_path(self.require_game_root()))

    def locale_ini_path(self, locale: Optional[str] = None) -> Path:
        """global.ini of the given locale (default: the active locale)."""
        name = locale or self._active_locale
        if not name:
            raise InvalidLocaleError("No locale selected")
        return game_layout.get_locale_ini_path(self.require_game_root(), name)

    # =============================================================================
    # OBSERVER PATTERN
    # =============================================================================

    def subscribe(self, event: str, callback: Callable):
        if event in self._observers:
            self._observers[event].append(callback)
        else:
            logger.warning(f"Unknown event type: {event}")

    def unsubscribe(self, event: str, callback: Callable):
        if event in self._observers and callback in self._observers[event]:
            self._observers[event].remove(callback)

    def _notify(self, event: str, *args):
        for callback in self._observers.get(event, []):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in observer callback for '{event}': {e}")

    def __repr__(self) -> str:
        return f"SessionModel(game_root={self._game_root}, locale={self._active_locale})"
