# -*- coding: utf-8 -*-
"""
LocForge Vehicle Order Controller

Handles the vehicle ordering view:
- Loading vehicle groups from a locale file
- Editing the ordered list in memory
- Saving the active order and named profiles
- Writing order prefixes into (or stripping them from) locale files
"""

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from core.change_log import ChangeSource, record_entry_changes
from core.order_profile_store import OrderProfileStore
from core.vehicle_order import (
    OrderState, apply_order, build_vehicle_groups, derive_initial_order, strip_order,
)
from locales import tr
from locforge_exceptions import InputError, LocForgeError, ProfileFormatError
from locforge_logger import get_logger
from models.locale_file import LocaleFile
from models.session_model import SessionModel
from models.settings_model import SettingsModel

logger = get_logger("controllers.vehicle_order")


class VehicleOrderController(QObject):
    """
    Controller for the vehicle order view.

    Signals:
        order_loaded(OrderState): groups were loaded from a locale file
        order_changed(list): the ordered base keys changed
        profiles_changed(list): the list of named profiles changed
        status_message(str): user-facing status text
        error_occurred(str): an operation failed
    """

    order_loaded = Signal(object)
    order_changed = Signal(list)
    profiles_changed = Signal(list)
    status_message = Signal(str)
    error_occurred = Signal(str)

    def __init__(self, session: Optional[SessionModel] = None,
                 settings: Optional[SettingsModel] = None):
        super().__init__()
        self._session = session or SessionModel()
        self._settings = settings or SettingsModel.instance()
        self._state: Optional[OrderState] = None

        logger.debug("VehicleOrderController initialized")

    @property
    def state(self) -> Optional[OrderState]:
        return self._state

    def _report_error(self, error: LocForgeError):
        logger.error(f"Vehicle order operation failed: {error}")
        self.error_occurred.emit(error.message)

    def _store(self) -> OrderProfileStore:
        return self._session.profile_store()

    def _require_state(self) -> OrderState:
        if self._state is None:
            raise InputError("No vehicle list loaded", details={'operation': 'order'})
        return self._state

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self, locale: Optional[str] = None) -> Optional[OrderState]:
        """
        Build vehicle groups from a locale's global.ini.

        The active profile (when present and readable) decides the initial
        order; otherwise existing value prefixes do.
        """
        try:
            if locale:
                self._session.active_locale = locale
            path = self._session.locale_ini_path()
            entries = LocaleFile.load(path).entries
            groups = build_vehicle_groups(entries)

            try:
                active = self._store().load_active()
            except ProfileFormatError as e:
                logger.warning(f"Ignoring unreadable active order: {e}")
                active = None

            state = derive_initial_order(groups, active, self._settings.insert_position)
        except LocForgeError as e:
            self._report_error(e)
            return None

        self._state = state
        if active is not None:
            self._session.active_order = active

        self.status_message.emit(tr("order_loaded", count=len(groups), ordered=len(state.ordered)))
        self.order_loaded.emit(state)
        self.order_changed.emit(state.ordered)
        return state

    # =========================================================================
    # IN-MEMORY EDITING
    # =========================================================================

    def _edit(self, operation, *args) -> bool:
        try:
            state = self._require_state()
            operation(state, *args)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self.order_changed.emit(state.ordered)
        return True

    def add(self, base_key: str) -> bool:
        return self._edit(OrderState.add, base_key)

    def add_all(self) -> bool:
        return self._edit(OrderState.add_all)

    def remove(self, base_key: str) -> bool:
        return self._edit(OrderState.remove, base_key)

    def clear(self) -> bool:
        return self._edit(OrderState.clear)

    def move(self, from_index: int, to_index: int) -> bool:
        return self._edit(OrderState.move, from_index, to_index)

    def set_insert_position(self, position):
        """Persisted default plus the live state, if any."""
        self._settings.insert_position = position
        if self._state is not None:
            self._state.insert_position = self._settings.insert_position

    # =========================================================================
    # PROFILES
    # =========================================================================

    def save_active(self) -> bool:
        try:
            ordered = self._require_state().ordered
            self._store().save_active(ordered)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self._session.active_order = ordered
        self.status_message.emit(tr("order_saved_active"))
        return True

    def save_as(self, name: str) -> Optional[str]:
        """Save the current order as a named profile; returns the stored name."""
        try:
            path = self._store().save_profile(name, self._require_state().ordered)
        except LocForgeError as e:
            self._report_error(e)
            return None
        self.status_message.emit(tr("order_saved_as", name=path.stem))
        self.profiles_changed.emit(self.list_profiles())
        return path.stem

    def apply_profile(self, name: str) -> bool:
        """Replace the in-memory order with a named profile (unknown keys are dropped)."""
        try:
            state = self._require_state()
            base_keys = self._store().load_profile(name)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self._state = OrderState(state.groups, base_keys, state.insert_position)
        self.order_changed.emit(self._state.ordered)
        return True

    def delete_profile(self, name: str) -> bool:
        try:
            self._store().delete_profile(name)
        except LocForgeError as e:
            self._report_error(e)
            return False
        self.status_message.emit(tr("order_profile_deleted", name=name))
        self.profiles_changed.emit(self.list_profiles())
        return True

    def list_profiles(self) -> List[str]:
        try:
            return self._store().list_profiles()
        except LocForgeError as e:
            self._report_error(e)
            return []

    def export_profile(self, name: str, dest_path: str) -> bool:
        try:
            self._store().export_profile(name, dest_path)
        except LocForgeError as e:
            self._report_error(e)
            return False
        return True

    def import_profile(self, source_path: str) -> Optional[str]:
        try:
            name = self._store().import_profile(source_path)
        except LocForgeError as e:
            self._report_error(e)
            return None
        self.status_message.emit(tr("order_profile_imported", name=name))
        self.profiles_changed.emit(self.list_profiles())
        return name

    # =========================================================================
    # LOCALE FILES
    # =========================================================================

    def _rewrite_locale(self, locale: Optional[str], transform) -> Optional[str]:
        locale = locale or self._session.active_locale
        path = self._session.locale_ini_path(locale)
        locale_file = LocaleFile.load(path)
        before = locale_file.entries
        after = transform(before)
        locale_file.replace_entries(after)
        locale_file.save()
        record_entry_changes(self._session.change_log, str(path), before, after,
                             ChangeSource.VEHICLE_ORDER)
        return locale

    def apply_to_locale(self, locale: Optional[str] = None) -> bool:
        """
        Make the current order the active order, then write it into a locale file.

        The active order is stored first so a prefixed locale file always has
        a matching active.json for strip_from_locale.
        """
        try:
            ordered = self._require_state().ordered
            self._store().save_active(ordered)
            locale = self._rewrite_locale(locale, lambda entries: apply_order(entries, ordered))
        except LocForgeError as e:
            self._report_error(e)
            return False
        self._session.active_order = ordered
        self.status_message.emit(tr("order_applied", locale=locale))
        return True

    def strip_from_locale(self, locale: Optional[str] = None) -> bool:
        """Remove prefixes of the active order's vehicles from a locale file."""
        try:
            base_keys = self._session.active_order
            if base_keys is None:
                base_keys = self._store().load_active() or []
            locale = self._rewrite_locale(locale, lambda entries: strip_order(entries, base_keys))
        except LocForgeError as e:
            self._report_error(e)
            return False
        self.status_message.emit(tr("order_stripped", locale=locale))
        return True
