# -*- coding: utf-8 -*-
"""
LocForge Editor Controller

Handles the locale editor's business logic:
- Loading a locale file into a LocaleFile model
- Editing single values and replace-all
- Search and sort views that remember each entry's original position
- Saving back with the file's own line ending / BOM
"""

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from core.change_log import ChangeRecord, ChangeSource, record_entry_changes
from core.search_manager import IndexedEntry, ReplaceResult, SearchManager
from locales import tr
from locforge_enums import SortField, SortOrder
from locforge_exceptions import LocForgeError
from locforge_logger import get_logger
from models.locale_file import LocaleFile
from models.session_model import SessionModel
from models.settings_model import SettingsModel

logger = get_logger("controllers.editor")


class EditorController(QObject):
    """
    Controller for the editor view.

    Signals:
        file_loaded(LocaleFile): a file was opened
        entries_changed(list): 0-based positions whose value changed
        file_saved(str): path written
        status_message(str): user-facing status text
        error_occurred(str): an operation failed
    """

    file_loaded = Signal(object)
    entries_changed = Signal(list)
    file_saved = Signal(str)
    status_message = Signal(str)
    error_occurred = Signal(str)

    def __init__(self, session: Optional[SessionModel] = None,
                 settings: Optional[SettingsModel] = None):
        super().__init__()
        self._session = session or SessionModel()
        self._settings = settings or SettingsModel.instance()
        self._search = SearchManager()

        self._file: Optional[LocaleFile] = None
        self._keyword = ""
        self._sort_field = SortField.NONE
        self._sort_order = SortOrder.ASC

        logger.debug("EditorController initialized")

    @property
    def locale_file(self) -> Optional[LocaleFile]:
        return self._file

    def _report_error(self, error: LocForgeError):
        logger.error(f"Editor operation failed: {error}")
        self.error_occurred.emit(error.message)

    def _require_file(self) -> bool:
        if self._file is None:
            self.error_occurred.emit(tr("editor_no_file"))
            return False
        return True

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self, file_path: Optional[str] = None) -> Optional[LocaleFile]:
        """
        Open a locale file.

        Args:
            file_path: Path to load; defaults to the session's active locale file
        """
        try:
            path = file_path or self._session.locale_ini_path()
            locale_file = LocaleFile.load(path)
        except LocForgeError as e:
            self._report_error(e)
            return None

        self._file = locale_file
        self._file.subscribe('entries_updated', self.entries_changed.emit)
        self._settings.add_recent_file(str(path))

        self.status_message.emit(tr("editor_loaded", count=locale_file.entry_count))
        self.file_loaded.emit(locale_file)
        return locale_file

    # =========================================================================
    # EDITING
    # =========================================================================

    def set_value(self, index: int, value: str) -> bool:
        """Change one value by its 0-based position in the file."""
        if not self._require_file():
            return False

        entry = self._file.get_entry(index)
        if entry is None:
            logger.warning(f"set_value: index {index} out of range")
            return False
        if entry.value == value:
            return True

        self._file.set_value(index, value)
        self._session.change_log.add_record(ChangeRecord(
            file_path=self._file.file_path,
            line_number=index + 1,
            key=entry.key,
            before_text=entry.value,
            after_text=value,
            source=ChangeSource.MANUAL,
        ))
        return True

    def replace(self, find_text: str, replace_text: str,
                within_view: bool = False) -> Optional[ReplaceResult]:
        """
        Replace text in all values.

        Args:
            find_text: Literal text to find
            replace_text: Replacement
            within_view: Only touch entries visible in the current search view
        """
        if not self._require_file():
            return None
        if not find_text:
            self.error_occurred.emit(tr("editor_find_empty"))
            return None

        before = self._file.entries
        indices = [i for i, _ in self.search(self._keyword)] if within_view else None
        try:
            result = self._search.replace_in_values(before, find_text, replace_text, indices)
        except LocForgeError as e:
            self._report_error(e)
            return None

        if result.replaced_count:
            self._file.replace_entries(result.entries)
            record_entry_changes(self._session.change_log, self._file.file_path,
                                 before, result.entries, ChangeSource.REPLACE)

        self.status_message.emit(tr("editor_replaced", count=result.replaced_count))
        return result

    def revert_all(self) -> int:
        if not self._require_file():
            return 0
        return self._file.revert_all()

    # =========================================================================
    # VIEWS
    # =========================================================================

    def search(self, keyword: str) -> List[IndexedEntry]:
        """Filtered view (keeping the current sort) as (position, entry) pairs."""
        self._keyword = keyword or ""
        if self._file is None:
            return []
        return self._search.build_view(self._file.entries, self._keyword,
                                       self._sort_field, self._sort_order)

    def sorted_view(self, field: SortField = SortField.NONE,
                    order: SortOrder = SortOrder.ASC) -> List[IndexedEntry]:
        """Current search view sorted by key or value."""
        self._sort_field = SortField(field)
        self._sort_order = SortOrder(order)
        return self.search(self._keyword)

    # =========================================================================
    # SAVING
    # =========================================================================

    def save(self, file_path: Optional[str] = None) -> bool:
        """Write the whole file back (or to file_path)."""
        if not self._require_file():
            return False
        try:
            written = self._file.save(file_path)
        except LocForgeError as e:
            self._report_error(e)
            return False

        self.status_message.emit(tr("editor_saved"))
        self.file_saved.emit(str(written))
        return True
