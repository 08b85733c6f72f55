# -*- coding: utf-8 -*-
"""
LocForge Compare Controller

Handles the compare view's business logic:
- Running a comparison between the current and a reference file
- Writing selected result rows back into the current file
- Exporting result rows as a standalone locale file
"""

from typing import Dict, List, Optional, Sequence

from PySide6.QtCore import QObject, Signal

from core.change_log import ChangeSource, record_entry_changes
from core.compare_engine import CompareResult, DiffRow, coerce_mode, compare, filter_rows
from core.update_engine import UpdateResult, apply_updates, merge_missing
from locales import tr
from locforge_enums import CompareMode
from locforge_exceptions import InputError, LocForgeError
from locforge_logger import get_logger
from locforge_models import Entry
from models.locale_file import LocaleFile, LocaleFileFormat, read_locale_file, write_locale_file
from models.session_model import SessionModel
from models.settings_model import SettingsModel

logger = get_logger("controllers.compare")

_FOUND_MESSAGES = {
    CompareMode.MISSING: ("compare_found_missing", "compare_no_missing"),
    CompareMode.VALUE: ("compare_found_value", "compare_no_value"),
    CompareMode.SEARCH_VALUE: ("compare_found_search", "compare_no_search"),
    CompareMode.DUPLICATE_KEYS: ("compare_found_duplicates", "compare_no_duplicates"),
}


class CompareController(QObject):
    """
    Controller for the compare view.

    Signals:
        compare_finished(CompareResult): a comparison completed
        save_finished(UpdateResult): selected rows were written to the current file
        status_message(str): user-facing status text
        error_occurred(str): an operation failed
    """

    compare_finished = Signal(object)
    save_finished = Signal(object)
    status_message = Signal(str)
    error_occurred = Signal(str)

    def __init__(self, session: Optional[SessionModel] = None,
                 settings: Optional[SettingsModel] = None):
        super().__init__()
        self._session = session or SessionModel()
        self._settings = settings or SettingsModel.instance()

        self._current_path: Optional[str] = None
        self._reference_path: Optional[str] = None
        self._reference_entries = []
        self._last_result: Optional[CompareResult] = None

        logger.debug("CompareController initialized")

    @property
    def last_result(self) -> Optional[CompareResult]:
        return self._last_result

    def _report_error(self, error: LocForgeError):
        logger.error(f"Compare operation failed: {error}")
        self.error_occurred.emit(tr("compare_failed", error=error.message))

    def _file_format(self) -> LocaleFileFormat:
        return LocaleFileFormat(eol=self._settings.line_ending, bom=self._settings.write_bom)

    @staticmethod
    def _missing_value(row: DiffRow, edited: Optional[str]) -> str:
        if edited is not None and edited.strip():
            return edited
        return row.value

    # =========================================================================
    # COMPARE
    # =========================================================================

    def run_compare(self, current_path: str, reference_path: Optional[str],
                    mode, query: Optional[str] = None) -> Optional[CompareResult]:
        """
        Compare two locale files.

        Args:
            current_path: File being maintained
            reference_path: Reference file (may be None for duplicateKeys)
            mode: CompareMode or its string value
            query: Search text for searchValue

        Returns:
            CompareResult, or None on failure (error_occurred is emitted)
        """
        try:
            mode = coerce_mode(mode)
            current = read_locale_file(current_path)
            reference = None
            if mode != CompareMode.DUPLICATE_KEYS:
                if not reference_path:
                    raise InputError("A reference file is required", details={'mode': str(mode)})
                reference = read_locale_file(reference_path)
            result = compare(current, reference, mode, query)
        except LocForgeError as e:
            self._report_error(e)
            return None

        self._current_path = str(current_path)
        self._reference_path = str(reference_path) if reference_path else None
        self._reference_entries = reference or []
        self._last_result = result

        if reference_path:
            self._settings.last_reference_path = str(reference_path)
        self._settings.add_recent_file(str(current_path))

        found_key, empty_key = _FOUND_MESSAGES[result.mode]
        self.status_message.emit(tr(found_key, count=result.count) if result.count else tr(empty_key))
        self.compare_finished.emit(result)
        return result

    def filter_results(self, keyword: str) -> list:
        """Rows of the last result matching keyword."""
        if self._last_result is None:
            return []
        return filter_rows(self._last_result.rows, keyword)

    # =========================================================================
    # SAVE / EXPORT
    # =========================================================================

    def save_updates(self, rows: Sequence[DiffRow],
                     edits: Optional[Dict[str, str]] = None) -> Optional[UpdateResult]:
        """
        Write selected rows into the current file.

        Args:
            rows: Selected result rows of the last comparison
            edits: Values typed by the user, keyed by entry key

        missing rows are inserted next to their reference neighbours with the
        edited value, or the reference value when the edit is blank. value rows
        write the edited current-file column, which defaults to the current
        value. searchValue and duplicateKeys results cannot be saved.
        """
        rows = list(rows)
        edits = edits or {}
        if not rows:
            self.error_occurred.emit(tr("compare_select_at_least_one"))
            return None
        if self._last_result is None or self._current_path is None:
            self.error_occurred.emit(tr("editor_no_file"))
            return None

        mode = self._last_result.mode
        try:
            if mode in (CompareMode.DUPLICATE_KEYS, CompareMode.SEARCH_VALUE):
                raise InputError(f"{mode.value} results cannot be saved as updates",
                                 details={'mode': mode.value})

            locale_file = LocaleFile.load(self._current_path)
            before = locale_file.entries
            if mode == CompareMode.MISSING:
                updates = [Entry(row.key, self._missing_value(row, edits.get(row.key)))
                           for row in rows]
                result = merge_missing(before, self._reference_entries, updates)
            else:
                updates = [Entry(row.key, edits.get(row.key, row.current_value or ""))
                           for row in rows]
                result = apply_updates(before, updates)

            locale_file.replace_entries(result.entries)
            locale_file.save()
        except LocForgeError as e:
            self._report_error(e)
            return None

        if len(before) == len(result.entries):
            record_entry_changes(self._session.change_log, self._current_path,
                                 before, result.entries, ChangeSource.COMPARE_UPDATE)

        self.status_message.emit(tr("compare_saved", count=result.updated_count + result.added_count))
        if result.not_found:
            self.status_message.emit(tr("compare_not_found_keys", count=result.not_found_count))
        self.save_finished.emit(result)
        return result

    def export_rows(self, rows: Sequence[DiffRow], dest_path: str) -> bool:
        """Write rows (any mode) as key=value lines to dest_path."""
        entries: List[Entry] = [Entry(row.key, row.value) for row in rows]
        if not entries:
            self.error_occurred.emit(tr("compare_select_at_least_one"))
            return False
        try:
            write_locale_file(dest_path, entries, self._file_format())
        except LocForgeError as e:
            self._report_error(e)
            return False

        self.status_message.emit(tr("compare_exported", count=len(entries), path=dest_path))
        return True
