# -*- coding: utf-8 -*-
"""
LocForge LocaleFile Model

File model for one global.ini style locale file:
- Reading and writing with line-ending / BOM handling
- Session edit tracking per entry
- Observer pattern for change notifications
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from pathlib import Path

import locforge_config as config
from locforge_exceptions import FileOperationError, LocaleFileNotFoundError
from locforge_logger import get_logger
from locforge_models import Entry
from parser import parse_store, serialize_store

logger = get_logger("models.locale_file")


@dataclass(frozen=True)
class LocaleFileFormat:
    """Line ending and BOM used when writing a locale file."""
    eol: str = config.DEFAULT_LINE_ENDING
    bom: bool = config.DEFAULT_WRITE_BOM


# =============================================================================
# FILE I/O
# =============================================================================

def read_locale_text(file_path) -> str:
    """
    Read a locale file as text.

    Raises:
        LocaleFileNotFoundError: the path does not exist
        FileOperationError: the file cannot be read or decoded
    """
    path = Path(file_path)
    if not path.is_file():
        raise LocaleFileNotFoundError(f"Locale file not found: {path}", file_path=str(path))

    try:
        return path.read_text(encoding='utf-8-sig', errors='strict')
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError(f"Failed to read locale file: {e}",
                                 file_path=str(path), operation='read') from e


def read_locale_file(file_path) -> List[Entry]:
    """Read and parse a locale file into an ordered entry list."""
    entries = parse_store(read_locale_text(file_path))
    logger.debug(f"Read {len(entries)} entries from {Path(file_path).name}")
    return entries


def detect_file_format(file_path) -> LocaleFileFormat:
    """
    Detect line ending and BOM of an existing file.

    Missing or unreadable files report the game's native format.
    """
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError:
        return LocaleFileFormat()

    has_bom = data.startswith(b'\xef\xbb\xbf')
    eol = "\r\n" if b"\r\n" in data else "\n"
    return LocaleFileFormat(eol=eol, bom=has_bom)


def write_locale_file(file_path, entries: List[Entry],
                      file_format: Optional[LocaleFileFormat] = None) -> Path:
    """
    Write entries to disk, replacing the whole file.

    Args:
        file_path: Destination path (parent directories are created)
        entries: Entries in output order
        file_format: Line ending / BOM, defaults to CRLF + BOM

    Returns:
        The written path
    """
    path = Path(file_path)
    file_format = file_format or LocaleFileFormat()
    content = serialize_store(entries, eol=file_format.eol)
    if file_format.bom:
        content = config.UTF8_BOM + content

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline='' keeps the eol exactly as rendered
        with path.open('w', encoding='utf-8', newline='') as f:
            f.write(content)
    except OSError as e:
        raise FileOperationError(f"Failed to write locale file: {e}",
                                 file_path=str(path), operation='write') from e

    logger.info(f"Wrote {len(entries)} entries to {path}")
    return path


# =============================================================================
# MODEL
# =============================================================================

class LocaleFile:
    """
    A loaded locale file with its entries and edit state.

    Edits are kept per entry position so duplicated keys can be edited
    independently; save() writes the whole file back (last writer wins).
    """

    def __init__(self, file_path: str, entries: List[Entry],
                 file_format: Optional[LocaleFileFormat] = None):
        self._file_path = str(file_path)
        self._entries = list(entries)
        self._initial = list(entries)
        self._file_format = file_format or LocaleFileFormat()
        self._is_modified = False

        self._observers: Dict[str, List[Callable]] = {
            'modified': [],
            'entries_updated': [],
            'saved': [],
        }

        logger.debug(f"LocaleFile created: {Path(self._file_path).name} ({len(self._entries)} entries)")

    @classmethod
    def load(cls, file_path) -> 'LocaleFile':
        """Read a file from disk, remembering its format for saving."""
        entries = read_locale_file(file_path)
        return cls(str(file_path), entries, detect_file_format(file_path))

    # =============================================================================
    # PROPERTIES
    # =============================================================================

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)

    @property
    def file_format(self) -> LocaleFileFormat:
        return self._file_format

    @file_format.setter
    def file_format(self, value: LocaleFileFormat):
        self._file_format = value

    @property
    def is_modified(self) -> bool:
        return self._is_modified

    @is_modified.setter
    def is_modified(self, value: bool):
        if self._is_modified != value:
            self._is_modified = value
            self._notify('modified', value)

    @property
    def filename(self) -> str:
        return Path(self._file_path).name

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    # =============================================================================
    # OBSERVER PATTERN
    # =============================================================================

    def subscribe(self, event: str, callback: Callable):
        """
        Subscribe to an event.

        Args:
            event: Event name ('modified', 'entries_updated', 'saved')
            callback: Function to call when event occurs
        """
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

    # =============================================================================
    # ENTRY OPERATIONS
    # =============================================================================

    def get_entry(self, index: int) -> Optional[Entry]:
        """Get entry at 0-based index, or None if out of bounds."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def set_value(self, index: int, value: str) -> bool:
        """Change the value at one position. Returns False when out of bounds."""
        entry = self.get_entry(index)
        if entry is None:
            return False
        if entry.value == value:
            return True
        self._entries[index] = entry.with_value(value)
        self._refresh_modified()
        self._notify('entries_updated', [index])
        return True

    def replace_entries(self, entries: List[Entry]):
        """Replace all entries (result of an update or ordering pass)."""
        changed = [i for i, (old, new) in enumerate(zip(self._entries, entries)) if old != new]
        if len(entries) != len(self._entries):
            changed = list(range(len(entries)))
        self._entries = list(entries)
        self._refresh_modified()
        if changed:
            self._notify('entries_updated', changed)

    def get_modified_indices(self) -> List[int]:
        """Indices whose value differs from the loaded value."""
        if len(self._entries) != len(self._initial):
            return list(range(len(self._entries)))
        return [i for i, (cur, init) in enumerate(zip(self._entries, self._initial)) if cur != init]

    def revert_all(self) -> int:
        """Drop all edits. Returns the number of reverted entries."""
        reverted = self.get_modified_indices()
        if reverted:
            self._entries = list(self._initial)
            self.is_modified = False
            self._notify('entries_updated', reverted)
        return len(reverted)

    def _refresh_modified(self):
        self.is_modified = self._entries != self._initial

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def save(self, file_path: Optional[str] = None) -> Path:
        """Write the entries back (or to file_path) and reset edit state."""
        target = file_path or self._file_path
        written = write_locale_file(target, self._entries, self._file_format)
        self._initial = list(self._entries)
        self.is_modified = False
        self._notify('saved', str(written))
        return written

    def __repr__(self) -> str:
        return f"LocaleFile({self.filename}, entries={len(self._entries)})"
