import time
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum
from locforge_logger import get_logger

logger = get_logger("core.change_log")


class ChangeSource(Enum):
    MANUAL = "manual"
    REPLACE = "replace"
    COMPARE_UPDATE = "compare_update"
    VEHICLE_ORDER = "vehicle_order"


@dataclass
class ChangeRecord:
    file_path: str
    line_number: int    # 1-based position in the parsed store
    key: str
    before_text: str
    after_text: str
    source: ChangeSource
    timestamp: float = field(default_factory=time.time)

    @property
    def diff_summary(self) -> str:
        return f"Line {self.line_number} [{self.key}]: '{self.before_text[:20]}' -> '{self.after_text[:20]}'"


class ChangeLog:
    """
    History of edits made during the current session.
    Owned by the session, one per application instance.
    """
    def __init__(self):
        self._records: List[ChangeRecord] = []
        self._listeners = []

    def add_record(self, record: ChangeRecord):
        self._records.append(record)
        logger.debug(record.diff_summary)
        self._notify_listeners()

    def get_records(self, file_path: Optional[str] = None,
                    source: Optional[ChangeSource] = None) -> List[ChangeRecord]:
        filtered = self._records
        if file_path:
            filtered = [r for r in filtered if r.file_path == file_path]
        if source:
            filtered = [r for r in filtered if r.source == source]
        return filtered

    def clear(self, file_path: Optional[str] = None):
        if file_path:
            self._records = [r for r in self._records if r.file_path != file_path]
        else:
            self._records.clear()
        self._notify_listeners()

    def add_listener(self, callback):
        self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self):
        for cb in self._listeners:
            try:
                cb()
            except Exception as e:
                logger.error(f"Error in ChangeLog listener: {e}")

    def __len__(self):
        return len(self._records)


def record_entry_changes(change_log: ChangeLog, file_path: str, before, after,
                         source: ChangeSource) -> int:
    """
    Add one record per position whose value changed between two entry lists
    of equal length. Returns the number of records added.
    """
    added = 0
    for index, (old, new) in enumerate(zip(before, after)):
        if old.key == new.key and old.value != new.value:
            change_log.add_record(ChangeRecord(
                file_path=str(file_path),
                line_number=index + 1,
                key=new.key,
                before_text=old.value,
                after_text=new.value,
                source=source,
            ))
            added += 1
    return added
