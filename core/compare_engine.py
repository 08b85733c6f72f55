# -*- coding: utf-8 -*-
"""
LocForge Compare Engine

Reconciles a current locale store against a reference store:
- missing: reference keys absent from current
- value: shared keys whose normalized values differ
- duplicateKeys: every occurrence of a key repeated in current
- searchValue: key / value substring search across both sides

Duplicate keys in the inputs are not errors outside duplicateKeys mode;
lookups use last-write-wins and the duplicate count is reported.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from locforge_enums import CompareMode
from locforge_exceptions import EmptyQueryError, InvalidCompareModeError
from locforge_logger import get_logger
from locforge_models import Entry
from core.text_utils import normalize_for_compare, normalize_query
from models.locale_file import read_locale_file

logger = get_logger("core.compare")


@dataclass(frozen=True)
class DiffRow:
    """
    One result row for missing / value / searchValue modes.

    value is always the reference value (the "target" column);
    current_value is the current file's raw value, or None when the key is
    not present in current.
    """
    key: str
    value: str
    current_value: Optional[str] = None

    def to_entry(self) -> Entry:
        return Entry(self.key, self.value)


@dataclass(frozen=True)
class DuplicateRow:
    """One occurrence of a duplicated key; line_number is 1-based."""
    key: str
    value: str
    line_number: int


@dataclass
class CompareResult:
    mode: CompareMode
    rows: List[Union[DiffRow, DuplicateRow]] = field(default_factory=list)
    current_count: int = 0
    reference_count: int = 0
    # Keys that occur more than once in either input (informational)
    duplicate_key_count: int = 0

    @property
    def count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def keys(self) -> List[str]:
        return [row.key for row in self.rows]


def build_value_map(entries: Sequence[Entry]) -> Dict[str, str]:
    """key -> value with last-write-wins for duplicated keys."""
    value_map = {}
    for entry in entries:
        value_map[entry.key] = entry.value
    return value_map


def count_duplicate_keys(entries: Sequence[Entry]) -> int:
    """Number of distinct keys occurring more than once."""
    return sum(1 for n in Counter(e.key for e in entries).values() if n > 1)


def coerce_mode(mode) -> CompareMode:
    try:
        return CompareMode(mode)
    except ValueError:
        raise InvalidCompareModeError(f"Unknown compare mode: {mode}", mode=mode) from None


# =============================================================================
# MODES
# =============================================================================

def find_missing(current: Sequence[Entry], reference: Sequence[Entry]) -> List[DiffRow]:
    """
    Reference keys that do not exist in current, in reference order.

    A key repeated in the reference yields one row at its first position,
    carrying the last value (last-write-wins).
    """
    current_keys = {entry.key for entry in current}
    reference_map = build_value_map(reference)
    rows = []
    seen = set()
    for entry in reference:
        if entry.key in current_keys or entry.key in seen:
            continue
        seen.add(entry.key)
        rows.append(DiffRow(entry.key, reference_map[entry.key]))
    return rows


def find_value_differences(current: Sequence[Entry], reference: Sequence[Entry]) -> List[DiffRow]:
    """Shared keys whose normalized values differ, in current order."""
    reference_map = build_value_map(reference)
    rows = []
    for entry in current:
        ref_value = reference_map.get(entry.key)
        if ref_value is None:
            continue
        if normalize_for_compare(ref_value) != normalize_for_compare(entry.value):
            rows.append(DiffRow(entry.key, ref_value, entry.value))
    return rows


def find_duplicate_keys(current: Sequence[Entry]) -> List[DuplicateRow]:
    """
    Every occurrence of each key seen at least twice.

    Groups follow the first occurrence of each key; rows inside a group
    follow the parse sequence.
    """
    groups: Dict[str, List[DuplicateRow]] = {}
    for index, entry in enumerate(current, start=1):
        groups.setdefault(entry.key, []).append(DuplicateRow(entry.key, entry.value, index))

    rows = []
    for occurrences in groups.values():
        if len(occurrences) > 1:
            rows.extend(occurrences)
    return rows


def search_values(current: Sequence[Entry], reference: Sequence[Entry], query: str) -> List[DiffRow]:
    """
    Keys where the key, or either side's normalized value, contains query.

    Raises:
        EmptyQueryError: query is empty after normalization
    """
    needle = normalize_query(query)
    if not needle:
        raise EmptyQueryError(operation="searchValue")

    reference_map = build_value_map(reference)
    current_map = build_value_map(current)

    ordered_keys = list(reference_map)
    ordered_keys.extend(key for key in current_map if key not in reference_map)

    rows = []
    for key in ordered_keys:
        ref_value = reference_map.get(key, "")
        cur_value = current_map.get(key)
        if (needle in key.lower()
                or needle in normalize_query(ref_value)
                or needle in normalize_query(cur_value)):
            rows.append(DiffRow(key, ref_value, cur_value))
    return rows


# =============================================================================
# ENTRY POINT
# =============================================================================

def compare(current: Sequence[Entry], reference: Optional[Sequence[Entry]],
            mode, query: Optional[str] = None) -> CompareResult:
    """
    Compare two parsed stores.

    Args:
        current: Entries of the file being maintained
        reference: Entries of the reference file (ignored for duplicateKeys)
        mode: CompareMode or its string value
        query: Search text, required for searchValue

    Returns:
        CompareResult with rows and counts

    Raises:
        InvalidCompareModeError: unknown mode, or no reference for a mode that needs one
        EmptyQueryError: searchValue without a usable query
    """
    mode = coerce_mode(mode)
    current = list(current)

    if mode == CompareMode.DUPLICATE_KEYS:
        rows = find_duplicate_keys(current)
        result = CompareResult(mode, rows, current_count=len(current),
                               duplicate_key_count=len({row.key for row in rows}))
        logger.info(f"Duplicate scan: {result.count} rows over {result.duplicate_key_count} keys")
        return result

    if reference is None:
        raise InvalidCompareModeError(f"Mode '{mode.value}' requires a reference store", mode=mode.value)
    reference = list(reference)

    if mode == CompareMode.MISSING:
        rows = find_missing(current, reference)
    elif mode == CompareMode.VALUE:
        rows = find_value_differences(current, reference)
    else:
        rows = search_values(current, reference, query)

    duplicates = count_duplicate_keys(current) + count_duplicate_keys(reference)
    if duplicates:
        logger.warning(f"{duplicates} duplicated keys in compare inputs; using last occurrence")

    result = CompareResult(mode, rows, len(current), len(reference), duplicates)
    logger.info(f"Compare ({mode.value}): {result.count} rows "
                f"(current={result.current_count}, reference={result.reference_count})")
    return result


def compare_files(current_path, reference_path, mode, query: Optional[str] = None) -> CompareResult:
    """
    Read both files and compare them.

    Read failures propagate as LocaleFileNotFoundError / FileOperationError.
    """
    mode = coerce_mode(mode)
    current = read_locale_file(current_path)
    if mode == CompareMode.DUPLICATE_KEYS:
        return compare(current, None, mode)
    reference = read_locale_file(reference_path)
    return compare(current, reference, mode, query)


def filter_rows(rows: Sequence[Union[DiffRow, DuplicateRow]], keyword: str) -> list:
    """Case-insensitive keyword filter over key and value columns."""
    needle = (keyword or "").strip().lower()
    if not needle:
        return list(rows)

    def _hit(row) -> bool:
        if needle in row.key.lower() or needle in row.value.lower():
            return True
        current_value = getattr(row, 'current_value', None)
        return bool(current_value) and needle in current_value.lower()

    return [row for row in rows if _hit(row)]
