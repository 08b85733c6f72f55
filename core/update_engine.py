# -*- coding: utf-8 -*-
"""
LocForge Update Engine

Applies selected values to a target store without disturbing anything else.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from locforge_logger import get_logger
from locforge_models import Entry

logger = get_logger("core.update")

UpdateItem = Union[Entry, Tuple[str, str]]


@dataclass
class UpdateResult:
    entries: List[Entry] = field(default_factory=list)
    updated_count: int = 0      # occurrences whose value changed
    added_count: int = 0        # new keys (merge_missing only)
    not_found: List[str] = field(default_factory=list)

    @property
    def not_found_count(self) -> int:
        return len(self.not_found)


def _to_update_map(updates: Iterable[UpdateItem]) -> Dict[str, str]:
    """Ordered key -> new value; a key given twice keeps the last value."""
    update_map = {}
    for item in updates:
        if isinstance(item, Entry):
            update_map[item.key] = item.value
        else:
            key, value = item
            update_map[key] = value
    return update_map


def apply_updates(target: Sequence[Entry], updates: Iterable[UpdateItem]) -> UpdateResult:
    """
    Rewrite the values of existing keys.

    Every occurrence of an updated key gets the new value. Keys that are not
    in target are never inserted; they are listed in not_found. Entry count
    and order are preserved exactly.

    Args:
        target: Store to update
        updates: Entry objects or (key, value) pairs

    Returns:
        UpdateResult with the new entry list
    """
    update_map = _to_update_map(updates)
    result = UpdateResult()
    seen_keys = set()

    for entry in target:
        new_value = update_map.get(entry.key)
        if new_value is None:
            result.entries.append(entry)
            continue
        seen_keys.add(entry.key)
        if new_value != entry.value:
            result.updated_count += 1
            result.entries.append(entry.with_value(new_value))
        else:
            result.entries.append(entry)

    result.not_found = [key for key in update_map if key not in seen_keys]
    if result.not_found:
        logger.warning(f"{result.not_found_count} update keys not found in target")
    logger.info(f"Applied updates: {result.updated_count} occurrences rewritten")
    return result


def merge_missing(target: Sequence[Entry], reference: Sequence[Entry],
                  additions: Iterable[UpdateItem]) -> UpdateResult:
    """
    Add keys missing from target, positioned by the reference order.

    A new key is inserted right after the closest preceding reference key
    that already exists in target (or at the start when there is none).
    Keys in additions that target already has are applied as updates.
    Keys absent from both target and reference are appended at the end.
    """
    addition_map = _to_update_map(additions)
    target = list(target)
    target_keys = {entry.key for entry in target}

    existing = {k: v for k, v in addition_map.items() if k in target_keys}
    result = apply_updates(target, existing.items())
    result.not_found = []

    new_keys = [k for k in addition_map if k not in target_keys]
    if not new_keys:
        return result

    # anchor key (or None for "before everything") -> keys to insert after it
    inserts: Dict[object, List[str]] = {}
    placed = set()
    anchor = None
    for ref_entry in reference:
        if ref_entry.key in target_keys:
            anchor = ref_entry.key
        elif ref_entry.key in addition_map and ref_entry.key not in placed:
            inserts.setdefault(anchor, []).append(ref_entry.key)
            placed.add(ref_entry.key)

    merged = [Entry(k, addition_map[k]) for k in inserts.get(None, [])]
    anchored = set()
    for entry in result.entries:
        merged.append(entry)
        # A duplicated anchor gets its inserts after the first occurrence
        if entry.key in inserts and entry.key not in anchored:
            anchored.add(entry.key)
            merged.extend(Entry(k, addition_map[k]) for k in inserts[entry.key])

    for key in new_keys:
        if key not in placed:
            merged.append(Entry(key, addition_map[key]))

    result.entries = merged
    result.added_count = len(new_keys)
    logger.info(f"Merged {result.added_count} missing keys into target")
    return result
