# -*- coding: utf-8 -*-
"""
LocForge Vehicle Order Engine

Vehicle display names live in entries whose key contains "vehicle_name".
Their in-game sort order is encoded as a 3-digit prefix in the value
("001 Avenger"). This module groups long/short name variants under a base
key, derives the current order, edits it in memory and writes it back.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import locforge_config as config
from locforge_enums import InsertPosition
from locforge_exceptions import OrderIndexError, UnknownVehicleError, VehicleOrderStateError
from locforge_logger import get_logger
from locforge_models import Entry, VehicleGroup

logger = get_logger("core.vehicle_order")


# =============================================================================
# KEY / VALUE HELPERS
# =============================================================================

def is_vehicle_key(key: str) -> bool:
    return config.VEHICLE_KEY_MARKER in key.lower()


def make_base_key(key: str) -> Tuple[str, bool]:
    """
    Base identifier of a vehicle key.

    Returns:
        (base_key, is_short). "_short,p" becomes ",P"; "_short" is dropped;
        anything else is a long key and its own base.
    """
    lowered = key.lower()
    if lowered.endswith(config.SHORT_P_SUFFIX):
        return key[:-len(config.SHORT_P_SUFFIX)] + config.SHORT_P_REPLACEMENT, True
    if lowered.endswith(config.SHORT_SUFFIX):
        return key[:-len(config.SHORT_SUFFIX)], True
    return key, False


def split_order_prefix(value: str) -> Tuple[Optional[int], str]:
    """
    Split "NNN <text>" into (NNN, text).

    Values without the prefix return (None, value).
    """
    match = config.ORDER_PREFIX_REGEX.match(value)
    if not match:
        return None, value
    return int(match.group(1)), value[match.end():]


def strip_order_prefix(value: str) -> str:
    return split_order_prefix(value)[1]


def format_order_prefix(position: int) -> str:
    """1-based position -> zero padded prefix, e.g. 7 -> "007"."""
    return str(position).zfill(config.ORDER_PREFIX_WIDTH)


# =============================================================================
# GROUPING
# =============================================================================

def build_vehicle_groups(entries: Sequence[Entry]) -> List[VehicleGroup]:
    """
    Collect vehicle-name entries into groups keyed by base key.

    Groups are returned in order of first appearance. A second long (or
    short) member for the same base key is ignored.
    """
    groups: Dict[str, VehicleGroup] = {}
    long_orders: Dict[str, Optional[int]] = {}
    short_orders: Dict[str, Optional[int]] = {}

    for entry in entries:
        if not is_vehicle_key(entry.key):
            continue

        base_key, is_short = make_base_key(entry.key)
        group = groups.get(base_key)
        if group is None:
            group = groups[base_key] = VehicleGroup(base_key)

        order, clean = split_order_prefix(entry.value)
        if is_short:
            if group.short_key is not None:
                logger.debug(f"Ignoring duplicate short member {entry.key} for {base_key}")
                continue
            group.short_key = entry.key
            group.short_value = clean
            short_orders[base_key] = order
        else:
            if group.long_key is not None:
                logger.debug(f"Ignoring duplicate long member {entry.key} for {base_key}")
                continue
            group.long_key = entry.key
            group.long_value = clean
            long_orders[base_key] = order

    for base_key, group in groups.items():
        long_order = long_orders.get(base_key)
        group.detected_order = long_order if long_order is not None else short_orders.get(base_key)

    logger.debug(f"Built {len(groups)} vehicle groups")
    return list(groups.values())


# =============================================================================
# ORDER STATE
# =============================================================================

class OrderState:
    """
    In-memory ordered / unordered split of vehicle groups.

    ordered holds base keys in display order; unordered keeps the remaining
    groups in their first-appearance order.
    """

    def __init__(self, groups: Sequence[VehicleGroup], ordered: Sequence[str] = (),
                 insert_position: InsertPosition = InsertPosition.APPEND):
        self._groups: Dict[str, VehicleGroup] = {g.base_key: g for g in groups}
        self._appearance: Dict[str, int] = {g.base_key: i for i, g in enumerate(groups)}
        self.insert_position = InsertPosition(insert_position)

        self._ordered: List[str] = []
        for base_key in ordered:
            if base_key in self._groups and base_key not in self._ordered:
                self._ordered.append(base_key)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def ordered(self) -> List[str]:
        return list(self._ordered)

    @property
    def unordered(self) -> List[str]:
        in_order = set(self._ordered)
        return [key for key in self._groups if key not in in_order]

    @property
    def groups(self) -> List[VehicleGroup]:
        return list(self._groups.values())

    def get_group(self, base_key: str) -> Optional[VehicleGroup]:
        return self._groups.get(base_key)

    def is_ordered(self, base_key: str) -> bool:
        return base_key in self._ordered

    def prefix_for(self, base_key: str) -> Optional[str]:
        """Prefix the key would get on apply, or None when unordered."""
        if base_key not in self._ordered:
            return None
        return format_order_prefix(self._ordered.index(base_key) + 1)

    # =========================================================================
    # EDITING
    # =========================================================================

    def add(self, base_key: str):
        """Move an unordered group into the ordered list."""
        if base_key not in self._groups:
            raise UnknownVehicleError(f"Unknown vehicle: {base_key}", base_key=base_key)
        if base_key in self._ordered:
            raise VehicleOrderStateError(f"Vehicle is already ordered: {base_key}",
                                         base_key=base_key, ordered=True)

        if self.insert_position == InsertPosition.PREPEND:
            self._ordered.insert(0, base_key)
        else:
            self._ordered.append(base_key)

    def add_all(self):
        """Add every unordered group, in first-appearance order."""
        pending = self.unordered
        if self.insert_position == InsertPosition.PREPEND:
            self._ordered = pending + self._ordered
        else:
            self._ordered.extend(pending)

    def remove(self, base_key: str):
        """Move a group back to unordered; it loses its prefix on apply."""
        if base_key not in self._groups:
            raise UnknownVehicleError(f"Unknown vehicle: {base_key}", base_key=base_key)
        if base_key not in self._ordered:
            raise VehicleOrderStateError(f"Vehicle is not ordered: {base_key}",
                                         base_key=base_key, ordered=False)
        self._ordered.remove(base_key)

    def clear(self):
        self._ordered.clear()

    def move(self, from_index: int, to_index: int):
        """Relocate one element; everything between shifts by one."""
        size = len(self._ordered)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise OrderIndexError(f"Move out of range for {size} ordered vehicles",
                                  from_index=from_index, to_index=to_index)
        if from_index == to_index:
            return
        base_key = self._ordered.pop(from_index)
        self._ordered.insert(to_index, base_key)

    def filter_unordered(self, keyword: str) -> List[str]:
        """Unordered base keys whose key or names contain keyword."""
        needle = (keyword or "").strip().lower()
        if not needle:
            return self.unordered
        result = []
        for base_key in self.unordered:
            group = self._groups[base_key]
            haystack = [base_key, group.long_value or "", group.short_value or ""]
            if any(needle in text.lower() for text in haystack):
                result.append(base_key)
        return result


def derive_initial_order(groups: Sequence[VehicleGroup], active_profile: Optional[Sequence[str]] = None,
                         insert_position: InsertPosition = InsertPosition.APPEND) -> OrderState:
    """
    Initial ordered list for a freshly loaded store.

    The active profile wins when it names at least one known group;
    otherwise groups carrying a numeric prefix are ordered by it (ties keep
    first-appearance order).
    """
    known = {g.base_key for g in groups}

    if active_profile:
        from_profile = [key for key in active_profile if key in known]
        if from_profile:
            logger.info(f"Initial order from active profile ({len(from_profile)} vehicles)")
            return OrderState(groups, from_profile, insert_position)

    prefixed = [g for g in groups if g.detected_order is not None]
    prefixed.sort(key=lambda g: g.detected_order)  # stable
    logger.info(f"Initial order from value prefixes ({len(prefixed)} vehicles)")
    return OrderState(groups, [g.base_key for g in prefixed], insert_position)


# =============================================================================
# APPLYING
# =============================================================================

def apply_order(entries: Sequence[Entry], ordered_base_keys: Sequence[str]) -> List[Entry]:
    """
    Rewrite vehicle-name values to match an order.

    Ordered vehicles get "NNN <clean>", all other vehicles lose any prefix.
    Non-vehicle entries and entry order are untouched. Idempotent.
    """
    positions: Dict[str, int] = {}
    for index, base_key in enumerate(ordered_base_keys):
        positions.setdefault(base_key, index + 1)

    result = []
    for entry in entries:
        if not is_vehicle_key(entry.key):
            result.append(entry)
            continue
        base_key, _ = make_base_key(entry.key)
        clean = strip_order_prefix(entry.value)
        position = positions.get(base_key)
        value = f"{format_order_prefix(position)} {clean}" if position else clean
        result.append(entry if value == entry.value else entry.with_value(value))
    return result


def strip_order(entries: Sequence[Entry], base_keys: Sequence[str]) -> List[Entry]:
    """Remove prefixes only from vehicles whose base key is listed."""
    targets = set(base_keys)
    result = []
    for entry in entries:
        if is_vehicle_key(entry.key) and make_base_key(entry.key)[0] in targets:
            result.append(entry.with_value(strip_order_prefix(entry.value)))
        else:
            result.append(entry)
    return result
