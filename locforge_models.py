"""
LocForge Data Models

Data structures shared by the parser, the compare/update engines and the
vehicle ordering engine.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Entry:
    """
    One key=value pair from a locale file.

    Keys are not unique within a store: duplicates are kept in their
    original positions. The 1-based position of an Entry in its list is its
    user-facing line number.
    """
    key: str
    value: str

    def with_value(self, value: str) -> 'Entry':
        """Return a copy carrying a different value."""
        return Entry(self.key, value)

    def to_dict(self) -> dict:
        return {'key': self.key, 'value': self.value}


@dataclass
class ParseReport:
    """Result of parsing a locale text with skip statistics."""
    entries: List[Entry] = field(default_factory=list)
    skipped_lines: int = 0
    had_bom: bool = False

    @property
    def entry_count(self) -> int:
        return len(self.entries)


@dataclass
class VehicleGroup:
    """
    Long and short vehicle-name entries that share one base identifier.

    Values are stored without their display-order prefix; the prefix found
    at load time is kept in detected_order.
    """
    base_key: str
    long_key: Optional[str] = None
    short_key: Optional[str] = None
    long_value: Optional[str] = None
    short_value: Optional[str] = None
    detected_order: Optional[int] = None

    @property
    def display_name(self) -> str:
        if self.long_value is not None:
            return self.long_value
        return self.short_value or ""

    @property
    def has_long(self) -> bool:
        return self.long_key is not None

    @property
    def has_short(self) -> bool:
        return self.short_key is not None
