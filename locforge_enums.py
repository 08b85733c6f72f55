"""
LocForge Enum Definitions

Type-safe enums for compare modes and order editing options.
"""

from enum import Enum


class CompareMode(str, Enum):
    """Locale comparison modes."""
    MISSING = 'missing'
    VALUE = 'value'
    DUPLICATE_KEYS = 'duplicateKeys'
    SEARCH_VALUE = 'searchValue'


class InsertPosition(str, Enum):
    """Where add() places a group in the ordered list."""
    APPEND = 'append'
    PREPEND = 'prepend'


class SortField(str, Enum):
    """Editor sort columns."""
    NONE = 'none'
    KEY = 'key'
    VALUE = 'value'


class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'
