# -*- coding: utf-8 -*-
"""
LocForge Parser Package

Parser and serializer for flat key=value locale files.
"""

from parser.patterns import IniPatterns
from parser.core import (
    parse_store,
    parse_store_with_report,
    serialize_store,
)

__all__ = [
    'IniPatterns',
    'parse_store',
    'parse_store_with_report',
    'serialize_store',
]
