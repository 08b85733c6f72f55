# -*- coding: utf-8 -*-
"""
Locale File Patterns

Centralized patterns and character sets for parsing global.ini style files.
"""

import re


class IniPatterns:
    """
    Collection of patterns for key=value locale files.

    Organized by category:
    - Line classification (comments, key/value split)
    - Invisible characters trimmed around keys and values
    """

    # =========================================================================
    # LINE CLASSIFICATION
    # =========================================================================

    COMMENT_PREFIXES = (';', '#')

    # First '=' is the delimiter; the value may contain more '=' signs
    KEY_VALUE = re.compile(r'^([^=]*)=(.*)$', re.DOTALL)

    # Any of CRLF, CR, LF
    LINE_BREAK = re.compile(r'\r\n|\r|\n')

    # =========================================================================
    # INVISIBLE CHARACTERS
    # =========================================================================

    # Trimmed from both ends of keys and values while parsing
    EDGE_INVISIBLES = '\u200b\u200c\u200d\ufeff'

    BOM = '\ufeff'

    @classmethod
    def is_comment(cls, stripped_line: str) -> bool:
        """True for lines the parser skips as comments."""
        return stripped_line.startswith(cls.COMMENT_PREFIXES)

    @classmethod
    def clean_token(cls, text: str) -> str:
        """Trim whitespace and zero-width marks from both ends."""
        return text.strip().strip(cls.EDGE_INVISIBLES)
