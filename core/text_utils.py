import re
import unicodedata

# Zero-width space/non-joiner/joiner, BOM, word joiner, Mongolian vowel separator
_INVISIBLE_REGEX = re.compile(r'[\u200b-\u200d\ufeff\u2060\u180e]')

# Ideographic space and no-break space count as a plain space
_WIDE_SPACE_REGEX = re.compile(r'[\u3000\u00a0]')

_SPACE_RUN_REGEX = re.compile(r'[ \t]+')

_QUOTES = ('"', "'")


def normalize_for_compare(value) -> str:
    """
    Canonical form of a locale value for equality and search.

    Two raw values are considered equal when their normalized forms are
    equal. Never raises; None gives "".
    """
    if value is None:
        return ""

    text = str(value).replace('\r\n', '\n').replace('\r', '\n')
    text = unicodedata.normalize('NFC', text)
    text = _INVISIBLE_REGEX.sub('', text)
    text = _WIDE_SPACE_REGEX.sub(' ', text)
    text = _SPACE_RUN_REGEX.sub(' ', text)
    text = text.strip()

    # One layer of matching outer quotes
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        text = text[1:-1].strip()

    return text


def normalize_query(query) -> str:
    """Normalized, lower-cased form used for substring search."""
    return normalize_for_compare(query).lower()


def values_equal(left, right) -> bool:
    return normalize_for_compare(left) == normalize_for_compare(right)
