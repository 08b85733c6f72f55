# -*- coding: utf-8 -*-
"""
Parser Core Functions

Entry points for turning locale text into an ordered Entry list and back.
Parsing never raises: lines that are not key=value are dropped.
"""

from typing import Iterable, List

from locforge_logger import get_logger
from locforge_models import Entry, ParseReport
from parser.patterns import IniPatterns

logger = get_logger("parser.core")


def parse_store_with_report(text: str) -> ParseReport:
    """
    Parse locale text and report how many lines were skipped.

    Args:
        text: Whole file content (BOM and any line ending accepted)

    Returns:
        ParseReport with entries in original order, duplicates included
    """
    report = ParseReport()
    if not text:
        return report

    if text.startswith(IniPatterns.BOM):
        text = text[len(IniPatterns.BOM):]
        report.had_bom = True

    for raw_line in IniPatterns.LINE_BREAK.split(text):
        line = raw_line.strip()

        if not line:
            continue
        if IniPatterns.is_comment(line):
            report.skipped_lines += 1
            continue

        match = IniPatterns.KEY_VALUE.match(line)
        if not match:
            report.skipped_lines += 1
            continue

        key = IniPatterns.clean_token(match.group(1))
        value = IniPatterns.clean_token(match.group(2))
        if not key:
            report.skipped_lines += 1
            continue

        report.entries.append(Entry(key, value))

    if report.skipped_lines:
        logger.debug(f"Parsed {report.entry_count} entries, skipped {report.skipped_lines} lines")
    return report


def parse_store(text: str) -> List[Entry]:
    """
    Parse locale text into an ordered list of entries.

    Args:
        text: Whole file content

    Returns:
        List of Entry, empty for empty input
    """
    return parse_store_with_report(text).entries


def serialize_store(entries: Iterable[Entry], eol: str = "\n") -> str:
    """
    Render entries as key=value lines.

    Args:
        entries: Entries in the order they should be written
        eol: Line terminator, also appended after the last line

    Returns:
        File text, "" for an empty store
    """
    lines = [f"{entry.key}={entry.value}" for entry in entries]
    if not lines:
        return ""
    return eol.join(lines) + eol
