"""
app/parsers/csv_tokenizer.py

Quote-aware CSV tokenizer for dashboard sales exports.

The whole text is split in memory. Header names and values are trimmed
and lose one layer of enclosing double quotes. Inside a data line, a
running "inside quotes" flag toggles on every ``"`` and commas seen while
it is set are kept as data.

Known limitation: doubled quotes (``""``) are not treated as an escaped
quote. Quote characters never reach the output.
"""

from __future__ import annotations

import re

from app.domain.sale_entry import RawRecord

_LINE_BREAK = re.compile(r"\r?\n")
_BOM = "\ufeff"


def _clean_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def split_csv_line(line: str) -> list[str]:
    """
    Split one data line on commas that sit outside double quotes.
    """

    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append(_clean_field("".join(current)))
            current = []
        else:
            current.append(char)
    values.append(_clean_field("".join(current)))
    return values


def parse_header(line: str) -> list[str]:
    """
    Split the header line on every comma.
    """

    return [_clean_field(name) for name in line.split(",")]


def tokenize_csv_lines(text: str) -> list[tuple[int, RawRecord]]:
    """
    Turn raw CSV text into header-keyed records tagged with their line number.

    Line numbers are 1-based and count every physical line, blank ones
    included, so the header is line 1. Returns an empty list when there is
    no data line. A short line still yields a record; missing trailing
    positions map to ``None``. Values beyond the header count are ignored.
    """

    if text.startswith(_BOM):
        text = text[len(_BOM):]

    lines = _LINE_BREAK.split(text)
    if len(lines) < 2:
        return []

    headers = parse_header(lines[0])
    records: list[tuple[int, RawRecord]] = []
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        values = split_csv_line(line)
        record: RawRecord = {}
        for index, header in enumerate(headers):
            record[header] = values[index] if index < len(values) else None
        records.append((line_number, record))
    return records


def tokenize_csv(text: str) -> list[RawRecord]:
    """
    Turn raw CSV text into header-keyed records.
    """

    return [record for _, record in tokenize_csv_lines(text)]
