"""
Single-line CSV codec for the Google Forms -> Google Contacts conversion.

Dialect: comma delimiter, double-quote quoting, quotes escaped by doubling.
Quoted fields never span lines; every call handles exactly one physical line.
"""

from __future__ import annotations

from typing import Iterable, List

DELIMITER = ","
QUOTE = '"'
_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n")


def parse_csv_line(line: str) -> List[str]:
    """
    Split one CSV line into its fields.

    Two states (unquoted / quoted) and one character of lookahead. Inside a
    quoted run a doubled quote yields one literal quote; any other quote
    toggles the state, so ``""`` outside quotes is an empty quoted run.
    Unbalanced quotes are not an error: the scan just ends in whatever state it
    reached. The trailing field is always emitted, so the result has one more
    element than there are unescaped commas.
    """
    fields: List[str] = []
    buffer: List[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == QUOTE:
            if in_quotes and index + 1 < length and line[index + 1] == QUOTE:
                buffer.append(QUOTE)
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(buffer))
            buffer = []
        else:
            buffer.append(char)
        index += 1

    fields.append("".join(buffer))
    return fields


def format_csv_field(field: str) -> str:
    if any(token in field for token in _NEEDS_QUOTING):
        return QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE
    return field


def format_csv_line(fields: Iterable[str]) -> str:
    """Escape each field and join with commas; no line terminator is added."""
    return DELIMITER.join(format_csv_field(field) for field in fields)


__all__ = ["DELIMITER", "QUOTE", "format_csv_field", "format_csv_line", "parse_csv_line"]
