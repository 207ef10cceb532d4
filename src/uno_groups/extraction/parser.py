"""Field splitting for the semicolon-delimited record format.

The dialect is lenient: a delimiter inside quotes does not split, and
every quote character is deleted from the resulting fields rather than
unescaped. Doubled quotes are not an escape.
"""

from __future__ import annotations

from uno_groups.extraction.validator import DELIMITER, QUOTE_CHAR


def parse_fields(
    line: str,
    delimiter: str = DELIMITER,
    quote_char: str = QUOTE_CHAR,
) -> list[str]:
    """Split a line into trimmed, quote-free field values.

    >>> parse_fields('"a;b";2;3')
    ['a;b', '2', '3']
    >>> parse_fields("X;;1")
    ['X', '', '1']
    """
    fields: list[str] = []
    start = 0
    in_quotes = False

    for i, char in enumerate(line):
        if char == quote_char:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append(_clean(line[start:i], quote_char))
            start = i + 1

    fields.append(_clean(line[start:], quote_char))
    return fields


def _clean(raw: str, quote_char: str) -> str:
    return raw.replace(quote_char, "").strip()
