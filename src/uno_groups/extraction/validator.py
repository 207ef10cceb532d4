"""Line validation for the semicolon-delimited record format."""

from __future__ import annotations

DELIMITER = ";"
QUOTE_CHAR = '"'


def is_valid_line(
    line: str | None,
    delimiter: str = DELIMITER,
    quote_char: str = QUOTE_CHAR,
) -> bool:
    """Check whether a raw line is a usable record.

    A line is usable when it has non-whitespace content, its quotes are
    balanced and it contains at least one delimiter. Every quote character
    toggles the quoted state; there is no escape sequence.

    Args:
        line: Raw input line without its terminator.
        delimiter: Field separator that must appear in the line.
        quote_char: Character that opens and closes quoted regions.

    Returns:
        True if the line should be indexed, False if it should be skipped.
    """
    if line is None or not line.strip():
        return False

    if line.count(quote_char) % 2:
        return False

    return delimiter in line
