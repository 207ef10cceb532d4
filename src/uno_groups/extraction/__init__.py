"""Line validation and field parsing."""

from uno_groups.extraction.parser import parse_fields
from uno_groups.extraction.validator import DELIMITER, QUOTE_CHAR, is_valid_line

__all__ = [
    "DELIMITER",
    "QUOTE_CHAR",
    "is_valid_line",
    "parse_fields",
]
