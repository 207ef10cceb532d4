"""Line indexing: validation, exact-duplicate removal and id assignment."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from uno_groups.core.record import Record
from uno_groups.engine.memory_guard import MemoryGuard
from uno_groups.extraction.validator import DELIMITER, QUOTE_CHAR, is_valid_line

logger = logging.getLogger(__name__)

RecordSink = Callable[[Record], None]


@dataclass(frozen=True)
class IndexResult:
    """Outcome of one indexing pass.

    Attributes:
        records: Indexed records in id order (empty when a sink consumed them).
        record_count: Number of distinct valid lines, i.e. the union-find size.
        lines_read: Raw lines consumed.
        invalid_lines: Lines rejected by validation.
        duplicate_lines: Valid lines dropped as exact repeats.
    """

    records: tuple[Record, ...]
    record_count: int
    lines_read: int
    invalid_lines: int
    duplicate_lines: int


def strip_terminator(line: str) -> str:
    """Remove one trailing ``\\n`` or ``\\r\\n``."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class LineIndexer:
    """Assigns dense ids to distinct valid lines in first-occurrence order.

    Invalid lines are skipped without error; only their count is kept.
    """

    def __init__(
        self,
        delimiter: str = DELIMITER,
        quote_char: str = QUOTE_CHAR,
        memory_guard: MemoryGuard | None = None,
    ) -> None:
        self._delimiter = delimiter
        self._quote_char = quote_char
        self._memory_guard = memory_guard

    def index(self, lines: Iterable[str], sink: RecordSink | None = None) -> IndexResult:
        """Index raw lines.

        Args:
            lines: Raw input lines, with or without terminators.
            sink: Optional consumer for each new record. When given, records
                are handed to it instead of being kept in the result.

        Returns:
            IndexResult with the records (or just their count) and skip counters.
        """
        seen: set[str] = set()
        records: list[Record] = []
        lines_read = 0
        invalid = 0
        duplicates = 0

        for raw in lines:
            lines_read += 1
            line = strip_terminator(raw)

            if not is_valid_line(line, self._delimiter, self._quote_char):
                invalid += 1
                continue
            if line in seen:
                duplicates += 1
                continue

            seen.add(line)
            record = Record(id=len(seen) - 1, text=line)
            if sink is None:
                records.append(record)
            else:
                sink(record)

            if self._memory_guard is not None:
                self._memory_guard.tick()

        logger.info(
            "Indexed %d records from %d lines (%d invalid, %d duplicate)",
            len(seen),
            lines_read,
            invalid,
            duplicates,
        )
        return IndexResult(
            records=tuple(records),
            record_count=len(seen),
            lines_read=lines_read,
            invalid_lines=invalid,
            duplicate_lines=duplicates,
        )
