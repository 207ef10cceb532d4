"""Configuration for the grouping pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from uno_groups.extraction.validator import DELIMITER, QUOTE_CHAR

DEFAULT_OUTPUT_PATH = "groups.txt"


@dataclass(frozen=True)
class GroupingConfig:
    """Configuration for a grouping run.

    Attributes:
        delimiter: Single-character field separator.
        quote_char: Single-character quote that protects delimiters.
        encoding: Text encoding for both input and report.
        output_path: Where the report is written.
        spool_to_disk: Keep unique lines in a temp file instead of memory.
        spool_dir: Directory for the spool file (system temp dir if None).
        memory_guard: Sample RSS and force a GC pass under memory pressure.
        memory_limit_mb: RSS in MiB above which the guard collects.
        memory_check_every: Records between two guard samples.
    """

    delimiter: str = DELIMITER
    quote_char: str = QUOTE_CHAR
    encoding: str = "utf-8"
    output_path: str = DEFAULT_OUTPUT_PATH
    spool_to_disk: bool = False
    spool_dir: str | None = None
    memory_guard: bool = True
    memory_limit_mb: int = 900
    memory_check_every: int = 10_000

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")
        if len(self.quote_char) != 1:
            raise ValueError(f"quote_char must be a single character, got {self.quote_char!r}")
        if self.delimiter == self.quote_char:
            raise ValueError(
                f"delimiter and quote_char must differ, both are {self.delimiter!r}"
            )
        if not self.output_path:
            raise ValueError("output_path must not be empty")
        if self.memory_limit_mb < 1:
            raise ValueError(f"memory_limit_mb must be >= 1, got {self.memory_limit_mb}")
        if self.memory_check_every < 1:
            raise ValueError(f"memory_check_every must be >= 1, got {self.memory_check_every}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "delimiter": self.delimiter,
            "quote_char": self.quote_char,
            "encoding": self.encoding,
            "output_path": self.output_path,
            "spool_to_disk": self.spool_to_disk,
            "spool_dir": self.spool_dir,
            "memory_guard": self.memory_guard,
            "memory_limit_mb": self.memory_limit_mb,
            "memory_check_every": self.memory_check_every,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupingConfig:
        spool_dir = data.get("spool_dir")
        try:
            return cls(
                delimiter=str(data.get("delimiter", DELIMITER)),
                quote_char=str(data.get("quote_char", QUOTE_CHAR)),
                encoding=str(data.get("encoding", "utf-8")),
                output_path=str(data.get("output_path", DEFAULT_OUTPUT_PATH)),
                spool_to_disk=bool(data.get("spool_to_disk", False)),
                spool_dir=str(spool_dir) if spool_dir else None,
                memory_guard=bool(data.get("memory_guard", True)),
                memory_limit_mb=int(data.get("memory_limit_mb", 900)),
                memory_check_every=int(data.get("memory_check_every", 10_000)),
            )
        except (ValueError, TypeError):
            return cls()  # Fall back to safe defaults
