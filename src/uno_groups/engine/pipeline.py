"""Grouping pipeline: index -> connect -> collect -> write.

Three strictly sequential phases. The union-find is only mutated during
the connection phase and only read afterwards.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from uno_groups.core.record import Group
from uno_groups.engine.collector import collect_groups
from uno_groups.engine.config import GroupingConfig
from uno_groups.engine.connections import ConnectionBuilder
from uno_groups.engine.indexer import IndexResult, LineIndexer
from uno_groups.engine.memory_guard import MemoryGuard
from uno_groups.report.writer import write_report
from uno_groups.storage.spool import RecordSpool

logger = logging.getLogger(__name__)


class GroupingError(Exception):
    """An I/O failure that aborted a grouping run."""


@dataclass(frozen=True)
class GroupingStats:
    """Counters for a finished run.

    Attributes:
        lines_read: Raw input lines consumed.
        invalid_lines: Lines skipped by validation.
        duplicate_lines: Lines skipped as exact repeats.
        record_count: Distinct valid lines.
        union_count: Merges that joined two distinct sets.
        group_count: Groups with more than one member.
        largest_group: Size of the biggest group (0 if none).
        elapsed_ms: Wall-clock duration of the run.
    """

    lines_read: int = 0
    invalid_lines: int = 0
    duplicate_lines: int = 0
    record_count: int = 0
    union_count: int = 0
    group_count: int = 0
    largest_group: int = 0
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines_read": self.lines_read,
            "invalid_lines": self.invalid_lines,
            "duplicate_lines": self.duplicate_lines,
            "record_count": self.record_count,
            "union_count": self.union_count,
            "group_count": self.group_count,
            "largest_group": self.largest_group,
            "elapsed_ms": round(self.elapsed_ms, 1),
        }


@dataclass(frozen=True)
class GroupingResult:
    """Groups in report order plus the texts needed to render them.

    Attributes:
        groups: Multi-member groups, largest first.
        texts: Record texts indexed by record id.
        stats: Run counters.
        output_path: Written report, or None for in-memory runs.
    """

    groups: tuple[Group, ...]
    texts: tuple[str, ...]
    stats: GroupingStats
    output_path: Path | None = None

    @property
    def group_count(self) -> int:
        return len(self.groups)

    def group_lines(self) -> list[list[str]]:
        """Each group's member lines, sorted, in report order."""
        return [group.lines(self.texts) for group in self.groups]


class GroupingPipeline:
    """Groups records that share any same-position field value.

    Usage:
        pipeline = GroupingPipeline(GroupingConfig(output_path="groups.txt"))
        result = pipeline.run("input.csv")
        print(result.group_count)
    """

    def __init__(self, config: GroupingConfig | None = None) -> None:
        self._config = config or GroupingConfig()

    @property
    def config(self) -> GroupingConfig:
        return self._config

    def group_lines(self, lines: Iterable[str]) -> GroupingResult:
        """Group in-memory lines without touching the filesystem."""
        start = time.perf_counter()
        guard = self._make_guard()
        indexed = self._indexer(guard).index(lines)
        builder = self._builder(guard)
        uf = builder.build(indexed.records, indexed.record_count)
        groups = collect_groups(uf)
        texts = tuple(record.text for record in indexed.records)
        return GroupingResult(
            groups=tuple(groups),
            texts=texts,
            stats=self._stats(indexed, builder, groups, start),
        )

    def run(self, input_path: str | Path) -> GroupingResult:
        """Group the lines of ``input_path`` and write the report.

        Raises:
            GroupingError: If the input cannot be read or the report cannot
                be written. No partial report is left behind.
        """
        start = time.perf_counter()
        config = self._config
        path = Path(input_path)
        logger.info("Grouping %s", path)

        try:
            if config.spool_to_disk:
                return self._run_spooled(path, start)
            return self._run_in_memory(path, start)
        except (OSError, UnicodeError) as e:
            raise GroupingError(f"Failed to group {path}: {e}") from e

    def _run_in_memory(self, path: Path, start: float) -> GroupingResult:
        config = self._config
        guard = self._make_guard()

        with path.open(encoding=config.encoding) as f:
            indexed = self._indexer(guard).index(f)

        builder = self._builder(guard)
        uf = builder.build(indexed.records, indexed.record_count)
        groups = collect_groups(uf)
        texts = tuple(record.text for record in indexed.records)
        out = write_report(config.output_path, groups, texts, encoding=config.encoding)

        return GroupingResult(
            groups=tuple(groups),
            texts=texts,
            stats=self._stats(indexed, builder, groups, start),
            output_path=out,
        )

    def _run_spooled(self, path: Path, start: float) -> GroupingResult:
        config = self._config
        guard = self._make_guard()

        with RecordSpool(config.spool_dir, encoding=config.encoding) as spool:
            with path.open(encoding=config.encoding) as f:
                indexed = self._indexer(guard).index(f, sink=spool.append)

            builder = self._builder(guard)
            uf = builder.build(spool.records(), indexed.record_count)
            groups = collect_groups(uf)
            texts = tuple(spool.texts())
            out = write_report(config.output_path, groups, texts, encoding=config.encoding)

        return GroupingResult(
            groups=tuple(groups),
            texts=texts,
            stats=self._stats(indexed, builder, groups, start),
            output_path=out,
        )

    def _make_guard(self) -> MemoryGuard | None:
        config = self._config
        if not config.memory_guard:
            return None
        return MemoryGuard(
            limit_mb=config.memory_limit_mb,
            check_every=config.memory_check_every,
        )

    def _indexer(self, guard: MemoryGuard | None) -> LineIndexer:
        return LineIndexer(self._config.delimiter, self._config.quote_char, memory_guard=guard)

    def _builder(self, guard: MemoryGuard | None) -> ConnectionBuilder:
        return ConnectionBuilder(
            self._config.delimiter, self._config.quote_char, memory_guard=guard
        )

    @staticmethod
    def _stats(
        indexed: IndexResult,
        builder: ConnectionBuilder,
        groups: list[Group],
        start: float,
    ) -> GroupingStats:
        return GroupingStats(
            lines_read=indexed.lines_read,
            invalid_lines=indexed.invalid_lines,
            duplicate_lines=indexed.duplicate_lines,
            record_count=indexed.record_count,
            union_count=builder.unions,
            group_count=len(groups),
            largest_group=groups[0].size if groups else 0,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
