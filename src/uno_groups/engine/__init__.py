"""Grouping engine: indexing, union-find partitioning and group collection."""

from uno_groups.engine.collector import collect_groups
from uno_groups.engine.config import GroupingConfig
from uno_groups.engine.connections import ConnectionBuilder
from uno_groups.engine.indexer import IndexResult, LineIndexer
from uno_groups.engine.memory_guard import MemoryGuard
from uno_groups.engine.pipeline import (
    GroupingError,
    GroupingPipeline,
    GroupingResult,
    GroupingStats,
)
from uno_groups.engine.union_find import UnionFind

__all__ = [
    "ConnectionBuilder",
    "GroupingConfig",
    "GroupingError",
    "GroupingPipeline",
    "GroupingResult",
    "GroupingStats",
    "IndexResult",
    "LineIndexer",
    "MemoryGuard",
    "UnionFind",
    "collect_groups",
]
