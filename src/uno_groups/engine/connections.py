"""Connection pass: union records that share a (position, value) field key."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from uno_groups.core.record import FieldKey, Record
from uno_groups.engine.memory_guard import MemoryGuard
from uno_groups.engine.union_find import UnionFind
from uno_groups.extraction.parser import parse_fields
from uno_groups.extraction.validator import DELIMITER, QUOTE_CHAR

logger = logging.getLogger(__name__)


class ConnectionBuilder:
    """Builds the record partition in a single forward pass.

    Each field key remembers the first record it was seen on; every later
    record holding the key is unioned with that first record. Chains across
    different keys are closed transitively by the union-find. Empty values
    never link records.
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
        self._unions = 0
        self._distinct_keys = 0

    @property
    def unions(self) -> int:
        """Merges that joined two distinct sets in the last build."""
        return self._unions

    @property
    def distinct_keys(self) -> int:
        return self._distinct_keys

    def build(self, records: Iterable[Record], record_count: int) -> UnionFind:
        """Partition records by shared field keys.

        Args:
            records: Records in id order; ids must lie in ``0..record_count-1``.
            record_count: Total number of records.

        Returns:
            The populated UnionFind. It is not modified after this call.
        """
        uf = UnionFind(record_count)
        first_seen: dict[FieldKey, int] = {}
        unions = 0

        for record in records:
            fields = parse_fields(record.text, self._delimiter, self._quote_char)
            for position, value in enumerate(fields):
                if not value:
                    continue
                key = FieldKey(position, value)
                first_id = first_seen.get(key)
                if first_id is None:
                    first_seen[key] = record.id
                elif uf.union(record.id, first_id):
                    unions += 1

            if self._memory_guard is not None:
                self._memory_guard.tick()

        self._unions = unions
        self._distinct_keys = len(first_seen)
        logger.info(
            "Connected %d records over %d field keys (%d merges)",
            record_count,
            len(first_seen),
            unions,
        )
        return uf
