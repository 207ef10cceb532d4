"""Record data structures - indexed input lines and the groups they form."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Record:
    """
    A deduplicated input line.

    Records are created once by the indexer and never mutated. Ids are
    dense and zero-based, assigned in first-occurrence order, so they
    double as indices into the union-find arrays.

    Attributes:
        id: Dense record index
        text: Original line content without its line terminator
    """

    id: int
    text: str


class FieldKey(NamedTuple):
    """A (position, value) pair that links every record holding it.

    Only built for nonempty values.
    """

    position: int
    value: str


@dataclass(frozen=True)
class Group:
    """
    A connected set of records with more than one member.

    Attributes:
        member_ids: Record ids in ascending order
    """

    member_ids: tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.member_ids)

    @property
    def first_id(self) -> int:
        """Smallest member id, i.e. the member seen first in the input."""
        return self.member_ids[0]

    def lines(self, texts: Sequence[str]) -> list[str]:
        """Member line texts sorted by code point."""
        return sorted(texts[record_id] for record_id in self.member_ids)
