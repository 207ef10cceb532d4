"""Group collection from a finished partition."""

from __future__ import annotations

from uno_groups.core.record import Group
from uno_groups.engine.union_find import UnionFind


def collect_groups(uf: UnionFind) -> list[Group]:
    """Return every multi-member group in report order.

    Groups are ordered by descending size; groups of equal size are ordered
    by their smallest record id, so the group whose earliest line came first
    in the input is listed first. Singletons are dropped.
    """
    groups = [
        Group(member_ids=tuple(members))
        for members in uf.groups().values()
        if len(members) > 1
    ]
    groups.sort(key=lambda g: (-g.size, g.first_id))
    return groups
