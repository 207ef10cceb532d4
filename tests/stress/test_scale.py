"""Stress tests - large generated inputs through the real pipeline."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from uno_groups.engine.config import GroupingConfig
from uno_groups.engine.pipeline import GroupingPipeline
from uno_groups.engine.union_find import UnionFind

pytestmark = pytest.mark.stress


def _pipeline(output: str = "groups.txt", **overrides: object) -> GroupingPipeline:
    return GroupingPipeline(
        GroupingConfig(output_path=output, memory_guard=False, **overrides)  # type: ignore[arg-type]
    )


def _random_lines(n: int, seed: int) -> list[str]:
    rng = random.Random(seed)

    def value() -> str:
        if rng.random() < 0.2:
            return ""
        return f"{rng.choice('abcdefgh')}{rng.randint(0, 300)}"

    return [";".join(value() for _ in range(3)) for _ in range(n)]


def _reference_groups(texts: list[str]) -> list[tuple[int, ...]]:
    """Naive fixed-point merge used as an oracle."""
    columns = [text.split(";") for text in texts]
    label = list(range(len(texts)))
    changed = True
    while changed:
        changed = False
        owner: dict[tuple[int, str], int] = {}
        for i, cols in enumerate(columns):
            for pos, val in enumerate(cols):
                if not val:
                    continue
                j = owner.setdefault((pos, val), i)
                if label[j] != label[i]:
                    low, high = sorted((label[i], label[j]))
                    label = [low if x == high else x for x in label]
                    changed = True

    members: dict[int, list[int]] = {}
    for i, lab in enumerate(label):
        members.setdefault(lab, []).append(i)
    return sorted(tuple(m) for m in members.values() if len(m) > 1)


def test_long_chain_is_one_group(chain_lines: list[str]) -> None:
    """Pairwise links across the whole chain close into a single group."""
    result = _pipeline().group_lines(chain_lines)
    assert result.group_count == 1
    assert result.stats.largest_group == len(chain_lines)
    assert result.stats.union_count == len(chain_lines) - 1


def test_deep_parent_chain_without_recursion() -> None:
    n = 500_000
    uf = UnionFind(n)
    # Worst case built by hand: every node points at its predecessor
    uf._parent[:] = [max(i - 1, 0) for i in range(n)]
    assert uf.find(n - 1) == 0
    assert uf.find(n // 2) == 0


def test_chain_file_spooled(chain_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "groups.txt"
    result = _pipeline(str(out), spool_to_disk=True, spool_dir=str(tmp_path)).run(chain_file)
    assert result.group_count == 1
    assert out.read_text(encoding="utf-8").startswith("Groups count: 1\n\nGroup 1\n")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["chain.txt", "groups.txt"]


def test_many_small_groups_ordered() -> None:
    """Thousands of equal-size groups come out in first-occurrence order."""
    pairs = 5_000
    lines = [f"L{i};pair{i}" for i in range(pairs)] + [f"R{i};pair{i}" for i in range(pairs)]
    random.Random(7).shuffle(lines)

    result = _pipeline().group_lines(lines)

    assert result.group_count == pairs
    assert all(g.size == 2 for g in result.groups)
    first_ids = [g.first_id for g in result.groups]
    assert first_ids == sorted(first_ids)


@pytest.mark.parametrize("seed", [1, 42])
def test_random_input_matches_reference(seed: int) -> None:
    result = _pipeline().group_lines(_random_lines(1_500, seed))
    expected = _reference_groups(list(result.texts))
    assert sorted(g.member_ids for g in result.groups) == expected
