"""Shared fixtures for stress tests - generated inputs on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

CHAIN_LENGTH = 20_000


@pytest.fixture
def chain_lines() -> list[str]:
    """Lines where each record shares exactly one field with the next."""
    return [
        f"row{i};k{i};k{i + 1}" if i % 2 == 0 else f"row{i};k{i + 1};k{i}"
        for i in range(CHAIN_LENGTH)
    ]


@pytest.fixture
def chain_file(tmp_path: Path, chain_lines: list[str]) -> Path:
    path = tmp_path / "chain.txt"
    path.write_text("\n".join(chain_lines) + "\n", encoding="utf-8")
    return path
