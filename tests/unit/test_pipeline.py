"""Tests for the end-to-end grouping pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from uno_groups.engine.config import GroupingConfig
from uno_groups.engine.pipeline import GroupingError, GroupingPipeline


def _pipeline(**overrides: object) -> GroupingPipeline:
    return GroupingPipeline(GroupingConfig(memory_guard=False, **overrides))  # type: ignore[arg-type]


class TestGroupLines:
    def test_shared_field_forms_group(self) -> None:
        result = _pipeline().group_lines(["A;1;X", "B;1;Y", "C;2;Z"])
        assert result.group_count == 1
        assert result.group_lines() == [["A;1;X", "B;1;Y"]]

    def test_exact_duplicates_do_not_group(self) -> None:
        result = _pipeline().group_lines(["A;1;X", "A;1;X"])
        assert result.group_count == 0
        assert result.stats.record_count == 1
        assert result.stats.duplicate_lines == 1

    def test_quoted_delimiter_is_one_field(self) -> None:
        result = _pipeline().group_lines(['"a;b";2;3', "a;b;9"])
        # Position 0 is "a;b" vs "a", position 1 is "2" vs "b"
        assert result.group_count == 0

        result = _pipeline().group_lines(['"a;b";2;3', '"a;b";7;8'])
        assert result.group_count == 1

    def test_empty_fields_are_neutral(self) -> None:
        assert _pipeline().group_lines(["X;;1", "Y;;1"]).group_count == 1
        assert _pipeline().group_lines(["X;;1", "Y;;2"]).group_count == 0

    def test_transitive_chain(self) -> None:
        lines = ["a;k;p", "b;k;q", "c;m;q", "d;n;r"]
        result = _pipeline().group_lines(lines)
        assert result.group_lines() == [["a;k;p", "b;k;q", "c;m;q"]]

    def test_groups_sorted_by_size_then_first_line(self) -> None:
        lines = [
            "p;1",  # 0, pairs with 3
            "q;2",  # 1, pairs with 2
            "r;2",
            "s;1",
            "t;3",  # 4, triple with 5 and 6
            "u;3",
            "v;3",
        ]
        result = _pipeline().group_lines(lines)
        assert result.group_lines() == [
            ["t;3", "u;3", "v;3"],
            ["p;1", "s;1"],
            ["q;2", "r;2"],
        ]

    def test_invalid_lines_counted_not_grouped(self) -> None:
        result = _pipeline().group_lines(["", "nodelim", '"x;1', "A;1", "B;1"])
        assert result.stats.invalid_lines == 3
        assert result.stats.lines_read == 5
        assert result.group_count == 1

    def test_stats(self) -> None:
        result = _pipeline().group_lines(["a;1", "b;1", "c;1", "d;2"])
        stats = result.stats
        assert stats.record_count == 4
        assert stats.union_count == 2
        assert stats.group_count == 1
        assert stats.largest_group == 3
        assert stats.elapsed_ms >= 0
        assert stats.to_dict()["group_count"] == 1

    def test_custom_delimiter(self) -> None:
        result = _pipeline(delimiter=",").group_lines(["a,1", "b,1", "c;1"])
        assert result.group_lines() == [["a,1", "b,1"]]

    def test_with_memory_guard(self) -> None:
        pipeline = GroupingPipeline(GroupingConfig(memory_check_every=1))
        result = pipeline.group_lines(["A;1", "B;1"])
        assert result.group_count == 1


class TestRun:
    def _write_input(self, tmp_path: Path, lines: list[str]) -> Path:
        path = tmp_path / "input.txt"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    def test_writes_report(self, tmp_path: Path) -> None:
        input_path = self._write_input(tmp_path, ["A;1;X", "B;1;Y", "C;2;Z"])
        out = tmp_path / "groups.txt"

        result = _pipeline(output_path=str(out)).run(input_path)

        assert result.output_path == out
        assert out.read_text(encoding="utf-8") == (
            "Groups count: 1\n\nGroup 1\nA;1;X\nB;1;Y\n\n"
        )

    @pytest.mark.parametrize("spool", [False, True])
    def test_spooled_and_in_memory_agree(self, tmp_path: Path, spool: bool) -> None:
        lines = ["b;1;x", "a;2;x", '"c;d";3;y', "e;3;z", "b;1;x", "f;9;q", "bad line"]
        input_path = self._write_input(tmp_path, lines)
        out = tmp_path / f"groups_{spool}.txt"

        result = _pipeline(
            output_path=str(out), spool_to_disk=spool, spool_dir=str(tmp_path)
        ).run(input_path)

        assert result.group_lines() == [["a;2;x", "b;1;x"], ['"c;d";3;y', "e;3;z"]]
        assert result.stats.duplicate_lines == 1
        assert result.stats.invalid_lines == 1
        # Spool file is gone
        assert sorted(p.name for p in tmp_path.iterdir()) == sorted(["input.txt", out.name])

    def test_crlf_input(self, tmp_path: Path) -> None:
        input_path = tmp_path / "input.txt"
        input_path.write_bytes(b"A;1\r\nB;1\r\nA;1\r\n")
        out = tmp_path / "groups.txt"

        result = _pipeline(output_path=str(out)).run(input_path)

        assert result.texts == ("A;1", "B;1")
        assert out.read_text(encoding="utf-8") == "Groups count: 1\n\nGroup 1\nA;1\nB;1\n\n"

    def test_deterministic_output(self, tmp_path: Path) -> None:
        lines = [f"r{i};{i % 7};{i % 11}" for i in range(200)] + [
            f"s{i};x{i};y{i // 2}" for i in range(50)
        ]
        input_path = self._write_input(tmp_path, lines)
        first = tmp_path / "first.txt"
        second = tmp_path / "second.txt"

        _pipeline(output_path=str(first)).run(input_path)
        _pipeline(output_path=str(second), spool_to_disk=True).run(input_path)

        assert first.read_bytes() == second.read_bytes()

    def test_missing_input_raises(self, tmp_path: Path) -> None:
        out = tmp_path / "groups.txt"
        with pytest.raises(GroupingError, match="missing.txt"):
            _pipeline(output_path=str(out)).run(tmp_path / "missing.txt")
        assert not out.exists()

    def test_missing_input_cleans_spool(self, tmp_path: Path) -> None:
        spool_dir = tmp_path / "spool"
        spool_dir.mkdir()
        with pytest.raises(GroupingError):
            _pipeline(
                output_path=str(tmp_path / "groups.txt"),
                spool_to_disk=True,
                spool_dir=str(spool_dir),
            ).run(tmp_path / "missing.txt")
        assert list(spool_dir.iterdir()) == []

    def test_undecodable_input_raises(self, tmp_path: Path) -> None:
        input_path = tmp_path / "input.txt"
        input_path.write_bytes(b"A;\xff\xfe;1\n")
        with pytest.raises(GroupingError):
            _pipeline(output_path=str(tmp_path / "groups.txt")).run(input_path)

    def test_unwritable_output_raises(self, tmp_path: Path) -> None:
        input_path = self._write_input(tmp_path, ["A;1", "B;1"])
        with pytest.raises(GroupingError):
            _pipeline(output_path=str(tmp_path / "nope" / "groups.txt")).run(input_path)
