"""
Basic usage example for uno-groups.

This example demonstrates:
1. Grouping in-memory lines
2. Inspecting groups and run statistics
3. Writing a report file
"""

from pathlib import Path

from uno_groups import GroupingConfig, GroupingPipeline
from uno_groups.report import render_report


def main() -> None:
    lines = [
        "111;123;222",
        "200;123;100",
        "300;;100",
        '"200";"123";"100"',
        "300;;100",
        "no delimiter here",
        "999;777;555",
    ]

    # 1. Group lines without touching the filesystem
    pipeline = GroupingPipeline(GroupingConfig(memory_guard=False))
    result = pipeline.group_lines(lines)

    # 2. Look at what came out
    print(f"Groups: {result.group_count}")
    for number, members in enumerate(result.group_lines(), start=1):
        print(f"  Group {number}: {members}")

    stats = result.stats
    print(
        f"\n{stats.record_count} records from {stats.lines_read} lines "
        f"({stats.invalid_lines} invalid, {stats.duplicate_lines} duplicate)"
    )

    print("\nReport preview:")
    print(render_report(result.groups, result.texts))

    # 3. Same lines through a file, with the temp-file spool
    input_path = Path("example_input.txt")
    input_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    try:
        config = GroupingConfig(output_path="example_groups.txt", spool_to_disk=True)
        written = GroupingPipeline(config).run(input_path)
        print(f"Wrote {written.group_count} groups to {written.output_path}")
    finally:
        input_path.unlink(missing_ok=True)


if __name__ == "__main__":
    main()
