"""Plain-text group report.

Layout::

    Groups count: 2

    Group 1
    A;1;X
    B;1;Y

    Group 2
    ...
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from uno_groups.core.record import Group

logger = logging.getLogger(__name__)


def iter_report_lines(groups: Sequence[Group], texts: Sequence[str]) -> Iterator[str]:
    """Yield report lines, each terminated by a newline.

    Args:
        groups: Groups in report order.
        texts: Record texts indexed by record id.
    """
    yield f"Groups count: {len(groups)}\n"
    yield "\n"
    for number, group in enumerate(groups, start=1):
        yield f"Group {number}\n"
        for line in group.lines(texts):
            yield f"{line}\n"
        yield "\n"


def render_report(groups: Sequence[Group], texts: Sequence[str]) -> str:
    return "".join(iter_report_lines(groups, texts))


def write_report(
    path: str | Path,
    groups: Sequence[Group],
    texts: Sequence[str],
    encoding: str = "utf-8",
) -> Path:
    """Write the report to ``path``.

    The report goes to a sibling temp file that replaces ``path`` only once
    it is complete; on failure the temp file is removed and any existing
    report is left untouched.

    Returns:
        Path of the written report.
    """
    out = Path(path)
    tmp = out.with_name(f".{out.name}.tmp")
    try:
        with tmp.open("w", encoding=encoding, newline="\n") as f:
            f.writelines(iter_report_lines(groups, texts))
        os.replace(tmp, out)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    logger.info("Wrote %d groups to %s", len(groups), out)
    return out
