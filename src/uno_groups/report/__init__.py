"""Group report rendering."""

from uno_groups.report.writer import iter_report_lines, render_report, write_report

__all__ = ["iter_report_lines", "render_report", "write_report"]
