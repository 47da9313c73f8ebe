"""Report rendering for finished counts."""

from .report import format_elapsed, render_report, summary_line

__all__ = ["format_elapsed", "render_report", "summary_line"]
