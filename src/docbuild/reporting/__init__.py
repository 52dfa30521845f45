"""Console progress and build report output."""

from .progress import ProgressReporter, render_failure_summary
from .writer import write_build_report

__all__ = ["ProgressReporter", "render_failure_summary", "write_build_report"]
