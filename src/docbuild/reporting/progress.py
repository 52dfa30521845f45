"""Console progress lines for a build run."""

from __future__ import annotations

import sys
from typing import TextIO

from docbuild.constants.branding import COMPILED_LINE_TEMPLATE, DONE_LINE, START_LINE
from docbuild.model import BuildResult, CompileOutcome


class ProgressReporter:
    """Prints the start line, one line per finished compiler process, and the done marker."""

    def __init__(self, stream: TextIO | None = None, *, enabled: bool = True) -> None:
        self._stream = stream
        self._enabled = enabled
        self.lines_written = 0

    def start(self) -> None:
        self._emit(START_LINE)

    def compiled(self, outcome: CompileOutcome) -> None:
        """Report a compiler process that ran to termination, whatever its exit status."""
        output = outcome.document.output_arg
        if output is None:
            return
        self._emit(COMPILED_LINE_TEMPLATE.format(output=output))

    def done(self) -> None:
        self._emit(DONE_LINE)

    def _emit(self, line: str) -> None:
        if not self._enabled:
            return
        stream = self._stream if self._stream is not None else sys.stdout
        print(line, file=stream, flush=True)
        self.lines_written += 1


def render_failure_summary(result: BuildResult) -> str:
    """Describe failed files, one per line; empty when the build was clean."""
    failures = result.failures()
    if not failures:
        return ""
    lines = [f"{len(failures)} of {result.total} file(s) failed to compile:"]
    for outcome in failures:
        detail = outcome.message or outcome.status
        lines.append(f"  {outcome.document.source_arg}: {detail}")
    return "\n".join(lines)
