"""Frozen dataclasses describing a build run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from docbuild.constants.reporting import STATUS_OK, OutcomeStatus


def display_path(path: Path) -> str:
    """Render *path* the way it is handed to the compiler.

    Relative paths keep an explicit ``./`` prefix (``./source/a.md``).
    """
    posix = path.as_posix()
    if path.is_absolute() or posix == "." or posix.startswith(".."):
        return posix
    return f"./{posix}"


@dataclass(frozen=True)
class SourceDocument:
    """A discovered input file and the output it compiles to."""

    name: str
    source_path: Path
    output_path: Path | None

    @property
    def source_arg(self) -> str:
        return display_path(self.source_path)

    @property
    def output_arg(self) -> str | None:
        """Compiler output argument, or None when no output name could be derived."""
        if self.output_path is None:
            return None
        return display_path(self.output_path)


@dataclass(frozen=True)
class CompileOutcome:
    """Result of one compiler invocation (or of skipping one)."""

    document: SourceDocument
    status: OutcomeStatus
    exit_code: int | None = None
    duration_ms: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.document.source_arg,
            "output": self.document.output_arg,
            "status": self.status,
            "exit_code": self.exit_code,
            "duration_ms": self.duration_ms,
            "message": self.message,
        }


@dataclass(frozen=True)
class BuildResult:
    """Aggregate outcome of a build run, in processing order."""

    source_dir: Path
    output_dir: Path
    compiler: tuple[str, ...]
    outcomes: tuple[CompileOutcome, ...] = field(default_factory=tuple)
    duration_ms: int = 0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def compiled(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return self.total - self.compiled

    @property
    def ok(self) -> bool:
        """True when every discovered file compiled with exit status 0."""
        return self.failed == 0

    def failures(self) -> tuple[CompileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_dir": display_path(self.source_dir),
            "output_dir": display_path(self.output_dir),
            "compiler": list(self.compiler),
            "duration_ms": self.duration_ms,
            "totals": {
                "files": self.total,
                "compiled": self.compiled,
                "failed": self.failed,
            },
            "files": [outcome.to_dict() for outcome in self.outcomes],
        }
