"""Invoke the external document compiler for a single source file."""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from docbuild.constants.reporting import STATUS_FAILED, STATUS_OK, STATUS_TIMEOUT
from docbuild.exceptions import CompilerNotFoundError
from docbuild.model import CompileOutcome, SourceDocument

logger = logging.getLogger(__name__)


def compiler_argv(compiler: tuple[str, ...], document: SourceDocument) -> list[str]:
    """Build the argv: compiler command followed by input and output paths."""
    if document.output_arg is None:
        raise ValueError(f"Document {document.name!r} has no output path")
    return [*compiler, document.source_arg, document.output_arg]


def run_compiler(
    compiler: tuple[str, ...],
    document: SourceDocument,
    *,
    cwd: Path,
    timeout_seconds: float | None = None,
) -> CompileOutcome:
    """Run the compiler for *document* and block until the process exits.

    Compiler stdout/stderr are inherited. A non-zero exit becomes a ``failed``
    outcome rather than an exception; only a missing executable raises.
    """
    argv = compiler_argv(compiler, document)
    logger.debug("Running: %s (cwd=%s)", " ".join(argv), cwd)

    started = time.monotonic()
    try:
        completed = subprocess.run(argv, cwd=cwd, check=False, timeout=timeout_seconds)
    except (FileNotFoundError, PermissionError) as exc:
        raise CompilerNotFoundError(f"Cannot start compiler {argv[0]!r}: {exc}") from exc
    except subprocess.TimeoutExpired:
        elapsed = _elapsed_ms(started)
        logger.warning("Compiler timed out after %ss on %s", timeout_seconds, document.source_arg)
        return CompileOutcome(
            document=document,
            status=STATUS_TIMEOUT,
            exit_code=None,
            duration_ms=elapsed,
            message=f"timed out after {timeout_seconds}s",
        )

    elapsed = _elapsed_ms(started)
    if completed.returncode != 0:
        logger.warning(
            "Compiler exited with status %d on %s",
            completed.returncode,
            document.source_arg,
        )
        return CompileOutcome(
            document=document,
            status=STATUS_FAILED,
            exit_code=completed.returncode,
            duration_ms=elapsed,
            message=f"exit status {completed.returncode}",
        )

    logger.debug("Compiled %s in %dms", document.source_arg, elapsed)
    return CompileOutcome(document=document, status=STATUS_OK, exit_code=0, duration_ms=elapsed)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
