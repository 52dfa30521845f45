"""End-to-end build orchestration.

``build_docs`` discovers sources, then hands each one to the external
compiler. With ``jobs == 1`` the next process is only started after the
previous one has exited.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from docbuild.builder.compiler import run_compiler
from docbuild.builder.discovery import derive_output_name, discover_markdown_files
from docbuild.config import DocBuildConfig
from docbuild.constants.reporting import STATUS_SKIPPED
from docbuild.exceptions import OutputNameError
from docbuild.model import BuildResult, CompileOutcome, SourceDocument
from docbuild.reporting.progress import ProgressReporter

logger = logging.getLogger(__name__)


def build_docs(
    *,
    root: Path,
    config: DocBuildConfig | None = None,
    progress: ProgressReporter | None = None,
) -> BuildResult:
    """Compile every source document under *root* and return the per-file outcomes.

    Raises :class:`SourceDirectoryError` before any progress line is printed
    when the source directory cannot be listed, and
    :class:`CompilerNotFoundError` when the compiler cannot be started.
    """
    config = config or DocBuildConfig()
    progress = progress or ProgressReporter()
    root = root.resolve()
    started = time.monotonic()

    names = discover_markdown_files(root / config.source_dir, config.suffix)
    (root / config.output_dir).mkdir(parents=True, exist_ok=True)

    groups = _group_by_output(names, config.output_suffix)

    progress.start()
    if config.jobs > 1 and len(names) > 1:
        outcomes = _build_parallel(names, groups, root=root, config=config, progress=progress)
    else:
        outcomes = _build_sequential(names, root=root, config=config, progress=progress)
    progress.done()

    result = BuildResult(
        source_dir=config.source_dir,
        output_dir=config.output_dir,
        compiler=config.compiler,
        outcomes=tuple(outcomes),
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    logger.info(
        "Build finished: %d file(s), %d compiled, %d failed in %dms",
        result.total,
        result.compiled,
        result.failed,
        result.duration_ms,
    )
    return result


def _build_sequential(
    names: list[str],
    *,
    root: Path,
    config: DocBuildConfig,
    progress: ProgressReporter,
) -> list[CompileOutcome]:
    # Reversed so that popping from the tail walks names in ascending order.
    worklist = list(reversed(names))
    outcomes: list[CompileOutcome] = []
    while worklist:
        name = worklist.pop()
        outcome = _process_one(name, root=root, config=config)
        if outcome.status != STATUS_SKIPPED:
            progress.compiled(outcome)
        outcomes.append(outcome)
    return outcomes


def _build_parallel(
    names: list[str],
    groups: list[list[str]],
    *,
    root: Path,
    config: DocBuildConfig,
    progress: ProgressReporter,
) -> list[CompileOutcome]:
    # Sources sharing an output file form one group and run one after another.
    logger.debug("Compiling %d file(s) in %d group(s) with %d worker(s)", len(names), len(groups), config.jobs)
    by_name: dict[str, CompileOutcome] = {}
    with ThreadPoolExecutor(max_workers=config.jobs, thread_name_prefix="docbuild") as executor:
        pending: set[Future[list[CompileOutcome]]] = {
            executor.submit(_process_group, group, root=root, config=config) for group in groups
        }
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                exc = future.exception()
                if exc is not None:
                    for other in pending:
                        other.cancel()
                    raise exc
                for outcome in future.result():
                    if outcome.status != STATUS_SKIPPED:
                        progress.compiled(outcome)
                    by_name[outcome.document.name] = outcome
    return [by_name[name] for name in names]


def _process_one(name: str, *, root: Path, config: DocBuildConfig) -> CompileOutcome:
    source_path = config.source_dir / name
    try:
        output_name = derive_output_name(name, config.output_suffix)
    except OutputNameError as exc:
        logger.error("Skipping %s: %s", name, exc)
        return CompileOutcome(
            document=SourceDocument(name=name, source_path=source_path, output_path=None),
            status=STATUS_SKIPPED,
            message=str(exc),
        )

    document = SourceDocument(
        name=name,
        source_path=source_path,
        output_path=config.output_dir / output_name,
    )
    return run_compiler(
        config.compiler,
        document,
        cwd=root,
        timeout_seconds=config.timeout_seconds,
    )


def _process_group(group: list[str], *, root: Path, config: DocBuildConfig) -> list[CompileOutcome]:
    return [_process_one(name, root=root, config=config) for name in group]


def _group_by_output(names: list[str], output_suffix: str) -> list[list[str]]:
    """Group *names* by the output file they compile to, keeping discovery order.

    Names without a usable output name each form their own group. Groups with
    more than one source are logged since only the last source's output
    survives.
    """
    groups: dict[str, list[str]] = {}
    for name in names:
        try:
            key = derive_output_name(name, output_suffix)
        except OutputNameError:
            key = f"\0{name}"
        groups.setdefault(key, []).append(name)

    for key, sources in groups.items():
        if len(sources) > 1:
            logger.warning(
                "Sources %s all compile to %s; they run one after another and the last one wins",
                ", ".join(sources),
                key,
            )
    return list(groups.values())
