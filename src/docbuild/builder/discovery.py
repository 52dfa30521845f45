"""Source discovery and output-name derivation."""

from __future__ import annotations

import logging
from pathlib import Path

from docbuild.constants.config import DEFAULT_OUTPUT_SUFFIX, DEFAULT_SOURCE_SUFFIX
from docbuild.exceptions import OutputNameError, SourceDirectoryError

logger = logging.getLogger(__name__)


def discover_markdown_files(source_dir: Path, suffix: str = DEFAULT_SOURCE_SUFFIX) -> list[str]:
    """Return names of files directly inside *source_dir* ending in *suffix*.

    The listing is not recursive and is sorted so that builds are repeatable
    regardless of filesystem enumeration order.
    """
    if not source_dir.exists():
        raise SourceDirectoryError(f"Source directory not found: {source_dir}")
    if not source_dir.is_dir():
        raise SourceDirectoryError(f"Source path is not a directory: {source_dir}")

    try:
        entries = list(source_dir.iterdir())
    except OSError as exc:
        raise SourceDirectoryError(f"Cannot list source directory {source_dir}: {exc}") from exc

    names: list[str] = []
    for entry in entries:
        if not entry.name.endswith(suffix):
            continue
        if not entry.is_file():
            logger.debug("Skipping non-file entry: %s", entry)
            continue
        names.append(entry.name)

    names.sort()
    logger.debug("Discovered %d source file(s) in %s", len(names), source_dir)
    return names


def derive_output_name(file_name: str, output_suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """Map ``name.with.dots.md`` to ``name`` + *output_suffix*.

    The base is everything before the first dot. An empty base (``.md``,
    ``.hidden.md``) raises :class:`OutputNameError`.
    """
    base = file_name.split(".", 1)[0]
    if not base:
        raise OutputNameError(f"Cannot derive an output name from {file_name!r}: empty base name")
    return f"{base}{output_suffix}"
