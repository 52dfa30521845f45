"""Build-time exceptions."""

from __future__ import annotations

from docbuild.exceptions.base import DocBuildError


class BuildError(DocBuildError):
    """Raised when a build cannot proceed."""


class SourceDirectoryError(BuildError):
    """Raised when the source directory is missing or cannot be listed."""


class CompilerNotFoundError(BuildError):
    """Raised when the external compiler executable cannot be started."""


class OutputNameError(DocBuildError, ValueError):
    """Raised when an input file name yields an empty output base name."""
