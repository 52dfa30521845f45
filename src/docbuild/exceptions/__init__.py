"""Shared exception hierarchy for docbuild."""

from __future__ import annotations

from .base import DocBuildError
from .build import BuildError, CompilerNotFoundError, OutputNameError, SourceDirectoryError
from .config import ConfigError

__all__ = [
    "BuildError",
    "CompilerNotFoundError",
    "ConfigError",
    "DocBuildError",
    "OutputNameError",
    "SourceDirectoryError",
]
