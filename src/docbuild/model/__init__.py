"""Core data models for docbuild."""

from .entities import BuildResult, CompileOutcome, SourceDocument

__all__ = [
    "BuildResult",
    "CompileOutcome",
    "SourceDocument",
]
