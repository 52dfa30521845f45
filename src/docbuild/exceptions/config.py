"""Configuration-related exceptions."""

from __future__ import annotations

from docbuild.exceptions.base import DocBuildError


class ConfigError(DocBuildError, ValueError):
    """Raised when build configuration is invalid."""
