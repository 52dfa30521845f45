"""Root exception type."""

from __future__ import annotations


class DocBuildError(Exception):
    """Base class for all docbuild errors."""
