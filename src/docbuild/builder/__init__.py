"""Build orchestration package."""

from __future__ import annotations

from .orchestrator import build_docs

__all__ = ["build_docs"]
