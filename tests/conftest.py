"""Shared pytest fixtures for build tests."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def fake_compiler(fixtures_root: Path) -> tuple[str, ...]:
    """Compiler command that runs the fake compiler with the current interpreter."""
    return (sys.executable, str(fixtures_root / "fake_compiler.py"))


@pytest.fixture()
def build_root(tmp_path: Path) -> Path:
    """Empty build root with an empty ``source`` directory."""
    (tmp_path / "source").mkdir()
    return tmp_path


@pytest.fixture()
def compiler_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """File the fake compiler appends ``start``/``end`` events to."""
    log_path = tmp_path / "compiler.log"
    monkeypatch.setenv("DOCBUILD_FAKE_LOG", str(log_path))
    return log_path


@pytest.fixture()
def write_sources(build_root: Path) -> Callable[..., Path]:
    """Return a helper that creates source files under the build root."""

    def _write(files: dict[str, str], source_dir: str = "source") -> Path:
        directory = build_root / source_dir
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content, encoding="utf-8")
        return directory

    return _write


@pytest.fixture()
def read_events(compiler_log: Path) -> Callable[[], list[str]]:
    """Return a helper that reads the fake compiler's event log."""

    def _read() -> list[str]:
        if not compiler_log.exists():
            return []
        return compiler_log.read_text(encoding="utf-8").splitlines()

    return _read
