"""Tests for the JSON build report writer."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from docbuild.constants.reporting import REPORT_TEMP_PREFIX
from docbuild.model import BuildResult
from docbuild.reporting import write_build_report


def _result() -> BuildResult:
    return BuildResult(source_dir=Path("source"), output_dir=Path("."), compiler=("node",))


def test_write_build_report_writes_sorted_json(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "report.json"

    write_build_report(path, _result())

    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert json.loads(text)["ok"] is True
    keys = [line.split('"')[1] for line in text.splitlines() if line.startswith('  "')]
    assert keys == sorted(keys)
    assert [item.name for item in path.parent.iterdir()] == ["report.json"]


def test_write_build_report_replaces_previous_report(tmp_path: Path) -> None:
    path = tmp_path / "report.json"
    path.write_text("stale\n", encoding="utf-8")

    write_build_report(path, _result())

    assert json.loads(path.read_text(encoding="utf-8"))["totals"]["files"] == 0


def test_write_build_report_keeps_old_report_when_rename_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "report.json"
    path.write_text("previous\n", encoding="utf-8")

    def _fail(src: str, dst: Path) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", _fail)

    with pytest.raises(OSError, match="disk full"):
        write_build_report(path, _result())

    assert path.read_text(encoding="utf-8") == "previous\n"
    assert not [item for item in tmp_path.iterdir() if item.name.startswith(REPORT_TEMP_PREFIX)]
