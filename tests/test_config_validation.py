"""Tests for collect-all config validation (error codes, messages, ordering)."""

from __future__ import annotations

from pathlib import Path

from docbuild.config import _suggest_key, validate_config_file
from docbuild.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG010,
)
from docbuild.exceptions.validation import ValidationError, format_errors, sort_errors
from docbuild.validation import preflight_validate


def _write_config(root: Path, content: str) -> Path:
    path = root / "docbuild.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def _codes(errors: list[ValidationError]) -> list[str]:
    return [error.code for error in errors]


def test_missing_default_config_is_valid(tmp_path: Path) -> None:
    assert validate_config_file(tmp_path) == []


def test_missing_explicit_config_reports_cfg001(tmp_path: Path) -> None:
    errors = validate_config_file(tmp_path, tmp_path / "custom.yaml", config_explicit=True)

    assert _codes(errors) == [CFG001]


def test_invalid_yaml_reports_line(tmp_path: Path) -> None:
    _write_config(tmp_path, "source_dir: docs\njobs: [1\n")

    errors = validate_config_file(tmp_path)

    assert _codes(errors) == [CFG002]
    assert errors[0].line is not None


def test_non_mapping_reports_cfg003(tmp_path: Path) -> None:
    _write_config(tmp_path, "just a string\n")

    errors = validate_config_file(tmp_path)

    assert _codes(errors) == [CFG003]
    assert "str" in errors[0].message


def test_unknown_key_suggests_close_match(tmp_path: Path) -> None:
    _write_config(tmp_path, "output_dri: out\n")

    errors = validate_config_file(tmp_path)

    assert _codes(errors) == [CFG004]
    assert errors[0].hint == "did you mean `output_dir`?"


def test_collects_every_problem(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "suffix: md\njobs: 0\ncompiler: []\nignore_failures: 1\noutput_suffix: 5\ntimeout_seconds: abc\n",
    )

    errors = validate_config_file(tmp_path)

    assert sorted(_codes(errors)) == sorted([CFG006, CFG007, CFG008, CFG005, CFG005, CFG005])
    fields = {error.field for error in errors}
    assert fields == {"suffix", "jobs", "compiler", "ignore_failures", "output_suffix", "timeout_seconds"}


def test_valid_config_has_no_errors(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "source_dir: source\ncompiler: [node, ./node_modules/booklisp/index.js]\njobs: 2\ntimeout_seconds: null\n",
    )

    assert validate_config_file(tmp_path) == []


def test_preflight_reports_missing_root(tmp_path: Path) -> None:
    errors = preflight_validate(tmp_path / "missing")

    assert _codes(errors) == [CFG010]


def test_preflight_sorts_errors(tmp_path: Path) -> None:
    _write_config(tmp_path, "zzz: 1\njobs: -2\naaa: 2\n")

    errors = preflight_validate(tmp_path)

    assert errors == sort_errors(errors)
    assert _codes(errors) == [CFG004, CFG004, CFG007]
    assert [error.field for error in errors[:2]] == ["aaa", "zzz"]


def test_format_errors_renders_location_and_hint() -> None:
    errors = [
        ValidationError(code=CFG005, path="docbuild.yaml", field="jobs", message="bad jobs", hint="expected int"),
        ValidationError(code=CFG002, path="docbuild.yaml", field="", message="invalid YAML", line=3, column=7),
    ]

    assert format_errors(errors) == (
        "[CFG002] docbuild.yaml:3:7 invalid YAML\n[CFG005] docbuild.yaml bad jobs (expected int)"
    )


def test_suggest_key_returns_empty_for_unrelated_key() -> None:
    assert _suggest_key("completely_unrelated", ALLOWED_CONFIG_KEYS) == ""


def test_non_finite_timeout_reports_cfg007(tmp_path: Path) -> None:
    _write_config(tmp_path, "timeout_seconds: .nan\n")

    errors = validate_config_file(tmp_path)

    assert _codes(errors) == [CFG007]
    assert errors[0].field == "timeout_seconds"
