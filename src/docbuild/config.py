"""Configuration loading and validation for docbuild runs."""

from __future__ import annotations

import difflib
import math
import shlex
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from docbuild.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_COMPILER_COMMAND,
    DEFAULT_IGNORE_FAILURES,
    DEFAULT_JOBS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_SOURCE_DIR,
    DEFAULT_SOURCE_SUFFIX,
)
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
    STRING_KEYS,
)
from docbuild.exceptions import ConfigError
from docbuild.exceptions.validation import ValidationError


@dataclass(frozen=True)
class DocBuildConfig:
    """Resolved build config.

    ``source_dir`` and ``output_dir`` stay relative so that compiler
    arguments keep the ``./source/<file>`` form; they are resolved against
    the build root when the build runs.
    """

    source_dir: Path = Path(DEFAULT_SOURCE_DIR)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    suffix: str = DEFAULT_SOURCE_SUFFIX
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    compiler: tuple[str, ...] = DEFAULT_COMPILER_COMMAND
    jobs: int = DEFAULT_JOBS
    timeout_seconds: float | None = None
    ignore_failures: bool = DEFAULT_IGNORE_FAILURES


def load_config(root: Path, config_path: Path | None = None) -> DocBuildConfig:
    """Load and validate build config from `docbuild.yaml` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return DocBuildConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")

    for key in STRING_KEYS:
        if key in raw and not isinstance(raw[key], str):
            raise ConfigError(f"{key} must be a string")

    suffix = raw.get("suffix", DEFAULT_SOURCE_SUFFIX)
    if not suffix.startswith("."):
        raise ConfigError(f"suffix must start with '.', got {suffix!r}")

    output_suffix = raw.get("output_suffix", DEFAULT_OUTPUT_SUFFIX)
    if not output_suffix.strip():
        raise ConfigError("output_suffix must not be empty")

    compiler = _ensure_string_list(raw.get("compiler", list(DEFAULT_COMPILER_COMMAND)), "compiler")
    if not compiler:
        raise ConfigError("compiler must name at least one command element")

    jobs = raw.get("jobs", DEFAULT_JOBS)
    if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs <= 0:
        raise ConfigError("jobs must be a positive integer")

    timeout = raw.get("timeout_seconds")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or not _is_positive_finite(timeout)
    ):
        raise ConfigError("timeout_seconds must be a positive, finite number")

    ignore_failures = raw.get("ignore_failures", DEFAULT_IGNORE_FAILURES)
    if not isinstance(ignore_failures, bool):
        raise ConfigError("ignore_failures must be a boolean")

    return DocBuildConfig(
        source_dir=Path(raw.get("source_dir", DEFAULT_SOURCE_DIR)),
        output_dir=Path(raw.get("output_dir", DEFAULT_OUTPUT_DIR)),
        suffix=suffix,
        output_suffix=output_suffix,
        compiler=tuple(compiler),
        jobs=jobs,
        timeout_seconds=float(timeout) if timeout is not None else None,
        ignore_failures=ignore_failures,
    )


def apply_overrides(
    config: DocBuildConfig,
    *,
    source_dir: Path | None = None,
    output_dir: Path | None = None,
    compiler: tuple[str, ...] | None = None,
    jobs: int | None = None,
    timeout_seconds: float | None = None,
    ignore_failures: bool | None = None,
) -> DocBuildConfig:
    """Return *config* with CLI-provided values taking precedence."""
    if compiler is not None and not compiler:
        raise ConfigError("--compiler must not be empty")
    if jobs is not None and jobs <= 0:
        raise ConfigError("--jobs must be a positive integer")
    if timeout_seconds is not None and not _is_positive_finite(timeout_seconds):
        raise ConfigError("--timeout must be a positive, finite number")

    changes: dict[str, Any] = {}
    if source_dir is not None:
        changes["source_dir"] = source_dir
    if output_dir is not None:
        changes["output_dir"] = output_dir
    if compiler is not None:
        changes["compiler"] = compiler
    if jobs is not None:
        changes["jobs"] = jobs
    if timeout_seconds is not None:
        changes["timeout_seconds"] = timeout_seconds
    if ignore_failures is not None:
        changes["ignore_failures"] = ignore_failures
    return replace(config, **changes)


def parse_compiler_command(value: str) -> tuple[str, ...]:
    """Split a shell-quoted `--compiler` value into argv elements."""
    try:
        return tuple(shlex.split(value))
    except ValueError as exc:
        raise ConfigError(f"--compiler: {exc}") from exc


def _is_positive_finite(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a docbuild.yaml file and return all validation errors.

    Shared by ``docbuild validate-config`` and the build preflight. It never
    raises; every problem comes back as a :class:`ValidationError`.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {getattr(exc, 'problem', None) or exc}",
                line=(mark.line + 1) if mark is not None else None,
                column=(mark.column + 1) if mark is not None else None,
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    for key in sorted(str(k) for k in raw):
        if key not in ALLOWED_CONFIG_KEYS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=key,
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(key, ALLOWED_CONFIG_KEYS),
                )
            )

    for key in STRING_KEYS:
        if key in raw and not isinstance(raw[key], str):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=key,
                    message=f"invalid type for `{key}`",
                    hint="expected a string",
                )
            )

    suffix = raw.get("suffix")
    if isinstance(suffix, str) and not suffix.startswith("."):
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field="suffix",
                message="invalid value for `suffix`",
                hint=f"expected a file suffix starting with '.'; got: {suffix!r}",
            )
        )

    output_suffix = raw.get("output_suffix")
    if isinstance(output_suffix, str) and not output_suffix.strip():
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field="output_suffix",
                message="`output_suffix` must not be empty",
            )
        )

    _validate_compiler(raw, path_str, errors)
    _validate_numbers(raw, path_str, errors)

    if "ignore_failures" in raw and not isinstance(raw["ignore_failures"], bool):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field="ignore_failures",
                message="invalid type for `ignore_failures`",
                hint="expected a boolean",
            )
        )

    return errors


def _validate_compiler(raw: dict[str, Any], path_str: str, errors: list[ValidationError]) -> None:
    if "compiler" not in raw:
        return
    val = raw["compiler"]
    if val is not None and (not isinstance(val, (list, tuple)) or not all(isinstance(i, str) for i in val)):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field="compiler",
                message="invalid type for `compiler`",
                hint="expected a list of strings, e.g. [node, ./node_modules/booklisp/index.js]",
            )
        )
        return
    if not val:
        errors.append(
            ValidationError(
                code=CFG008,
                path=path_str,
                field="compiler",
                message="`compiler` must name at least one command element",
            )
        )


def _validate_numbers(raw: dict[str, Any], path_str: str, errors: list[ValidationError]) -> None:
    if "jobs" in raw:
        val = raw["jobs"]
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="jobs",
                    message="invalid type for `jobs`",
                    hint="expected a positive integer",
                )
            )
        elif val <= 0:
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field="jobs",
                    message=f"`jobs` must be a positive integer, got {val}",
                )
            )

    if raw.get("timeout_seconds") is not None:
        val = raw["timeout_seconds"]
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="timeout_seconds",
                    message="invalid type for `timeout_seconds`",
                    hint="expected a positive number or null",
                )
            )
        elif not _is_positive_finite(val):
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field="timeout_seconds",
                    message=f"`timeout_seconds` must be a positive, finite number, got {val}",
                )
            )


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean …' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
