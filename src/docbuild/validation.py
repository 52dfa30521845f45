"""Preflight validation shared by ``docbuild build`` and ``docbuild validate-config``."""

from __future__ import annotations

from pathlib import Path

from docbuild.config import validate_config_file
from docbuild.constants.validation import CFG010
from docbuild.exceptions.validation import ValidationError, sort_errors


def preflight_validate(root: Path, config_path: Path | None = None) -> list[ValidationError]:
    """Check the build root and config file; return errors in deterministic order."""
    errors: list[ValidationError] = []
    resolved_root = root.resolve()
    if not resolved_root.is_dir():
        errors.append(
            ValidationError(
                code=CFG010,
                path=str(resolved_root),
                field="",
                message=f"root directory does not exist: {resolved_root}",
            )
        )
        return sort_errors(errors)

    errors.extend(validate_config_file(root, config_path, config_explicit=config_path is not None))
    return sort_errors(errors)
