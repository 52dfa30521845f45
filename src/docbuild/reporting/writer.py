"""JSON build report writer."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from docbuild import __version__
from docbuild.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX, SCHEMA_VERSION
from docbuild.model import BuildResult

logger = logging.getLogger(__name__)


def build_report_payload(result: BuildResult) -> dict[str, Any]:
    """Versioned report document for *result*."""
    payload = result.to_dict()
    payload["schema_version"] = SCHEMA_VERSION
    payload["generator"] = f"docbuild {__version__}"
    payload["ok"] = result.ok
    return payload


def write_build_report(path: Path, result: BuildResult) -> None:
    """Serialize *result* and swap it into *path* in one rename.

    A report from a previous run stays intact if serialization or the write
    fails.
    """
    text = json.dumps(build_report_payload(result), indent=2, sort_keys=True) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=REPORT_TEMP_PREFIX, suffix=REPORT_TEMP_SUFFIX)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(temp_name, path)
    except OSError:
        Path(temp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote build report to %s", path)
