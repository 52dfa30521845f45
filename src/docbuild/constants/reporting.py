"""Constants for the JSON build report and outcome statuses."""

from __future__ import annotations

from typing import Literal

SCHEMA_VERSION: str = "1.0.0"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

OutcomeStatus = Literal["ok", "failed", "timeout", "skipped"]

STATUS_OK: OutcomeStatus = "ok"
STATUS_FAILED: OutcomeStatus = "failed"
STATUS_TIMEOUT: OutcomeStatus = "timeout"
STATUS_SKIPPED: OutcomeStatus = "skipped"

VALID_STATUSES: frozenset[str] = frozenset({STATUS_OK, STATUS_FAILED, STATUS_TIMEOUT, STATUS_SKIPPED})
