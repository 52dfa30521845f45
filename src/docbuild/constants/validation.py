"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown top-level key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid suffix value
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # empty compiler command
CFG010: str = "CFG010"  # root directory not found

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "source_dir",
        "output_dir",
        "suffix",
        "output_suffix",
        "compiler",
        "jobs",
        "timeout_seconds",
        "ignore_failures",
    }
)

STRING_KEYS: tuple[str, ...] = ("source_dir", "output_dir", "suffix", "output_suffix")
