"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "docbuild.yaml"

DEFAULT_SOURCE_DIR: str = "source"
DEFAULT_OUTPUT_DIR: str = "."
DEFAULT_SOURCE_SUFFIX: str = ".md"
DEFAULT_OUTPUT_SUFFIX: str = ".generated.md"
DEFAULT_COMPILER_COMMAND: tuple[str, ...] = ("node", "./node_modules/booklisp/index.js")
DEFAULT_JOBS: int = 1
DEFAULT_IGNORE_FAILURES: bool = False

EXIT_OK: int = 0
EXIT_BUILD_FAILED: int = 1
EXIT_CONFIG_ERROR: int = 2
