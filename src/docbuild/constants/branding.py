"""Branding constants and the fixed console progress lines."""

from __future__ import annotations

BRAND_NAME: str = "docbuild"
CLI_DESCRIPTION: str = f"{BRAND_NAME}: compile Markdown sources with an external document compiler"

START_LINE: str = "Compiling docs..."
COMPILED_LINE_TEMPLATE: str = "Compiled file: {output}"
DONE_LINE: str = "DONE!"
