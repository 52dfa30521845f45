"""Collected config validation problems."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One config problem, identified by a stable code."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None
    column: int | None = None

    def format(self) -> str:
        """Render as ``[CODE] path[:line[:col]] message (hint)``."""
        location = self.path
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        text = f"[{self.code}] {location} {self.message}"
        if self.hint:
            text += f" ({self.hint})"
        return text


def sort_errors(errors: list[ValidationError]) -> list[ValidationError]:
    return sorted(errors, key=lambda e: (e.code, e.path, e.field, e.line or 0))


def format_errors(errors: list[ValidationError]) -> str:
    """Join sorted errors into one line per problem."""
    return "\n".join(error.format() for error in sort_errors(errors))
