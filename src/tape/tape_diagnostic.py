"""Soft-fault diagnostics reported during a Tape run."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TapeDiagnostic:
    """A non-fatal problem found while running a program."""
    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None or self.column is None:
            return self.message

        return f"{self.message} (line {self.line}, column {self.column})"
