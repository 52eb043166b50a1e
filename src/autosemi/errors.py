from __future__ import annotations

from dataclasses import dataclass

from .spans import Span


class AutosemiError(Exception):
    """Base class for every failure raised by this package."""


@dataclass(slots=True)
class AnalysisError(AutosemiError):
    """The source text could not be analyzed; no edits are produced."""

    span: Span
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.span.format()}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


@dataclass(slots=True)
class ProcessingError(AutosemiError):
    """An operation does not fit the line buffer it is applied to.

    ``line`` is 1-based and ``column`` is the already adjusted 0-based
    index into the edited line.
    """

    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"
