from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .spans import Span


TERMINATOR = ";"


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Add:
    """Insert a terminator before the character at ``column``.

    ``line`` is 1-based, ``column`` 0-based, both in original-text
    coordinates.
    """

    line: int
    column: int

    @property
    def index(self) -> int:
        return self.column


@dataclass(frozen=True, slots=True)
class Remove:
    """Delete the terminator that ends right before ``column``.

    ``line`` and ``column`` are 1-based and refer to the original text;
    the character removed is the one at 0-based index ``column - 1``.
    """

    line: int
    column: int

    @property
    def index(self) -> int:
        return self.column - 1


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A finding that never changes the text."""

    message: str
    severity: Severity
    span: Span

    def format(self) -> str:
        return f"{self.span.format()}: {self.severity.value}: {self.message}"


Operation = Union[Add, Remove, Diagnostic]


def sort_key(op: Operation) -> tuple[int, int, int]:
    """Order operations by line, then character index, ADD before REMOVE."""
    if isinstance(op, Add):
        return (op.line, op.index, 0)
    if isinstance(op, Remove):
        return (op.line, op.index, 1)
    return (op.span.start.line, op.span.start.column, 2)
