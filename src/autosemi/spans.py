from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete source position.

    Offsets and columns are 0-based, lines are 1-based. Lines are counted
    on ``\\n`` only, the same way :class:`~autosemi.buffer.LineBuffer`
    splits text.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single file."""

    file: str
    start: Position
    end: Position

    def format(self) -> str:
        return f"{self.file}:{self.start.line}:{self.start.column + 1}"
