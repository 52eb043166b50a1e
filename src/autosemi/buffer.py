from __future__ import annotations

from dataclasses import dataclass, field


SEPARATOR = "\n"


@dataclass(slots=True)
class LineBuffer:
    """Mutable lines of one text, split strictly on ``\\n``.

    No other normalization happens: carriage returns stay part of the
    line content and a trailing separator yields a trailing empty line.
    """

    lines: list[str]

    @classmethod
    def split(cls, text: str) -> "LineBuffer":
        return cls(lines=text.split(SEPARATOR))

    def join(self) -> str:
        return SEPARATOR.join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    def __setitem__(self, index: int, value: str) -> None:
        self.lines[index] = value


@dataclass(slots=True)
class OffsetTracker:
    """Net column drift per 0-based line index from edits already applied."""

    shifts: dict[int, int] = field(default_factory=dict)

    def shift_of(self, index: int) -> int:
        return self.shifts.get(index, 0)

    def bump(self, index: int, delta: int) -> None:
        self.shifts[index] = self.shifts.get(index, 0) + delta
