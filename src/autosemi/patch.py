from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .buffer import LineBuffer, OffsetTracker
from .errors import ProcessingError
from .ops import TERMINATOR, Add, Diagnostic, Remove


log = logging.getLogger(__name__)

DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diag: Diagnostic) -> None:
    log.warning("%s", diag.format())


@dataclass(slots=True)
class PatchApplier:
    """Applies operations given in original-text coordinates to a LineBuffer.

    Every edit on a line shifts the columns of the later edits on that
    line; the OffsetTracker translates original columns to columns of the
    partially edited line before each mutation. Edits never cross lines,
    so lines do not influence each other.
    """

    lines: LineBuffer
    offsets: OffsetTracker = field(default_factory=OffsetTracker)
    on_diagnostic: DiagnosticSink = log_diagnostic

    def _line_index(self, line: int) -> int:
        n = line - 1
        if not 0 <= n < len(self.lines):
            raise ProcessingError(line, 0, f"line out of range (buffer has {len(self.lines)} lines)")
        return n

    def apply_add(self, line: int, column: int) -> None:
        n = self._line_index(line)
        col = column + self.offsets.shift_of(n)
        text = self.lines[n]
        if not 0 <= col <= len(text):
            raise ProcessingError(line, col, f"insert position outside line of length {len(text)}")
        self.lines[n] = text[:col] + TERMINATOR + text[col:]
        self.offsets.bump(n, 1)
        log.debug("add %r at %d:%d", TERMINATOR, line, col)

    def apply_remove(self, line: int, column: int) -> None:
        n = self._line_index(line)
        col = column - 1 + self.offsets.shift_of(n)
        text = self.lines[n]
        if not 0 <= col < len(text):
            raise ProcessingError(line, col, f"remove position outside line of length {len(text)}")
        if text[col] != TERMINATOR:
            raise ProcessingError(line, col, f"expected {TERMINATOR!r} but found {text[col]!r}")
        self.lines[n] = text[:col] + text[col + 1 :]
        self.offsets.bump(n, -1)
        log.debug("remove %r at %d:%d", TERMINATOR, line, col)

    def dispatch(self, op: object) -> None:
        if isinstance(op, Add):
            self.apply_add(op.line, op.column)
        elif isinstance(op, Remove):
            self.apply_remove(op.line, op.column)
        elif isinstance(op, Diagnostic):
            self.on_diagnostic(op)
        else:
            log.debug("ignoring unknown operation %r", op)
