from __future__ import annotations

import logging

import pytest

from autosemi import Add, Diagnostic, ProcessingError, Remove, Severity
from autosemi.buffer import LineBuffer
from autosemi.patch import PatchApplier
from autosemi.spans import Position, Span


def _applier(text: str, sink: list[Diagnostic] | None = None) -> PatchApplier:
    if sink is None:
        return PatchApplier(lines=LineBuffer.split(text))
    return PatchApplier(lines=LineBuffer.split(text), on_diagnostic=sink.append)


def _diag(message: str = "note") -> Diagnostic:
    pos = Position(offset=0, line=1, column=0)
    return Diagnostic(message=message, severity=Severity.WARNING, span=Span("<memory>", pos, pos))


def test_add_inserts_before_column() -> None:
    p = _applier("var a = 1\nb")
    p.apply_add(1, 9)
    p.apply_add(2, 1)
    assert p.lines.join() == "var a = 1;\nb;"


def test_add_at_line_start() -> None:
    p = _applier("a\n[1].map(f)")
    p.apply_add(2, 0)
    assert p.lines.join() == "a\n;[1].map(f)"


def test_remove_deletes_character_before_column() -> None:
    p = _applier("a++;\nb")
    p.apply_remove(1, 4)
    assert p.lines.join() == "a++\nb"


def test_sequential_removes_on_one_line_use_accumulated_offset() -> None:
    p = _applier("var a = b;;;;;;")
    for col in range(10, 16):
        p.dispatch(Remove(line=1, column=col))
    assert p.lines.join() == "var a = b"
    assert p.offsets.shift_of(0) == -6


def test_sequential_adds_on_one_line_use_accumulated_offset() -> None:
    p = _applier("abc")
    p.dispatch(Add(line=1, column=1))
    p.dispatch(Add(line=1, column=2))
    p.dispatch(Add(line=1, column=3))
    assert p.lines.join() == "a;b;c;"


def test_mixed_edits_on_one_line() -> None:
    p = _applier("a;b;c")
    p.dispatch(Remove(line=1, column=2))
    p.dispatch(Remove(line=1, column=4))
    p.dispatch(Add(line=1, column=5))
    assert p.lines.join() == "abc;"


def test_edits_on_other_lines_do_not_interact() -> None:
    p = _applier("a;;\nb")
    p.dispatch(Remove(line=1, column=3))
    p.dispatch(Add(line=2, column=1))
    assert p.lines.join() == "a;\nb;"
    assert p.offsets.shift_of(1) == 1


def test_line_out_of_range_is_processing_error() -> None:
    p = _applier("a")
    with pytest.raises(ProcessingError) as e:
        p.apply_add(2, 0)
    assert "line out of range" in str(e.value)
    with pytest.raises(ProcessingError):
        p.apply_remove(0, 1)


def test_column_out_of_range_is_processing_error() -> None:
    p = _applier("abc")
    with pytest.raises(ProcessingError):
        p.apply_add(1, 4)
    with pytest.raises(ProcessingError):
        p.apply_remove(1, 4)
    assert p.lines.join() == "abc"


def test_remove_of_non_terminator_is_processing_error() -> None:
    p = _applier("abc")
    with pytest.raises(ProcessingError) as e:
        p.apply_remove(1, 2)
    assert "expected ';'" in str(e.value)


def test_diagnostics_go_to_sink_without_touching_text() -> None:
    sink: list[Diagnostic] = []
    p = _applier("a;", sink)
    d = _diag("unnecessary semicolon")
    p.dispatch(d)
    assert sink == [d]
    assert p.lines.join() == "a;"


def test_diagnostics_without_sink_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    p = _applier("a")
    with caplog.at_level(logging.WARNING):
        p.dispatch(_diag("something odd"))
    assert "something odd" in caplog.text
    assert "<memory>:1:1: warning" in caplog.text


def test_unknown_operations_are_ignored() -> None:
    p = _applier("a;")
    p.dispatch("bogus")
    p.dispatch(object())
    assert p.lines.join() == "a;"
