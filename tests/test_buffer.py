from __future__ import annotations

from autosemi.buffer import LineBuffer, OffsetTracker


def test_split_matches_naive_split() -> None:
    buf = LineBuffer.split("a\nb\n\nc")
    assert buf.lines == ["a", "b", "", "c"]
    assert len(buf) == 4


def test_trailing_separator_gives_trailing_empty_line() -> None:
    buf = LineBuffer.split("var a\n")
    assert buf.lines == ["var a", ""]
    assert buf.join() == "var a\n"


def test_carriage_returns_stay_in_line_content() -> None:
    buf = LineBuffer.split("a;\r\nb;\r\n")
    assert buf.lines == ["a;\r", "b;\r", ""]
    assert buf.join() == "a;\r\nb;\r\n"


def test_empty_text_is_one_empty_line() -> None:
    buf = LineBuffer.split("")
    assert buf.lines == [""]
    assert buf.join() == ""


def test_lines_are_mutable() -> None:
    buf = LineBuffer.split("a\nb")
    buf[1] = "b;"
    assert buf[1] == "b;"
    assert buf.join() == "a\nb;"


def test_offset_tracker_defaults_to_zero() -> None:
    offsets = OffsetTracker()
    assert offsets.shift_of(0) == 0
    assert offsets.shift_of(42) == 0


def test_offset_tracker_accumulates_per_line() -> None:
    offsets = OffsetTracker()
    offsets.bump(3, 1)
    offsets.bump(3, 1)
    offsets.bump(3, -1)
    offsets.bump(0, -1)
    assert offsets.shift_of(3) == 1
    assert offsets.shift_of(0) == -1
    assert offsets.shift_of(1) == 0
