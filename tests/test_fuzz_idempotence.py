from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from autosemi import insert_semicolons, remove_semicolons
from autosemi.ecmascript import RESERVED_WORDS


_WORDS = RESERVED_WORDS | {"let", "of", "await", "yield", "async", "static"}


def _ident() -> st.SearchStrategy[str]:
    # Keep it simple and avoid keywords for the generator.
    head = st.sampled_from(list("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_$"))
    tail = st.text(alphabet=list("abcdefghijklmnopqrstuvwxyz0123456789_"), min_size=0, max_size=6)
    return st.builds(lambda h, t: h + t, head, tail).filter(lambda s: s not in _WORDS)


@st.composite
def statements(draw) -> str:
    a = draw(_ident())
    b = draw(_ident())
    return draw(
        st.sampled_from(
            [
                f"var {a} = {b}",
                f"{a}++",
                f"{a}({b})",
                f"{a}.{b} = 1",
                f"[{a}].map({b})",
                f"({a} || {b})()",
                f"-{a}",
                f"++{a}",
                f"/{a}/.test({b})",
                f"return {a}",
                f"do {{ {a}() }} while ({b})",
            ]
        )
    )


@st.composite
def js_sources(draw) -> str:
    lines: list[str] = []
    for stmt in draw(st.lists(statements(), min_size=1, max_size=8)):
        term = draw(st.sampled_from(["", ";", ";;", " ;"]))
        if stmt[0] in "+-[(/" and lines and not lines[-1].endswith(";"):
            stmt = ";" + stmt
        lines.append(stmt + term)
    body = "\n".join(lines)
    if draw(st.booleans()):
        body = "function f () {\n" + body + "\n}"
    return body + draw(st.sampled_from(["", "\n"]))


@given(js_sources())
@settings(max_examples=300, suppress_health_check=[HealthCheck.too_slow])
def test_fixers_are_idempotent(src: str) -> None:
    for fix in (insert_semicolons, remove_semicolons):
        once = fix(src)
        assert fix(once) == once


@given(js_sources(), st.booleans())
@settings(max_examples=300, suppress_health_check=[HealthCheck.too_slow])
def test_line_count_is_preserved(src: str, leading: bool) -> None:
    lines = src.count("\n")
    assert insert_semicolons(src, leading=leading).count("\n") == lines
    assert remove_semicolons(src, leading=leading).count("\n") == lines


@given(js_sources())
@settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
def test_removing_after_inserting_converges(src: str) -> None:
    assert remove_semicolons(insert_semicolons(src)) == remove_semicolons(src)
