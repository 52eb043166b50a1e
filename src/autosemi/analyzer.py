"""Decides where statement terminators must be added or removed.

The analyzer walks the token stream statement by statement. It does not
build a syntax tree: expressions are skipped with bracket matching and
the automatic-semicolon-insertion rules, and the only statement lists it
descends into are blocks, switch clauses and function bodies (including
the ones nested in expressions).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .ecmascript import (
    CLOSERS,
    CONTINUATION_PUNCT,
    CONTINUATION_WORDS,
    HAZARD_STARTS,
    JUMP_WORDS,
    OPENERS,
    OPERAND_EXPECTING_PUNCT,
    OPERAND_EXPECTING_WORDS,
    RESERVED_WORDS,
)
from .errors import AnalysisError
from .lexer import tokenize
from .ops import Add, Diagnostic, Operation, Remove, Severity, sort_key
from .tokens import Token, TokenKind


log = logging.getLogger(__name__)


class Mode(str, Enum):
    ALWAYS = "always"
    NEVER = "never"


class BoundaryStyle(str, Enum):
    LEADING = "leading"
    TRAILING = "trailing"


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    mode: Mode
    boundary_style: BoundaryStyle = BoundaryStyle.TRAILING

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))
        object.__setattr__(self, "boundary_style", BoundaryStyle(self.boundary_style))


class Analyzer(Protocol):
    def verify(self, text: str, config: AnalyzerConfig) -> list[Operation]:
        """Return the edits for ``text``, ordered by position in the original text."""
        ...


@dataclass(slots=True)
class SemicolonAnalyzer:
    """Default analyzer for JavaScript sources.

    ``file`` only labels spans in errors and diagnostics.
    """

    file: str = "<memory>"

    def verify(self, text: str, config: AnalyzerConfig) -> list[Operation]:
        walker = _Walker(tokens=tokenize(text, file=self.file), config=config)
        walker.program()
        ops = sorted(walker.ops, key=sort_key)
        log.debug("%s: %d operations (mode=%s)", self.file, len(ops), config.mode.value)
        return ops


def _continues(last: Token, tok: Token) -> bool:
    """Whether ``tok``, on a later line than ``last``, extends the same expression."""
    if tok.is_punct("++", "--"):
        return False
    if last.kind is TokenKind.PUNCT and last.lexeme in OPERAND_EXPECTING_PUNCT:
        return True
    if last.kind is TokenKind.IDENT and last.lexeme in OPERAND_EXPECTING_WORDS:
        return True
    if tok.kind is TokenKind.PUNCT:
        return tok.lexeme in CONTINUATION_PUNCT
    if tok.kind is TokenKind.TEMPLATE:
        return True
    return tok.is_word(*CONTINUATION_WORDS)


def _describe(tok: Token) -> str:
    if tok.kind is TokenKind.EOF:
        return "end of input"
    return repr(tok.lexeme)


@dataclass(slots=True)
class _Walker:
    tokens: list[Token]
    config: AnalyzerConfig
    i: int = 0
    ops: list[Operation] = field(default_factory=list)

    # -- token access

    def peek(self, n: int = 0) -> Token:
        j = min(self.i + n, len(self.tokens) - 1)
        return self.tokens[j]

    def next(self) -> Token:
        tok = self.tokens[self.i]
        if tok.kind is not TokenKind.EOF:
            self.i += 1
        return tok

    def expect(self, value: str) -> Token:
        tok = self.peek()
        if not tok.is_punct(value):
            raise AnalysisError(
                span=tok.span,
                message=f"expected {value!r} but found {_describe(tok)}",
            )
        return self.next()

    def error(self, tok: Token, hint: str | None = None) -> AnalysisError:
        return AnalysisError(span=tok.span, message=f"unexpected {_describe(tok)}", hint=hint)

    # -- statement lists

    def program(self) -> None:
        self.statement_list()
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            raise self.error(tok, hint="remove the unmatched closing bracket")

    def statement_list(self, closer: str | None = None, stop_words: tuple[str, ...] = ()) -> None:
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.EOF or tok.is_word(*stop_words):
                return
            if closer is not None and tok.is_punct(closer):
                return
            if tok.is_punct(";"):
                self.stray_semicolons()
            else:
                self.statement()

    def stray_semicolons(self) -> None:
        while self.peek().is_punct(";"):
            tok = self.next()
            if self.config.mode is Mode.NEVER:
                self.remove(tok)
            else:
                self.unnecessary(tok)

    # -- statements

    def statement(self) -> None:
        tok = self.peek()
        if tok.is_punct("{"):
            self.block()
            return
        if tok.is_punct("@"):
            self.decorators()
            self.statement()
            return
        if tok.kind is not TokenKind.IDENT:
            self.terminate(self.expression())
            return

        word = tok.lexeme
        nxt = self.peek(1)
        if nxt.is_punct(":") and word not in RESERVED_WORDS:
            self.next()
            self.next()
            self.body()
        elif word == "if":
            self.next()
            self.parenthesized()
            self.body()
            if self.peek().is_word("else"):
                self.next()
                self.body()
        elif word == "for":
            self.next()
            if self.peek().is_word("await"):
                self.next()
            self.parenthesized()
            self.body()
        elif word in ("while", "with"):
            self.next()
            self.parenthesized()
            self.body()
        elif word == "do":
            self.do_while()
        elif word == "try":
            self.try_statement()
        elif word == "switch":
            self.switch()
        elif word == "function" or self.at_async_function():
            self.function_declaration()
        elif word == "class":
            self.class_declaration()
        elif word in ("return", "throw"):
            self.return_or_throw()
        elif word in JUMP_WORDS:
            last = self.next()
            label = self.peek()
            if label.kind is TokenKind.IDENT and label.line == last.end_line and label.lexeme not in RESERVED_WORDS:
                last = self.next()
            self.terminate(last)
        elif word == "export":
            self.export()
        elif word == "import" and not nxt.is_punct("(", "."):
            first = self.next()
            self.terminate(self.expression(last=first))
        elif word == "debugger":
            self.terminate(self.next())
        else:
            self.terminate(self.expression())

    def decorators(self) -> None:
        while self.peek().is_punct("@"):
            self.next()
            self.next()
            while self.peek().is_punct(".") and self.peek(1).kind is TokenKind.IDENT:
                self.next()
                self.next()
            if self.peek().is_punct("("):
                self.group()

    def body(self) -> None:
        # A lone `;` here is the empty body of a control statement.
        if self.peek().is_punct(";"):
            self.next()
        else:
            self.statement()

    def block(self) -> Token:
        self.expect("{")
        self.statement_list("}")
        return self.expect("}")

    def parenthesized(self) -> Token:
        if not self.peek().is_punct("("):
            raise self.error(self.peek(), hint="expected '('")
        return self.group()

    def at_async_function(self) -> bool:
        tok, nxt = self.peek(), self.peek(1)
        return tok.is_word("async") and nxt.is_word("function") and nxt.line == tok.end_line

    def do_while(self) -> None:
        self.next()
        self.body()
        tok = self.peek()
        if not tok.is_word("while"):
            raise self.error(tok, hint="a do statement needs a while (...) condition")
        self.next()
        self.terminate(self.parenthesized())

    def try_statement(self) -> None:
        self.next()
        self.block()
        if self.peek().is_word("catch"):
            self.next()
            if self.peek().is_punct("("):
                self.group()
            self.block()
        if self.peek().is_word("finally"):
            self.next()
            self.block()

    def switch(self) -> None:
        self.next()
        self.parenthesized()
        self.expect("{")
        while not self.peek().is_punct("}"):
            tok = self.next()
            if tok.is_word("case"):
                self.case_label()
            elif not tok.is_word("default"):
                raise self.error(tok, hint="expected case or default")
            self.expect(":")
            self.statement_list("}", stop_words=("case", "default"))
        self.next()

    def case_label(self) -> None:
        pending = 0
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.EOF:
                raise self.error(tok, hint="a case label ends with ':'")
            if tok.is_punct(":"):
                if pending == 0:
                    return
                pending -= 1
            elif tok.is_punct("?"):
                pending += 1
            self.operand(None)

    def function_declaration(self) -> None:
        if self.peek().is_word("async"):
            self.next()
        self.next()
        if self.peek().is_punct("*"):
            self.next()
        if self.peek().kind is TokenKind.IDENT:
            self.next()
        self.parenthesized()
        self.block()

    def class_declaration(self) -> Token:
        self.next()
        while not self.peek().is_punct("{"):
            tok = self.peek()
            if tok.kind is TokenKind.EOF:
                raise self.error(tok, hint="a class needs a body")
            if tok.is_punct("(", "["):
                self.group()
            else:
                self.next()
        return self.class_body()

    def class_body(self) -> Token:
        self.expect("{")
        while not self.peek().is_punct("}"):
            tok = self.peek()
            if tok.kind is TokenKind.EOF:
                raise self.error(tok, hint="add the closing '}' of the class body")
            if tok.is_punct(";"):
                self.stray_semicolons()
            elif tok.is_punct("@"):
                self.decorators()
            else:
                self.class_member()
        return self.next()

    def class_member(self) -> None:
        """Consume a method, a field or a static block."""
        if self.peek().is_word("static") and self.peek(1).is_punct("{"):
            self.next()
            self.block()
            return
        last: Token | None = None
        while True:
            tok = self.peek()
            if tok.is_punct("("):
                self.group()
                self.block()
                return
            if tok.is_punct("=") and last is not None:
                self.terminate(self.expression(last=self.next()))
                return
            ends = tok.kind is TokenKind.EOF or tok.is_punct(";", "}")
            if last is not None and (ends or tok.line > last.end_line):
                self.terminate(last)
                return
            if ends:
                raise self.error(tok, hint="expected a class member")
            last = self.group() if tok.is_punct("[") else self.next()

    def return_or_throw(self) -> None:
        last = self.next()
        nxt = self.peek()
        ends = nxt.kind is TokenKind.EOF or nxt.is_punct(";", "}")
        if not ends and nxt.line == last.end_line:
            last = self.expression()
        self.terminate(last)

    def export(self) -> None:
        self.next()
        if self.peek().is_word("default"):
            self.next()
        tok = self.peek()
        if tok.is_word("function") or self.at_async_function():
            self.function_declaration()
        elif tok.is_word("class"):
            self.class_declaration()
        else:
            self.terminate(self.expression())

    # -- expressions

    def expression(self, last: Token | None = None) -> Token:
        """Consume one expression; return its last token."""
        start = self.i
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.EOF or tok.is_punct(";", *CLOSERS):
                break
            if last is not None and tok.line > last.end_line and not _continues(last, tok):
                break
            last = self.operand(last)
        if self.i == start or last is None:
            raise self.error(self.peek(), hint="expected a statement")
        return last

    def operand(self, prev: Token | None) -> Token:
        tok = self.peek()
        member = prev is not None and prev.is_punct(".", "?.")
        if tok.is_word("class") and not member and not self.peek(1).is_punct(":"):
            return self.class_declaration()
        if tok.is_punct("{") and prev is not None and prev.is_punct(")", "=>"):
            return self.block()
        if tok.kind is TokenKind.PUNCT and tok.lexeme in OPENERS:
            return self.group()
        if tok.kind is TokenKind.PUNCT and tok.lexeme in CLOSERS:
            raise self.error(tok, hint="remove the unmatched closing bracket")
        return self.next()

    def group(self) -> Token:
        """Consume a bracketed region; semicolons inside it are left alone."""
        opener = self.next()
        closer = OPENERS[opener.lexeme]
        prev = opener
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.EOF:
                raise AnalysisError(
                    span=opener.span,
                    message=f"unclosed {opener.lexeme!r}",
                    hint=f"add the matching {closer!r}",
                )
            if tok.is_punct(closer):
                return self.next()
            prev = self.operand(prev)

    # -- terminators

    def terminate(self, last: Token) -> None:
        group: list[Token] = []
        while self.peek().is_punct(";"):
            group.append(self.next())
        nxt = self.peek()
        ends = nxt.kind is TokenKind.EOF or nxt.is_punct(*CLOSERS)
        same_line = not ends and nxt.line == last.end_line
        hazard = not ends and nxt.line > last.end_line and nxt.lexeme[:1] in HAZARD_STARTS

        if self.config.mode is Mode.NEVER:
            if same_line:
                if not group:
                    self.add_after(last)
                for tok in group[1:]:
                    self.remove(tok)
            elif hazard and group and group[-1].line == nxt.line:
                for tok in group[:-1]:
                    self.remove(tok)
            else:
                for tok in group:
                    self.remove(tok)
                if hazard:
                    self.add_before(nxt)
            return

        term = group[0] if group else None
        for tok in group[1:]:
            self.unnecessary(tok)
        if hazard and self.config.boundary_style is BoundaryStyle.LEADING:
            if term is not None and term.line == nxt.line:
                return
            if term is not None:
                self.remove(term)
            self.add_before(nxt)
        elif term is None:
            self.add_after(last)
        elif term.line != last.end_line:
            self.add_after(last)
            self.remove(term)

    def add_after(self, tok: Token) -> None:
        self.ops.append(Add(line=tok.end_line, column=tok.end_column))

    def add_before(self, tok: Token) -> None:
        self.ops.append(Add(line=tok.line, column=tok.column))

    def remove(self, tok: Token) -> None:
        self.ops.append(Remove(line=tok.line, column=tok.column + 1))

    def unnecessary(self, tok: Token) -> None:
        self.ops.append(Diagnostic(message="unnecessary semicolon", severity=Severity.WARNING, span=tok.span))
