from __future__ import annotations

import re
from dataclasses import dataclass

from .ecmascript import HEADER_WORDS, PUNCTUATORS, REGEX_AFTER_WORDS
from .errors import AnalysisError
from .spans import Position, Span
from .tokens import Token, TokenKind


_IDENT_RE = re.compile(r"[A-Za-z_$\u0080-\uffff][\w$\u0080-\uffff]*")
_NUMBER_RE = re.compile(
    r"(?:"
    r"0[xX][0-9a-fA-F_]+"
    r"|0[oO][0-7_]+"
    r"|0[bB][01_]+"
    r"|(?:[0-9][0-9_]*\.?[0-9_]*|\.[0-9][0-9_]*)(?:[eE][+-]?[0-9][0-9_]*)?"
    r")n?"
)
_FLAGS_RE = re.compile(r"[A-Za-z]*")


@dataclass(slots=True)
class _Cursor:
    file: str
    src: str
    i: int = 0
    line: int = 1
    col: int = 0

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.src):
            return ""
        return self.src[j]

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.eof():
                return
            ch = self.src[self.i]
            self.i += 1
            if ch == "\n":
                self.line += 1
                self.col = 0
            else:
                self.col += 1

    def pos(self) -> Position:
        return Position(offset=self.i, line=self.line, column=self.col)


def _regex_allowed(prev: Token | None, header_closes: set[int]) -> bool:
    if prev is None:
        return True
    if prev.is_punct(")"):
        return prev.span.start.offset in header_closes
    if prev.kind is TokenKind.PUNCT:
        return prev.lexeme not in ("]", "++", "--")
    if prev.kind is TokenKind.IDENT:
        return prev.lexeme in REGEX_AFTER_WORDS
    return False


def _opens_header(tokens: list[Token]) -> bool:
    if not tokens:
        return False
    prev = tokens[-1]
    if prev.is_word("await") and len(tokens) > 1:
        prev = tokens[-2]
    return prev.is_word(*HEADER_WORDS)


def tokenize(src: str, *, file: str = "<memory>") -> list[Token]:
    """Split JavaScript source into significant tokens.

    Whitespace and comments are dropped; the line numbers of the
    surrounding tokens still show where line breaks were.
    """
    cur = _Cursor(file=file, src=src)
    tokens: list[Token] = []
    # One entry per open `(`: whether it starts an if/while/for/with header.
    parens: list[bool] = []
    header_closes: set[int] = set()

    def make_span(start: Position, end: Position) -> Span:
        return Span(file=file, start=start, end=end)

    def error_at(start: Position, msg: str, hint: str | None = None) -> AnalysisError:
        end = cur.pos()
        if end.offset < start.offset:
            end = start
        return AnalysisError(span=make_span(start, end), message=msg, hint=hint)

    def push(kind: TokenKind, start: Position) -> None:
        end = cur.pos()
        tokens.append(Token(kind, src[start.offset : end.offset], make_span(start, end)))

    def skip_string(start: Position) -> None:
        quote = cur.peek()
        cur.advance()
        while not cur.eof():
            c = cur.peek()
            if c == quote:
                cur.advance()
                return
            if c == "\n":
                raise error_at(start, "unterminated string literal", hint="close the quote")
            if c == "\\":
                # Escapes, including a backslash-newline line continuation.
                cur.advance(2)
                continue
            cur.advance()
        raise error_at(start, "unterminated string literal", hint="close the quote")

    def skip_template(start: Position) -> None:
        cur.advance()
        while not cur.eof():
            c = cur.peek()
            if c == "\\":
                cur.advance(2)
                continue
            if c == "`":
                cur.advance()
                return
            if c == "$" and cur.peek(1) == "{":
                cur.advance(2)
                skip_substitution(start)
                continue
            cur.advance()
        raise error_at(start, "unterminated template literal", hint="add the closing backtick")

    def skip_substitution(start: Position) -> None:
        depth = 1
        while not cur.eof():
            c = cur.peek()
            if c in "\"'":
                skip_string(cur.pos())
                continue
            if c == "`":
                skip_template(cur.pos())
                continue
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    cur.advance()
                    return
            cur.advance()
        raise error_at(start, "unterminated template substitution", hint="close the ${ with }")

    def skip_regex(start: Position) -> None:
        cur.advance()
        in_class = False
        while not cur.eof():
            c = cur.peek()
            if c == "\n":
                break
            if c == "\\":
                cur.advance(2)
                continue
            if c == "[":
                in_class = True
            elif c == "]":
                in_class = False
            elif c == "/" and not in_class:
                cur.advance()
                m = _FLAGS_RE.match(src, cur.i)
                cur.advance(len(m.group(0)))
                return
            cur.advance()
        raise error_at(start, "unterminated regular expression", hint="close the pattern with /")

    if src.startswith("#!"):
        while not cur.eof() and cur.peek() != "\n":
            cur.advance()

    while not cur.eof():
        ch = cur.peek()

        # whitespace
        if ch.isspace() or ch == "\ufeff":
            cur.advance()
            continue

        # line comment //
        if ch == "/" and cur.peek(1) == "/":
            cur.advance(2)
            while not cur.eof() and cur.peek() != "\n":
                cur.advance()
            continue

        # block comment /* ... */
        if ch == "/" and cur.peek(1) == "*":
            start = cur.pos()
            cur.advance(2)
            while not cur.eof():
                if cur.peek() == "*" and cur.peek(1) == "/":
                    cur.advance(2)
                    break
                cur.advance()
            else:
                raise error_at(start, "unterminated block comment", hint="add closing */")
            continue

        start = cur.pos()
        prev = tokens[-1] if tokens else None

        if ch in "\"'":
            skip_string(start)
            push(TokenKind.STRING, start)
            continue

        if ch == "`":
            skip_template(start)
            push(TokenKind.TEMPLATE, start)
            continue

        if ch == "/" and _regex_allowed(prev, header_closes):
            skip_regex(start)
            push(TokenKind.REGEX, start)
            continue

        if ch.isdigit() or (ch == "." and cur.peek(1).isdigit()):
            m = _NUMBER_RE.match(src, cur.i)
            if m:
                cur.advance(len(m.group(0)))
                push(TokenKind.NUMBER, start)
                continue

        if ch == "#":
            m = _IDENT_RE.match(src, cur.i + 1)
            if m:
                cur.advance(1 + len(m.group(0)))
                push(TokenKind.PRIVATE_NAME, start)
                continue

        m = _IDENT_RE.match(src, cur.i)
        if m:
            cur.advance(len(m.group(0)))
            push(TokenKind.IDENT, start)
            continue

        punct = next((p for p in PUNCTUATORS if src.startswith(p, cur.i)), None)
        if punct is not None:
            # `?.` followed by a digit is a conditional and a number.
            if punct == "?." and cur.peek(2).isdigit():
                punct = "?"
            if punct == "(":
                parens.append(_opens_header(tokens))
            elif punct == ")" and parens and parens.pop():
                header_closes.add(start.offset)
            cur.advance(len(punct))
            push(TokenKind.PUNCT, start)
            continue

        raise error_at(
            start,
            f"unexpected character {ch!r}",
            hint="remove the character or replace it with valid JavaScript",
        )

    eof_pos = cur.pos()
    tokens.append(Token(TokenKind.EOF, "", Span(file=file, start=eof_pos, end=eof_pos)))
    return tokens
