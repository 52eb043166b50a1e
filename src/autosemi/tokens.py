from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TokenKind(str, Enum):
    IDENT = "IDENT"
    PRIVATE_NAME = "PRIVATE_NAME"
    NUMBER = "NUMBER"
    STRING = "STRING"
    TEMPLATE = "TEMPLATE"
    REGEX = "REGEX"
    PUNCT = "PUNCT"

    EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column

    @property
    def end_line(self) -> int:
        return self.span.end.line

    @property
    def end_column(self) -> int:
        return self.span.end.column

    def is_punct(self, *values: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.lexeme in values

    def is_word(self, *values: str) -> bool:
        return self.kind is TokenKind.IDENT and self.lexeme in values

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, {self.span.format()})"
