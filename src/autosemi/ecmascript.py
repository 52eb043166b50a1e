"""Lexical sets of the JavaScript grammar used by the lexer and analyzer."""

from __future__ import annotations


# Longest first so that the lexer can match greedily.
PUNCTUATORS: tuple[str, ...] = (
    ">>>=",
    "...", "===", "!==", "**=", "<<=", ">>=", ">>>", "&&=", "||=", "??=",
    "=>", "==", "!=", "<=", ">=", "&&", "||", "??", "?.", "++", "--",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "**", "<<", ">>",
    "{", "}", "(", ")", "[", "]", ";", ",", "<", ">", "+", "-", "*", "/",
    "%", "&", "|", "^", "!", "~", "?", ":", "=", ".", "@",
)

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(OPENERS.values())

# Keywords after which a `/` starts a regular expression rather than a division.
REGEX_AFTER_WORDS = frozenset(
    {
        "return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
        "throw", "case", "do", "else", "yield", "await", "extends",
    }
)

# Words that leave an expression waiting for an operand.
OPERAND_EXPECTING_WORDS = frozenset(
    {
        "new", "typeof", "void", "delete", "in", "instanceof", "await",
        "extends", "var", "let", "const",
    }
)

# Prefix/binary punctuators that leave an expression waiting for an operand.
OPERAND_EXPECTING_PUNCT = frozenset(
    p for p in PUNCTUATORS if p not in {")", "]", "}", "++", "--", ";"}
)

# Punctuators that continue the previous expression across a line break.
CONTINUATION_PUNCT = frozenset(
    p
    for p in PUNCTUATORS
    if p not in {"{", "}", ")", "]", ";", "!", "~", "++", "--", "@", "..."}
)

CONTINUATION_WORDS = frozenset({"in", "instanceof"})

# First characters of a statement that would otherwise merge into the previous one.
HAZARD_STARTS = frozenset("+-[(/`")

# Statements that end without a terminator.
DECLARATION_WORDS = frozenset({"function", "class"})

JUMP_WORDS = frozenset({"break", "continue"})

# Words that can never be a label or a jump target.
RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "export", "extends", "finally",
        "for", "function", "if", "import", "in", "instanceof", "new",
        "return", "super", "switch", "this", "throw", "try", "typeof", "var",
        "void", "while", "with", "null", "true", "false", "enum",
    }
)

# Statements whose parenthesized header may be followed by a regex-led body.
HEADER_WORDS = frozenset({"if", "while", "for", "with"})
