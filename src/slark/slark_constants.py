"""
Fixed lexical tables for the slark tokenizer.

This module holds the closed sets of punctuators and keywords recognized by the
Starlark-style tokenizer, together with the lookup tables derived from them.
All tables are built once at import time and never mutated, so they are safe to
share between any number of independent `Tokenizer` instances.

Exports:
    - Punctuator: Enum of operator and delimiter spellings.
    - Keyword: Enum of reserved words.
    - PUNCTUATOR_TABLE: (spelling, Punctuator) pairs ordered longest spelling first.
    - KEYWORDS: Maps each reserved word to its Keyword member.
    - WHITESPACE, IDENT_START, IDENT_CHARS: Character classes used by the lexer.
"""

import string
from enum import Enum


class Punctuator(Enum):
    """Operator and delimiter tokens. Each member's value is its literal spelling."""

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    DOUBLE_SLASH = "//"
    PERCENT = "%"
    DOUBLE_STAR = "**"
    TILDE = "~"
    AMPERSAND = "&"
    PIPE = "|"
    CARET = "^"
    LSHIFT = "<<"
    RSHIFT = ">>"
    DOT = "."
    COMMA = ","
    EQUALS = "="
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    LESS = "<"
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    EQUAL_EQUAL = "=="
    NOT_EQUAL = "!="
    PLUS_EQUALS = "+="
    MINUS_EQUALS = "-="
    STAR_EQUALS = "*="
    SLASH_EQUALS = "/="
    DOUBLE_SLASH_EQUALS = "//="
    PERCENT_EQUALS = "%="
    AMPERSAND_EQUALS = "&="
    PIPE_EQUALS = "|="
    CARET_EQUALS = "^="
    LSHIFT_EQUALS = "<<="
    RSHIFT_EQUALS = ">>="

    def __str__(self) -> str:
        return self.value


class Keyword(Enum):
    """Reserved words. Each member's value is the word as spelled in source."""

    AND = "and"
    ELSE = "else"
    LOAD = "load"
    BREAK = "break"
    FOR = "for"
    NOT = "not"
    CONTINUE = "continue"
    IF = "if"
    OR = "or"
    DEF = "def"
    IN = "in"
    PASS = "pass"
    ELIF = "elif"
    LAMBDA = "lambda"
    RETURN = "return"

    def __str__(self) -> str:
        return self.value


# Longest spelling first so that `<<=` wins over `<<` and `<`. sorted() is
# stable, so equal-length spellings keep declaration order.
PUNCTUATOR_TABLE: tuple[tuple[str, Punctuator], ...] = tuple(
    sorted(
        ((p.value, p) for p in Punctuator),
        key=lambda entry: len(entry[0]),
        reverse=True,
    )
)

KEYWORDS: dict[str, Keyword] = {k.value: k for k in Keyword}

WHITESPACE = frozenset(" \t\n\r")
IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = IDENT_START | frozenset(string.digits)

COMMENT_START = "#"
QUOTE = '"'
TRIPLE_QUOTE = '"""'

__all__ = [
    "COMMENT_START",
    "IDENT_CHARS",
    "IDENT_START",
    "KEYWORDS",
    "Keyword",
    "PUNCTUATOR_TABLE",
    "Punctuator",
    "QUOTE",
    "TRIPLE_QUOTE",
    "WHITESPACE",
]
