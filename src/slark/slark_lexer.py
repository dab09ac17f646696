"""
Lexical analyzer for the slark Starlark dialect.

This module converts raw source text into a stream of tokens, one token per
call, with no buffering beyond a single cursor into the source.

Classes:
    Identifier: A non-keyword name.
    StringLiteral: The verbatim contents of a `"..."` or `\"\"\"...\"\"\"` literal.
    Eof: End-of-input marker.
    Tokenizer: Produces tokens on demand from a source string.

The remaining token variants, `Punctuator` and `Keyword`, are enums defined in
`slark.slark_constants` and re-exported here.

Features:
    - Skips whitespace and single-line comments (`#`), in any interleaving
    - Longest-match recognition of punctuators (`<<=` before `<<` before `<`)
    - Exact, case-sensitive keyword recognition
    - Single- and triple-quoted double-quote strings

Known limitations:
    - Escape sequences inside strings are not decoded; the text between the
      quotes is taken verbatim and a backslash cannot escape a quote.
    - Tokens do not record where they came from. Errors do, see `slark_errors`.
    - Numbers are not tokenized.

Behaviour notes:
    - `//=` is a single `DOUBLE_SLASH_EQUALS` token. The punctuator table is
      derived from the `Punctuator` enum, so every declared spelling can be
      matched. It is deliberately not split into `//` followed by `=`.
    - Error positions are UTF-8 byte offsets into the source, not string
      indices.

Raises:
    TokenizeError: On unterminated strings or unrecognized characters.

Example:
    >>> tokenize('x = "y"')
    [Identifier('x'), <Punctuator.EQUALS: '='>, StringLiteral('y')]
    >>> format_tokens(tokenize("x <<= y"))
    'x <<= y'
"""

import logging
from collections.abc import Iterable
from typing import Any, Union

from slark.slark_constants import (
    COMMENT_START,
    IDENT_CHARS,
    IDENT_START,
    KEYWORDS,
    PUNCTUATOR_TABLE,
    QUOTE,
    TRIPLE_QUOTE,
    WHITESPACE,
    Keyword,
    Punctuator,
)
from slark.slark_errors import ErrorKind, TokenizeError

logger = logging.getLogger("slark.lexer")


class Identifier:
    """A name that is not a reserved word.

    Attributes:
        name (str): The identifier text, e.g. `cc_library`.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Identifier({self.name!r})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Identifier) and self.name == other.name

    def __hash__(self) -> int:
        return hash((Identifier, self.name))


class StringLiteral:
    """A string literal, holding the raw text found between its quotes.

    Attributes:
        value (str): The undecoded contents of the literal.
    """

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __str__(self) -> str:
        return f'"{self.value}"'

    def __repr__(self) -> str:
        return f"StringLiteral({self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, StringLiteral) and self.value == other.value

    def __hash__(self) -> int:
        return hash((StringLiteral, self.value))


class Eof:
    """End-of-input marker. All instances compare equal."""

    __slots__ = ()

    def __str__(self) -> str:
        return "<eof>"

    def __repr__(self) -> str:
        return "Eof()"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Eof)

    def __hash__(self) -> int:
        return hash(Eof)


Token = Union[Punctuator, Keyword, Identifier, StringLiteral, Eof]
"""A single lexical token. Exactly one of the five variants."""


def token_to_string(token: Token) -> str:
    """Render a token the way it is spelled in the debug dump.

    Punctuators and keywords render as their spelling, identifiers as their
    name, string literals wrapped in double quotes (without re-escaping) and
    end of input as `<eof>`.
    """
    return str(token)


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render a token sequence separated by single spaces."""
    return " ".join(token_to_string(tok) for tok in tokens)


class Tokenizer:
    """Turns a source string into tokens, one `next_token()` call at a time.

    The tokenizer never looks back and never buffers tokens: its only state is
    the cursor into the source. A single instance is not meant to be shared
    between concurrent callers.

    Attributes:
        source (str): The text being tokenized. Never modified.
        position (int): Index of the next unread character in `source`.
        token_start (int): Index at which the most recently returned token
            (or the failure being reported) starts.

    Errors report positions as UTF-8 byte offsets, see `byte_offset`.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.token_start = 0

    def end_of_file(self) -> bool:
        """Checks whether the cursor has consumed the whole source.

        Returns:
            bool: True at end of input, False otherwise.
        """
        return self.position >= len(self.source)

    def byte_offset(self, index: int) -> int:
        """Converts a character index into `source` to a UTF-8 byte offset.

        Args:
            index (int): Character index, at most `len(source)`.

        Returns:
            int: Number of UTF-8 bytes preceding `index`.
        """
        return len(self.source[:index].encode("utf-8", "surrogatepass"))

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` from the cursor, or "" past the end."""
        index = self.position + offset
        if index >= len(self.source):
            return ""
        return self.source[index]

    def remaining_input(self) -> str:
        """Returns the part of the source that has not been consumed yet."""
        return self.source[self.position :]

    def skip_whitespace(self) -> bool:
        """Skips spaces, tabs and line breaks.

        Returns:
            bool: True if any character was skipped.
        """
        start = self.position
        while not self.end_of_file() and self.peek() in WHITESPACE:
            self.position += 1
        return self.position != start

    def skip_comment(self) -> bool:
        """Skips a `#` comment up to, but not including, the end of the line."""
        if self.peek() != COMMENT_START:
            return False
        newline = self.source.find("\n", self.position)
        self.position = len(self.source) if newline == -1 else newline
        return True

    def skip_whitespace_and_comments(self) -> None:
        """Skips whitespace and comments in any interleaving, until neither applies."""
        progressed = True
        while progressed:
            progressed = self.skip_whitespace()
            progressed = self.skip_comment() or progressed

    def next_token(self) -> Token:
        """Consumes and returns the next token.

        Returns:
            Token: The next token. `Eof` once the source is exhausted.

        Raises:
            TokenizeError: If a string is unterminated or no token matches at
                the cursor.
        """
        self.skip_whitespace_and_comments()
        self.token_start = self.position

        if self.end_of_file():
            return Eof()

        if self.source.startswith(TRIPLE_QUOTE, self.position):
            return self.read_multiline_string()

        ch = self.peek()
        if ch == QUOTE:
            return self.read_string()

        if ch in IDENT_START:
            return self.read_identifier()

        return self.match_punctuator()

    def read_multiline_string(self) -> StringLiteral:
        """Reads a `\"\"\"...\"\"\"` literal starting at the cursor.

        Returns:
            StringLiteral: The raw text between the triple quotes.

        Raises:
            TokenizeError: If no closing triple quote follows.
        """
        start = self.position + len(TRIPLE_QUOTE)
        end = self.source.find(TRIPLE_QUOTE, start)
        if end == -1:
            raise self._error(ErrorKind.UNTERMINATED_MULTILINE_STRING)
        self.position = end + len(TRIPLE_QUOTE)
        return StringLiteral(self.source[start:end])

    def read_string(self) -> StringLiteral:
        """Reads a `"..."` literal starting at the cursor.

        Returns:
            StringLiteral: The raw text between the quotes.

        Raises:
            TokenizeError: If the closing quote is missing.
        """
        start = self.position + 1
        end = self.source.find(QUOTE, start)
        if end == -1:
            raise self._error(ErrorKind.UNTERMINATED_STRING)
        self.position = end + 1
        return StringLiteral(self.source[start:end])

    def read_identifier(self) -> Keyword | Identifier:
        """Reads the maximal identifier run at the cursor.

        Returns:
            Keyword | Identifier: The keyword if the run spells one exactly,
                otherwise an Identifier.
        """
        start = self.position
        while not self.end_of_file() and self.peek() in IDENT_CHARS:
            self.position += 1
        name = self.source[start : self.position]
        if name in KEYWORDS:
            return KEYWORDS[name]
        return Identifier(name)

    def match_punctuator(self) -> Punctuator:
        """Consumes the longest punctuator spelled at the cursor.

        Raises:
            TokenizeError: If no punctuator spelling matches.
        """
        for spelling, punctuator in PUNCTUATOR_TABLE:
            if self.source.startswith(spelling, self.position):
                self.position += len(spelling)
                return punctuator
        raise self._error(ErrorKind.UNRECOGNIZED_CHARACTER, actual=self.peek())

    def _error(self, kind: ErrorKind, actual: Any = None) -> TokenizeError:
        offset = self.byte_offset(self.token_start)
        logger.debug("tokenize failed at byte %d: %s", offset, kind.value)
        if actual is not None:
            actual = repr(actual)
        return TokenizeError(kind, offset, actual=actual)


def tokenize(source: str) -> list[Token]:
    """Tokenizes the whole source.

    Returns:
        list[Token]: Every token in order, without the trailing `Eof`.

    Raises:
        TokenizeError: On the first token that cannot be read. No partial
            result is returned.
    """
    tokenizer = Tokenizer(source)
    tokens: list[Token] = []
    while True:
        tok = tokenizer.next_token()
        if isinstance(tok, Eof):
            break
        tokens.append(tok)
    logger.debug("tokenized %d token(s)", len(tokens))
    return tokens


__all__ = [
    "Eof",
    "Identifier",
    "Keyword",
    "Punctuator",
    "StringLiteral",
    "Token",
    "Tokenizer",
    "format_tokens",
    "token_to_string",
    "tokenize",
]
