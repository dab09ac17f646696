"""
Structured syntax errors raised by the slark tokenizer and parser.

Both components fail atomically on the first problem they meet. Instead of
printing a diagnostic and returning nothing, they raise one of the exceptions
below, which carry enough structure for callers to react programmatically:

Classes:
    ErrorKind: Enumerates every failure the tokenizer and parser can report.
    SlarkSyntaxError: Base class, a `SyntaxError` with kind/position/expected/actual.
    TokenizeError: Raised by the tokenizer (bad strings, unknown characters).
    ParseError: Raised by the parser (unexpected tokens, empty load, ...).

Example:
    >>> try:
    ...     parse('load("m")')
    ... except ParseError as e:
    ...     print(e.kind, e.position)
    ErrorKind.EMPTY_LOAD 0
"""

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Failure categories reported by `SlarkSyntaxError.kind`."""

    # Tokenizer
    UNTERMINATED_STRING = "unterminated string"
    UNTERMINATED_MULTILINE_STRING = "unterminated multiline string"
    UNRECOGNIZED_CHARACTER = "unrecognized character"

    # Parser
    UNEXPECTED_TOKEN = "unexpected token"
    UNEXPECTED_EOF = "unexpected end of input"
    EMPTY_LOAD = "empty load statement"
    UNSUPPORTED_KEYWORD = "unsupported keyword"
    UNSUPPORTED_TOKEN = "unsupported token"


class SlarkSyntaxError(SyntaxError):
    """Base class for all tokenizer and parser failures.

    Attributes:
        kind (ErrorKind): What went wrong.
        position (int): UTF-8 byte offset into the source where the offending
            token or character starts.
        expected (str | None): Human-readable description of what was expected,
            when the failure is an expectation mismatch.
        actual (Any): The token (or raw character) actually found, if any.
        message (str): The full diagnostic text, without the position prefix.
    """

    def __init__(
        self,
        kind: ErrorKind,
        position: int,
        message: str | None = None,
        expected: str | None = None,
        actual: Any = None,
    ) -> None:
        if message is None:
            message = kind.value
            if expected is not None:
                message += f": expected {expected}"
                if actual is not None:
                    message += f", got {actual}"
            elif actual is not None:
                message += f": {actual}"
        super().__init__(message)
        self.kind = kind
        self.position = position
        self.expected = expected
        self.actual = actual
        self.message = message

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind.name}, position={self.position})"


class TokenizeError(SlarkSyntaxError):
    """Raised when the tokenizer cannot produce a token."""


class ParseError(SlarkSyntaxError):
    """Raised when the token stream does not match the grammar."""


__all__ = ["ErrorKind", "ParseError", "SlarkSyntaxError", "TokenizeError"]
