"""
slark Parser

Parses Starlark-style source into a `Program` of statements.

The parser pulls tokens from a `Tokenizer` one at a time and never pushes a
token back, so every decision is made with one token of lookahead: the token
that selects a branch (such as the leading `load` keyword) is always consumed
before the branch runs.

Supported Constructs
--------------------
- `load` statements::

      load("@rules_cc//cc:defs.bzl", "cc_library", test = "cc_test")

  Grammar: `'load' '(' string {',' [identifier '='] string} ')'`

  A comma must be followed by another symbol, so a trailing comma is an
  error.

Everything else (expressions, assignments, `def`, control flow) is not
implemented yet and is reported as an error.

Parser Behavior
---------------
- Fails on the first error; no statement-level recovery.
- A failure anywhere discards the statements parsed so far, including when an
  unsupported keyword follows valid `load` statements.
- Tokenizer failures propagate unchanged as `TokenizeError`.

Entry Points
------------
- `parse()`: Parse a full source string into a `Program`.
- `Parser.parse_load_stmt()`: Parse the remainder of a `load` statement.

Raises
------
ParseError
    When the token stream does not match the grammar.
TokenizeError
    When the source cannot be tokenized.
"""

import logging

from slark.slark_ast import LoadStmt, Program, Statement
from slark.slark_errors import ErrorKind, ParseError
from slark.slark_lexer import (
    Eof,
    Identifier,
    Keyword,
    Punctuator,
    StringLiteral,
    Token,
    Tokenizer,
)

logger = logging.getLogger("slark.parser")


class Parser:
    """
    Recursive-descent parser over a single `Tokenizer`.

    Attributes
    ----------
    tokenizer : Tokenizer
        The token source. Owned by the parser for its whole lifetime.

    Methods
    -------
    parse() -> Program
        Parse the whole input.
    parse_load_stmt() -> LoadStmt
        Parse a `load` statement whose keyword has already been consumed.
    """

    def __init__(self, source: str) -> None:
        self.tokenizer = Tokenizer(source)

    def next_token(self) -> Token:
        """Pull the next token from the tokenizer.

        Raises:
            TokenizeError: If the tokenizer cannot read a token.
        """
        return self.tokenizer.next_token()

    def error(
        self,
        kind: ErrorKind,
        expected: str | None = None,
        actual: Token | None = None,
        index: int | None = None,
    ) -> ParseError:
        """Build a ParseError located at `index`, or at the last token read.

        Args:
            kind (ErrorKind): Failure category.
            expected (str | None): What the grammar required at this point.
            actual (Token | None): The token actually found.
            index (int | None): Character index into the source. Reported as
                a UTF-8 byte offset.

        Returns:
            ParseError: The error, ready to be raised.
        """
        if index is None:
            index = self.tokenizer.token_start
        position = self.tokenizer.byte_offset(index)
        err = ParseError(kind, position, expected=expected, actual=actual)
        logger.debug("parse failed: %s", err)
        return err

    def expect_punctuator(self, *punctuators: Punctuator) -> Punctuator:
        """Consume the next token and require it to be one of `punctuators`."""
        tok = self.next_token()
        if isinstance(tok, Punctuator) and tok in punctuators:
            return tok
        expected = " or ".join(f"'{p}'" for p in punctuators)
        raise self.unexpected(expected, tok)

    def expect_string(self, what: str = "string literal") -> StringLiteral:
        """Consume the next token and require it to be a string literal.

        Args:
            what (str): Description used in the error message.

        Raises:
            ParseError: If the next token is anything else.
        """
        tok = self.next_token()
        if isinstance(tok, StringLiteral):
            return tok
        raise self.unexpected(what, tok)

    def unexpected(self, expected: str, tok: Token) -> ParseError:
        """Error for `tok` found where `expected` was required.

        Returns:
            ParseError: UNEXPECTED_EOF if `tok` is Eof, else UNEXPECTED_TOKEN.
        """
        if isinstance(tok, Eof):
            return self.error(ErrorKind.UNEXPECTED_EOF, expected, tok)
        return self.error(ErrorKind.UNEXPECTED_TOKEN, expected, tok)

    def parse(self) -> Program:
        """Parse the whole input and return the resulting Program.

        Raises:
            ParseError: On the first construct that is not a valid `load`
                statement. Statements parsed before the error are discarded.
            TokenizeError: If the source cannot be tokenized.
        """
        statements: list[Statement] = []
        while True:
            tok = self.next_token()

            if isinstance(tok, Eof):
                logger.debug("parsed %d statement(s)", len(statements))
                return Program(statements)

            if tok is Keyword.LOAD:
                statements.append(self.parse_load_stmt())
                continue

            if isinstance(tok, Keyword):
                # TODO: decide whether statements parsed before an unsupported
                # keyword should be returned as a partial Program.
                raise self.error(ErrorKind.UNSUPPORTED_KEYWORD, actual=tok)

            raise self.error(ErrorKind.UNSUPPORTED_TOKEN, actual=tok)

    def parse_load_stmt(self) -> LoadStmt:
        """Parse `'(' string {',' [identifier '='] string} ')'`.

        The `load` keyword itself was consumed by the caller.

        Raises:
            ParseError: If the statement is malformed or imports no symbols.
        """
        load_start = self.tokenizer.token_start

        self.expect_punctuator(Punctuator.LPAREN)
        module_name = self.expect_string("module name string").value

        symbols: list[tuple[str, str]] = []
        while True:
            sep = self.expect_punctuator(Punctuator.COMMA, Punctuator.RPAREN)
            if sep is Punctuator.RPAREN:
                break

            tok = self.next_token()
            if isinstance(tok, StringLiteral):
                symbols.append((tok.value, tok.value))
            elif isinstance(tok, Identifier):
                self.expect_punctuator(Punctuator.EQUALS)
                exported = self.expect_string()
                symbols.append((tok.name, exported.value))
            else:
                raise self.unexpected("symbol string or identifier", tok)

        if not symbols:
            raise self.error(ErrorKind.EMPTY_LOAD, index=load_start)

        logger.debug("parsed load of %r with %d symbol(s)", module_name, len(symbols))
        return LoadStmt(module_name, symbols)


def parse(source: str) -> Program:
    """Parse `source` into a Program. See `Parser.parse`."""
    return Parser(source).parse()


__all__ = ["Parser", "parse"]
