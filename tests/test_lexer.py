import pytest
from hypothesis import given
from hypothesis import strategies as st

from slark.slark_constants import KEYWORDS, PUNCTUATOR_TABLE
from slark.slark_errors import ErrorKind, SlarkSyntaxError, TokenizeError
from slark.slark_lexer import (
    Eof,
    Identifier,
    Keyword,
    Punctuator,
    StringLiteral,
    Token,
    Tokenizer,
    format_tokens,
    token_to_string,
    tokenize,
)


def test_empty_input_yields_no_tokens() -> None:
    assert tokenize("") == []


def test_empty_input_next_token_is_eof() -> None:
    tokenizer = Tokenizer("")
    assert tokenizer.next_token() == Eof()


@pytest.mark.parametrize("punctuator", list(Punctuator))  # type: ignore[misc]
def test_every_punctuator_tokenizes_alone(punctuator: Punctuator) -> None:
    assert tokenize(punctuator.value) == [punctuator]


def test_punctuator_table_is_longest_first() -> None:
    lengths = [len(spelling) for spelling, _ in PUNCTUATOR_TABLE]
    assert lengths == sorted(lengths, reverse=True)
    assert len(PUNCTUATOR_TABLE) == len(Punctuator)


@pytest.mark.parametrize(  # type: ignore[misc]
    "source,expected",
    [
        ("<<=", [Punctuator.LSHIFT_EQUALS]),
        ("<<", [Punctuator.LSHIFT]),
        ("<", [Punctuator.LESS]),
        ("//", [Punctuator.DOUBLE_SLASH]),
        ("//=", [Punctuator.DOUBLE_SLASH_EQUALS]),
        ("**", [Punctuator.DOUBLE_STAR]),
        ("***", [Punctuator.DOUBLE_STAR, Punctuator.STAR]),
        ("===", [Punctuator.EQUAL_EQUAL, Punctuator.EQUALS]),
        ("< <", [Punctuator.LESS, Punctuator.LESS]),
        (">>=>", [Punctuator.RSHIFT_EQUALS, Punctuator.GREATER]),
    ],
)
def test_longest_match_wins(source: str, expected: list[Token]) -> None:
    assert tokenize(source) == expected


@pytest.mark.parametrize("word", sorted(KEYWORDS))  # type: ignore[misc]
def test_keywords(word: str) -> None:
    assert tokenize(word) == [KEYWORDS[word]]


@pytest.mark.parametrize(  # type: ignore[misc]
    "word", ["Load", "LOAD", "loads", "_load", "load_", "iff", "in2", "x", "_"]
)
def test_keyword_lookalikes_are_identifiers(word: str) -> None:
    assert tokenize(word) == [Identifier(word)]


@given(st.from_regex(r"[A-Za-z_][A-Za-z0-9_]*", fullmatch=True))  # type: ignore[misc]
def test_word_is_keyword_or_identifier(word: str) -> None:
    expected = KEYWORDS[word] if word in KEYWORDS else Identifier(word)
    assert tokenize(word) == [expected]


def test_identifier_stops_at_punctuator() -> None:
    assert tokenize("foo.bar") == [Identifier("foo"), Punctuator.DOT, Identifier("bar")]


def test_string_literal() -> None:
    assert tokenize('"hello world"') == [StringLiteral("hello world")]


def test_empty_string_literal() -> None:
    assert tokenize('""') == [StringLiteral("")]


def test_string_escapes_are_not_decoded() -> None:
    assert tokenize(r'"a\nb"') == [StringLiteral(r"a\nb")]


def test_backslash_does_not_escape_quote() -> None:
    assert tokenize(r'"a\" b') == [StringLiteral("a\\"), Identifier("b")]


def test_multiline_string() -> None:
    source = '"""line one\nline "two"\n"""'
    assert tokenize(source) == [StringLiteral('line one\nline "two"\n')]


def test_empty_multiline_string() -> None:
    assert tokenize('""""""') == [StringLiteral("")]


@given(st.text(alphabet=st.characters(exclude_characters='"')))  # type: ignore[misc]
def test_string_contents_are_verbatim(body: str) -> None:
    assert tokenize(f'"{body}"') == [StringLiteral(body)]


def test_unterminated_string_fails() -> None:
    with pytest.raises(TokenizeError) as exc:
        tokenize('"abc')
    assert exc.value.kind is ErrorKind.UNTERMINATED_STRING
    assert exc.value.position == 0


def test_unterminated_multiline_string_fails() -> None:
    with pytest.raises(TokenizeError) as exc:
        tokenize('x """abc')
    assert exc.value.kind is ErrorKind.UNTERMINATED_MULTILINE_STRING
    assert exc.value.position == 2


def test_multiline_closer_needs_three_quotes() -> None:
    with pytest.raises(TokenizeError) as exc:
        tokenize('"""abc""')
    assert exc.value.kind is ErrorKind.UNTERMINATED_MULTILINE_STRING


@pytest.mark.parametrize("source,position", [("$", 0), ("a + 1", 4), ("x ? y", 2), ("!", 0)])  # type: ignore[misc]
def test_unrecognized_character_fails(source: str, position: int) -> None:
    with pytest.raises(TokenizeError) as exc:
        tokenize(source)
    assert exc.value.kind is ErrorKind.UNRECOGNIZED_CHARACTER
    assert exc.value.position == position
    assert exc.value.actual == repr(source[position])


@pytest.mark.parametrize(  # type: ignore[misc]
    "source,position",
    [('"é" $', 5), ('"日本" "x', 9), ("# ü\n!", 5)],
)
def test_error_position_is_utf8_byte_offset(source: str, position: int) -> None:
    with pytest.raises(TokenizeError) as exc:
        tokenize(source)
    assert exc.value.position == position


def test_tokenize_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        tokenize("'single quotes'")


def test_comment_yields_no_token() -> None:
    assert tokenize("# just a comment") == []


def test_comment_runs_to_end_of_line() -> None:
    assert tokenize("a # b c\nd") == [Identifier("a"), Identifier("d")]


def test_comment_may_contain_unterminated_quote() -> None:
    assert tokenize('# "oops\nx') == [Identifier("x")]


@given(  # type: ignore[misc]
    st.lists(st.sampled_from([" ", "\t", "\n", "\r\n", "# comment\n", "#\n", "##x#\n"]))
)
def test_whitespace_and_comments_alternate(parts: list[str]) -> None:
    assert tokenize("".join(parts) + "load") == [Keyword.LOAD]


def test_next_token_is_lazy() -> None:
    tokenizer = Tokenizer('load ( "m" $')
    assert tokenizer.next_token() is Keyword.LOAD
    assert tokenizer.next_token() is Punctuator.LPAREN
    assert tokenizer.next_token() == StringLiteral("m")
    assert tokenizer.remaining_input() == " $"
    with pytest.raises(TokenizeError):
        tokenizer.next_token()


def test_token_start_tracks_last_token() -> None:
    tokenizer = Tokenizer("  # c\n  foo")
    tokenizer.next_token()
    assert tokenizer.token_start == 8
    assert tokenizer.position == 11
    assert tokenizer.next_token() == Eof()
    assert tokenizer.token_start == 11


def test_independent_tokenizers_do_not_share_state() -> None:
    a = Tokenizer("a b")
    b = Tokenizer("c d")
    assert a.next_token() == Identifier("a")
    assert b.next_token() == Identifier("c")
    assert a.next_token() == Identifier("b")
    assert b.next_token() == Identifier("d")


@given(st.text())  # type: ignore[misc]
def test_tokenize_only_raises_tokenize_error(source: str) -> None:
    try:
        tokens = tokenize(source)
    except TokenizeError as e:
        assert isinstance(e, SlarkSyntaxError)
        assert 0 <= e.position < len(source.encode("utf-8", "surrogatepass"))
    else:
        assert all(not isinstance(tok, Eof) for tok in tokens)


@pytest.mark.parametrize(  # type: ignore[misc]
    "token,text",
    [
        (Punctuator.PLUS_EQUALS, "+="),
        (Punctuator.LSHIFT_EQUALS, "<<="),
        (Keyword.LAMBDA, "lambda"),
        (Identifier("cc_library"), "cc_library"),
        (StringLiteral("a b"), '"a b"'),
        (StringLiteral('has "quotes"'), '"has "quotes""'),
        (Eof(), "<eof>"),
    ],
)
def test_token_rendering(token: Token, text: str) -> None:
    assert token_to_string(token) == text


def test_golden_token_rendering() -> None:
    tokens = tokenize('load("@rules_cc//cc:defs.bzl", "cc_library", "cc_test")')
    assert (
        format_tokens(tokens)
        == 'load ( "@rules_cc//cc:defs.bzl" , "cc_library" , "cc_test" )'
    )


def test_token_equality_and_hash() -> None:
    assert Identifier("x") == Identifier("x")
    assert Identifier("x") != StringLiteral("x")
    assert StringLiteral("x") != Identifier("x")
    assert Eof() == Eof()
    assert Eof() != Punctuator.PLUS
    assert len({Identifier("x"), Identifier("x"), StringLiteral("x"), Eof(), Eof()}) == 3
    assert repr(Identifier("x")) == "Identifier('x')"
    assert repr(StringLiteral("x")) == "StringLiteral('x')"
    assert repr(Eof()) == "Eof()"
