import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mylang.mylang_lexer import CharacterStream, Lexer, Token, parse_number, tokenize


def types(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def values(source: str) -> list[object]:
    return [tok.value for tok in tokenize(source)]


def test_keywords() -> None:
    toks = tokenize("def extern")
    assert [t.type for t in toks] == ["DEF", "EXTERN", "EOF"]
    assert all(t.value is None for t in toks)


def test_keyword_prefix_is_identifier() -> None:
    assert tokenize("define")[0] == Token("IDENT", "define", 1, 1)
    assert tokenize("externs")[0].type == "IDENT"


def test_keywords_are_case_sensitive() -> None:
    assert types("DEF Extern") == ["IDENT", "IDENT", "EOF"]


def test_identifier_token() -> None:
    tok = Lexer(CharacterStream("myVar2")).next_token()
    assert tok.type == "IDENT"
    assert tok.value == "myVar2"


def test_identifier_stops_at_underscore() -> None:
    assert values("a_b") == ["a", "_", "b", None]
    assert types("a_b") == ["IDENT", "SYMBOL", "IDENT", "EOF"]


def test_non_ascii_letter_is_symbol() -> None:
    toks = tokenize("é")
    assert toks[0] == Token("SYMBOL", "é", 1, 1)


def test_number_token() -> None:
    tok = Lexer(CharacterStream("123")).next_token()
    assert tok.type == "NUMBER"
    assert tok.value == 123.0
    assert isinstance(tok.value, float)


def test_float_token() -> None:
    assert values("123.456") == [123.456, None]


def test_leading_dot_number() -> None:
    assert values(".5") == [0.5, None]


def test_number_followed_by_identifier() -> None:
    assert values("2x") == [2.0, "x", None]


def test_malformed_number_uses_longest_prefix(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="mylang.mylang_lexer"):
        toks = tokenize("1.2.3")
    assert toks[0] == Token("NUMBER", 1.2, 1, 1)
    assert toks[1].type == "EOF"
    assert "malformed numeric literal '1.2.3'" in caplog.text


def test_lone_dot_is_zero(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="mylang.mylang_lexer"):
        assert values(".") == [0.0, None]
    assert "has no digits" in caplog.text


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0", 0.0),
        ("42", 42.0),
        ("3.", 3.0),
        ("3.25", 3.25),
        (".125", 0.125),
        ("1..2", 1.0),
        ("..", 0.0),
        ("007.5", 7.5),
    ],
)  # type: ignore[misc]
def test_parse_number(text: str, expected: float) -> None:
    assert parse_number(text) == expected


def test_symbols() -> None:
    toks = tokenize("+ - * / < > ( ) , ; =")
    assert [t.type for t in toks[:-1]] == ["SYMBOL"] * 11
    assert [t.value for t in toks[:-1]] == list("+-*/<>(),;=")


def test_symbols_without_spaces() -> None:
    assert values("(a+b)*c") == ["(", "a", "+", "b", ")", "*", "c", None]


def test_line_and_column_tracking() -> None:
    toks = tokenize("x = 1\ny = 2")
    assert [(t.line, t.col) for t in toks[:4]] == [(1, 1), (1, 3), (1, 5), (2, 1)]


def test_eof_position() -> None:
    assert tokenize("x")[-1] == Token("EOF", None, 1, 2)


def test_skip_whitespace_and_comments() -> None:
    toks = tokenize("   \n  # a comment\n123")
    assert toks[0] == Token("NUMBER", 123.0, 3, 1)


def test_comment_ended_by_carriage_return() -> None:
    assert values("# note\rfoo") == ["foo", None]


def test_consecutive_comments() -> None:
    assert values("# one\n# two\n\n# three\nx # trailing") == ["x", None]


def test_comment_at_end_of_input() -> None:
    assert types("1 # no newline") == ["NUMBER", "EOF"]


def test_many_comment_lines_do_not_recurse() -> None:
    assert types("#\n" * 5000 + "x") == ["IDENT", "EOF"]


@pytest.mark.parametrize("source", ["", "   ", "\n\t\r\v\f", "# only a comment", "#a\n  #b\n"])  # type: ignore[misc]
def test_whitespace_and_comments_only_yield_eof(source: str) -> None:
    assert types(source) == ["EOF"]


def test_eof_is_repeatable() -> None:
    lexer = Lexer(CharacterStream("x"))
    lexer.next_token()
    assert lexer.next_token().type == "EOF"
    assert lexer.next_token().type == "EOF"


def test_lexer_reads_one_char_past_token() -> None:
    stream = CharacterStream("abc+def")
    lexer = Lexer(stream)
    assert lexer.next_token().value == "abc"
    assert lexer.last_char == "+"
    assert stream.position == 4


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab\nc")
    assert stream.peek() == "a"
    assert stream.next() == "a"
    assert stream.peek(1) == "\n"
    stream.next()
    stream.next()
    assert (stream.line, stream.column) == (2, 1)
    assert not stream.end_of_file()
    stream.next()
    assert stream.end_of_file()
    assert stream.peek() == ""
    assert stream.peek(-10) == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(
        Exception, match="CharacterStreamError: Attempted to read past end of source"
    ):
        stream.next()


def test_token_repr_and_eq() -> None:
    t1 = Token("NUMBER", 42.0, 1, 2)
    t2 = Token("NUMBER", 42.0, 1, 2)
    t3 = Token("IDENT", "x")

    assert repr(t1) == "Token(NUMBER, 42.0)"
    assert repr(Token("EOF")) == "Token(EOF, None)"
    assert t1 == t2
    assert t1 != t3
    assert t1 != "Token(NUMBER, 42.0)"
    assert len({t1, t2, t3}) == 2


def test_token_is_symbol() -> None:
    assert Token("SYMBOL", "(").is_symbol("(")
    assert not Token("SYMBOL", ")").is_symbol("(")
    assert not Token("IDENT", "(").is_symbol("(")


@given(st.text(max_size=200))  # type: ignore[misc]
def test_lexer_never_raises_and_ends_with_eof(text: str) -> None:
    toks = tokenize(text)
    assert toks[-1].type == "EOF"
    assert all(t.type != "EOF" for t in toks[:-1])


@given(st.text(max_size=100))  # type: ignore[misc]
def test_only_identifiers_and_numbers_carry_payloads(text: str) -> None:
    for tok in tokenize(text):
        if tok.type in ("EOF", "DEF", "EXTERN"):
            assert tok.value is None
        elif tok.type == "IDENT":
            assert isinstance(tok.value, str) and tok.value
        elif tok.type == "NUMBER":
            assert isinstance(tok.value, float)
        else:
            assert isinstance(tok.value, str) and len(tok.value) == 1


@given(st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{0,15}", fullmatch=True))  # type: ignore[misc]
def test_identifier_shapes(name: str) -> None:
    tok = tokenize(f"  {name}  ")[0]
    if name in ("def", "extern"):
        assert tok.type == name.upper()
    else:
        assert tok == Token("IDENT", name, 1, 3)


@given(st.integers(min_value=0, max_value=10**12), st.integers(min_value=0, max_value=999))  # type: ignore[misc]
def test_decimal_literals(whole: int, frac: int) -> None:
    text = f"{whole}.{frac:03d}"
    assert tokenize(text)[0].value == float(text)
