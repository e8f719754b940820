"""Tests for the CDL tokenizer."""

import pytest

from cdl.errors import CDLSyntaxError
from cdl.lang import TokenType, tokenize


def _types(source):
    return [token.type for token in tokenize(source)]


def test_constant_statement_tokens():
    tokens = tokenize('x: text-input = "hello"')

    assert [(t.type, t.value) for t in tokens] == [
        (TokenType.IDENTIFIER, "x"),
        (TokenType.COLON, ":"),
        (TokenType.IDENTIFIER, "text-input"),
        (TokenType.ASSIGN, "="),
        (TokenType.STRING, "hello"),
        (TokenType.NEWLINE, "\n"),
        (TokenType.EOF, ""),
    ]
    assert [(t.line, t.column) for t in tokens[:5]] == [(1, 1), (1, 2), (1, 4), (1, 15), (1, 17)]


def test_function_value_keeps_body_as_raw_text():
    tokens = tokenize("y: paragraph = ( a , b ) =>  a + b * 2 ")

    assert _types("y: paragraph = ( a , b ) =>  a + b * 2 ") == [
        TokenType.IDENTIFIER,
        TokenType.COLON,
        TokenType.IDENTIFIER,
        TokenType.ASSIGN,
        TokenType.LPAREN,
        TokenType.IDENTIFIER,
        TokenType.COMMA,
        TokenType.IDENTIFIER,
        TokenType.RPAREN,
        TokenType.FAT_ARROW,
        TokenType.EXPRESSION,
        TokenType.NEWLINE,
        TokenType.EOF,
    ]
    body = [t for t in tokens if t.type == TokenType.EXPRESSION][0]
    assert body.value == "a + b * 2"


def test_options_strings_unescape():
    tokens = tokenize(r'c: radio = ["red", "say \"hi\""]')

    strings = [t.value for t in tokens if t.type == TokenType.STRING]
    assert strings == ["red", 'say "hi"']


def test_bare_constant_runs_to_end_of_line():
    tokens = tokenize("n: text-input = 42 apples\nm: paragraph = x")

    constants = [t.value for t in tokens if t.type == TokenType.CONSTANT]
    assert constants == ["42 apples", "x"]
    assert tokens[-1].type == TokenType.EOF


def test_blank_lines_and_comments_are_skipped():
    source = "\n# heading comment\n   \n// another\nx: paragraph = 1\n\n"

    tokens = tokenize(source)

    assert tokens[0].type == TokenType.IDENTIFIER
    assert tokens[0].line == 5
    assert _types(source).count(TokenType.NEWLINE) == 1


def test_hash_inside_value_is_not_a_comment():
    tokens = tokenize("color: text-input = #ff0000")

    assert tokens[4].type == TokenType.CONSTANT
    assert tokens[4].value == "#ff0000"


@pytest.mark.parametrize(
    "value",
    ['"hello" world', '"a" + "b"', '"abc', '"a\\"b" c'],
)
def test_text_that_only_starts_with_a_quote_is_a_constant(value):
    tokens = tokenize(f"x: paragraph = {value}\ny: paragraph = 1")

    assert [(t.type, t.value) for t in tokens[4:6]] == [
        (TokenType.CONSTANT, value),
        (TokenType.NEWLINE, "\n"),
    ]


def test_quoted_value_followed_by_spaces_is_a_string():
    tokens = tokenize('x: paragraph = "hi there"   \r\n')

    assert (tokens[4].type, tokens[4].value) == (TokenType.STRING, "hi there")


def test_windows_line_endings():
    tokens = tokenize("a: text-input = 1\r\nb: text-input = 2\r\n")

    constants = [t.value for t in tokens if t.type == TokenType.CONSTANT]
    assert constants == ["1", "2"]


def test_unterminated_string_is_reported_with_position():
    with pytest.raises(CDLSyntaxError) as exc_info:
        tokenize('c: radio = ["open')

    assert exc_info.value.line == 1
    assert "Unterminated string" in str(exc_info.value)


def test_unexpected_character_in_header():
    with pytest.raises(CDLSyntaxError) as exc_info:
        tokenize("x; text-input = 1", path="page.cdl")

    error = exc_info.value
    assert error.column == 2
    assert error.path == "page.cdl"
    assert "';'" in error.message


def test_unexpected_character_in_parameter_list():
    with pytest.raises(CDLSyntaxError) as exc_info:
        tokenize("y: paragraph = (a + b) => a")

    assert "parameter list" in exc_info.value.message
