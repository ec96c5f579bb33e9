import pytest

from cmakefinch.source_buffer import SourceLocation
from cmakefinch.tokens import Token, TokenType, type_name

LOC = SourceLocation("f.cmake", 1, 1, 0)


def tok(kind, value=None, text=""):
    return Token(kind, value, LOC, text)


@pytest.mark.parametrize(
    "kind, name",
    [
        (TokenType.IDENTIFIER, "identifier"),
        (TokenType.STRING, "string literal"),
        (TokenType.NUMBER, "number"),
        (TokenType.VARIABLE, "variable reference"),
        (TokenType.GENERATOR_EXPR, "generator expression"),
        (TokenType.LEFT_PAREN, "left parenthesis"),
        (TokenType.RIGHT_PAREN, "right parenthesis"),
        (TokenType.LEFT_BRACKET, "left bracket"),
        (TokenType.RIGHT_BRACKET, "right bracket"),
        (TokenType.SEMICOLON, "semicolon"),
        (TokenType.COMMENT, "comment"),
        (TokenType.BRACKET_COMMENT, "bracket comment"),
        (TokenType.NEWLINE, "newline"),
        (TokenType.WHITESPACE, "whitespace"),
        (TokenType.EOF, "end of file"),
        (TokenType.INVALID, "invalid token"),
    ],
)
def test_type_name(kind, name):
    assert type_name(kind) == name


def test_value_tokens_render_their_values():
    assert str(tok(TokenType.IDENTIFIER, "foo")) == "Identifier(foo)"
    assert str(tok(TokenType.STRING, "hi")) == 'String("hi")'
    assert str(tok(TokenType.VARIABLE, "FOO")) == "Variable(${FOO})"
    assert str(tok(TokenType.GENERATOR_EXPR, "CONFIG")) == "GeneratorExpr($<CONFIG>)"
    assert str(tok(TokenType.INVALID, "oops")) == "Invalid(oops)"


def test_numbers_render_without_trailing_zero():
    assert str(tok(TokenType.NUMBER, 3.5)) == "Number(3.5)"
    assert str(tok(TokenType.NUMBER, 42.0)) == "Number(42)"


def test_missing_values():
    assert str(tok(TokenType.IDENTIFIER)) == "Identifier()"
    assert str(tok(TokenType.STRING)) == "String()"
    assert str(tok(TokenType.NUMBER)) == "Number()"
    assert str(tok(TokenType.INVALID)) == "Invalid"


@pytest.mark.parametrize(
    "kind, text",
    [
        (TokenType.LEFT_PAREN, "LeftParen"),
        (TokenType.RIGHT_PAREN, "RightParen"),
        (TokenType.SEMICOLON, "Semicolon"),
        (TokenType.NEWLINE, "Newline"),
        (TokenType.EOF, "Eof"),
    ],
)
def test_punctuation_renders_type(kind, text):
    assert str(tok(kind)) == text