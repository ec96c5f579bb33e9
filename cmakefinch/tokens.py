"""Token kinds and tokens produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from cmakefinch.source_buffer import SourceLocation


class TokenType(Enum):
    IDENTIFIER = "Identifier"
    STRING = "String"
    NUMBER = "Number"
    VARIABLE = "Variable"
    GENERATOR_EXPR = "GeneratorExpr"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    LEFT_BRACKET = "LeftBracket"
    RIGHT_BRACKET = "RightBracket"
    SEMICOLON = "Semicolon"
    COMMENT = "Comment"
    BRACKET_COMMENT = "BracketComment"
    NEWLINE = "Newline"
    WHITESPACE = "Whitespace"
    EOF = "Eof"
    INVALID = "Invalid"


_TYPE_NAMES = {
    TokenType.IDENTIFIER: "identifier",
    TokenType.STRING: "string literal",
    TokenType.NUMBER: "number",
    TokenType.VARIABLE: "variable reference",
    TokenType.GENERATOR_EXPR: "generator expression",
    TokenType.LEFT_PAREN: "left parenthesis",
    TokenType.RIGHT_PAREN: "right parenthesis",
    TokenType.LEFT_BRACKET: "left bracket",
    TokenType.RIGHT_BRACKET: "right bracket",
    TokenType.SEMICOLON: "semicolon",
    TokenType.COMMENT: "comment",
    TokenType.BRACKET_COMMENT: "bracket comment",
    TokenType.NEWLINE: "newline",
    TokenType.WHITESPACE: "whitespace",
    TokenType.EOF: "end of file",
    TokenType.INVALID: "invalid token",
}


def type_name(token_type: TokenType) -> str:
    """Return a human-readable name for a token type."""
    return _TYPE_NAMES.get(token_type, "unknown token")


def _format_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class Token:
    """A lexed token: its kind, decoded value, location and raw text."""

    type: TokenType
    value: Optional[Union[str, float]]
    location: SourceLocation
    text: str

    def __str__(self) -> str:
        value = self.value
        text_value = value if isinstance(value, str) else None
        kind = self.type
        if kind is TokenType.IDENTIFIER:
            return f"Identifier({text_value})" if text_value is not None else "Identifier()"
        if kind is TokenType.STRING:
            return f'String("{text_value}")' if text_value is not None else "String()"
        if kind is TokenType.NUMBER:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return f"Number({_format_number(value)})"
            return "Number()"
        if kind is TokenType.VARIABLE:
            return f"Variable(${{{text_value}}})" if text_value is not None else "Variable()"
        if kind is TokenType.GENERATOR_EXPR:
            if text_value is not None:
                return f"GeneratorExpr($<{text_value}>)"
            return "GeneratorExpr()"
        if kind is TokenType.INVALID:
            return f"Invalid({text_value})" if text_value is not None else "Invalid"
        return kind.value