"""Tokenizer for CMake source text."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, Union

from cmakefinch.source_buffer import SourceBuffer, SourceLocation
from cmakefinch.tokens import Token, TokenType


class ErrorCategory(Enum):
    INVALID_SYNTAX = "invalid syntax"
    UNTERMINATED_STRING = "unterminated string"
    UNKNOWN_COMMAND = "unknown command"


class ParseError(Exception):
    """A lexing or parsing failure, optionally tied to a source location."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INVALID_SYNTAX,
        location: Optional[SourceLocation] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.location = location

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"


_SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "]": TokenType.RIGHT_BRACKET,
    ";": TokenType.SEMICOLON,
    "\n": TokenType.NEWLINE,
}

_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "$": "$", ";": ";"}
_UNQUOTED_ESCAPABLE = frozenset(";()$@\\# ")
_C_SPACE = frozenset(" \t\n\v\f\r")
_HORIZONTAL_SPACE = frozenset(" \t\r")
_NOT_UNQUOTED = frozenset(" \t\r\n()#\"\\\0")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == "_")


class Lexer:
    """Turns CMake source into tokens, one call to next_token at a time."""

    def __init__(self, source: Union[str, SourceBuffer], filename: str = "<string>") -> None:
        if isinstance(source, SourceBuffer):
            self._buffer = source
        else:
            self._buffer = SourceBuffer(source, filename)
        self._pos = 0

    @property
    def buffer(self) -> SourceBuffer:
        return self._buffer

    def __iter__(self) -> Iterator[Token]:
        """Yield every remaining token, ending with the end-of-file token."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def peek_token(self, ahead: int = 0) -> Token:
        """Return the token ``ahead`` positions away without consuming anything."""
        saved = self._pos
        try:
            token = self.next_token()
            for _ in range(ahead):
                token = self.next_token()
        finally:
            self._pos = saved
        return token

    def next_token(self) -> Token:
        """Lex and return the next token; raises ParseError on bad input."""
        while True:
            self._skip_whitespace()
            if self._at_end():
                return Token(TokenType.EOF, None, self._location(self._pos), "")
            if self._current() == "#":
                self._skip_line_comment()
                continue
            break

        start = self._pos
        ch = self._current()

        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            self._pos += 1
            return self._make_token(kind, start)

        if ch == "[":
            if self._pos > 0 and self._buffer.at(self._pos - 1) == "#" and self._peek() == "[":
                return self._lex_bracket_comment()
            if self._peek() in ("=", "["):
                return self._lex_bracket_argument()
            self._pos += 1
            return self._make_token(TokenType.LEFT_BRACKET, start)

        if ch == '"':
            return self._lex_string()

        if ch == "$":
            if self._peek() == "{":
                return self._lex_variable()
            if self._peek() == "<":
                return self._lex_generator_expr()

        if ch in _HORIZONTAL_SPACE:
            while not self._at_end() and self._current() in _HORIZONTAL_SPACE:
                self._pos += 1
            return self._make_token(TokenType.WHITESPACE, start)

        if _is_digit(ch) or (ch == "." and _is_digit(self._peek())):
            return self._lex_number()

        if _is_identifier_start(ch) or ch not in _NOT_UNQUOTED:
            return self._lex_unquoted_argument()

        self._pos += 1
        raise self._error(f"Unexpected character: '{ch}'", start)

    # character helpers

    def _at_end(self) -> bool:
        return self._pos >= len(self._buffer)

    def _current(self) -> str:
        return self._buffer.at(self._pos)

    def _peek(self, ahead: int = 1) -> str:
        return self._buffer.at(self._pos + ahead)

    def _location(self, offset: int) -> SourceLocation:
        return self._buffer.location_at(offset)

    def _make_token(self, kind: TokenType, start: int, value=None) -> Token:
        return Token(kind, value, self._location(start), self._buffer.slice(start, self._pos))

    def _error(
        self,
        message: str,
        start: int,
        category: ErrorCategory = ErrorCategory.INVALID_SYNTAX,
    ) -> ParseError:
        return ParseError(message, category, self._location(start))

    def _skip_whitespace(self) -> None:
        while not self._at_end():
            ch = self._current()
            if ch == "\\" and self._peek() == "\n":
                self._pos += 2
            elif ch in _HORIZONTAL_SPACE:
                self._pos += 1
            else:
                break

    def _skip_line_comment(self) -> None:
        self._pos += 1
        while not self._at_end() and self._current() != "\n":
            self._pos += 1

    # token kinds

    def _lex_string(self) -> Token:
        start = self._pos
        self._pos += 1
        chars: list[str] = []
        escaped = False
        while not self._at_end() and (escaped or self._current() != '"'):
            ch = self._current()
            if escaped:
                chars.append(_STRING_ESCAPES.get(ch, "\\" + ch))
                escaped = False
            elif ch == "\\":
                escaped = True
            else:
                chars.append(ch)
            self._pos += 1

        if self._at_end():
            raise self._error("Unterminated string", start, ErrorCategory.UNTERMINATED_STRING)

        self._pos += 1
        return self._make_token(TokenType.STRING, start, "".join(chars))

    def _lex_delimited(self, opening: str, closing: str, start: int) -> Optional[str]:
        """Collect text up to the matching closer; None if input runs out."""
        chars: list[str] = []
        depth = 1
        while not self._at_end():
            ch = self._current()
            if ch == opening:
                depth += 1
            elif ch == closing:
                depth -= 1
                if depth == 0:
                    break
            chars.append(ch)
            self._pos += 1
        if self._at_end():
            return None
        self._pos += 1
        return "".join(chars)

    def _lex_variable(self) -> Token:
        start = self._pos
        self._pos += 2
        prefix = ""
        for candidate in ("ENV{", "CACHE{"):
            if self._buffer.slice(self._pos, self._pos + len(candidate)) == candidate:
                prefix = candidate
                self._pos += len(candidate)
                break

        name = self._lex_delimited("{", "}", start)
        if name is None:
            raise self._error("Unterminated variable reference", start)
        if prefix:
            name = f"{prefix}{name}}}"
        return self._make_token(TokenType.VARIABLE, start, name)

    def _lex_generator_expr(self) -> Token:
        start = self._pos
        self._pos += 2
        expr = self._lex_delimited("<", ">", start)
        if expr is None:
            raise self._error("Unterminated generator expression", start)
        return self._make_token(TokenType.GENERATOR_EXPR, start, expr)

    def _lex_number(self) -> Token:
        start = self._pos
        while not self._at_end() and _is_digit(self._current()):
            self._pos += 1

        if self._current() == "." and _is_digit(self._peek()):
            self._pos += 1
            while not self._at_end() and _is_digit(self._current()):
                self._pos += 1

        if self._current() in ("e", "E") and (
            _is_digit(self._peek())
            or (self._peek() in ("+", "-") and _is_digit(self._peek(2)))
        ):
            self._pos += 1
            if self._current() in ("+", "-"):
                self._pos += 1
            while not self._at_end() and _is_digit(self._current()):
                self._pos += 1

        try:
            value = float(self._buffer.slice(start, self._pos))
        except ValueError:
            raise self._error("Invalid number format", start) from None
        return self._make_token(TokenType.NUMBER, start, value)

    def _lex_unquoted_argument(self) -> Token:
        start = self._pos
        chars: list[str] = []
        while not self._at_end():
            ch = self._current()
            if ch in _C_SPACE or ch in "()#":
                break
            if ch == "\\":
                following = self._peek()
                if following in _UNQUOTED_ESCAPABLE:
                    self._pos += 1
                    chars.append(self._current())
                elif following == "\n":
                    self._pos += 2
                    continue
                else:
                    chars.append(ch)
            else:
                chars.append(ch)
            self._pos += 1

        if not chars:
            raise self._error("Expected argument", start)
        return self._make_token(TokenType.IDENTIFIER, start, "".join(chars))

    def _count_equals(self) -> int:
        count = 0
        while self._current() == "=":
            count += 1
            self._pos += 1
        return count

    def _lex_bracket_comment(self) -> Token:
        start = self._pos - 1
        self._pos += 2
        equals = self._count_equals()
        if self._current() != "[":
            raise self._error("Invalid bracket comment syntax", start + 1)
        self._pos += 1

        closing = "]" + "=" * equals + "]]"
        while not self._at_end():
            if self._buffer.slice(self._pos, self._pos + len(closing)) == closing:
                self._pos += len(closing)
                break
            self._pos += 1

        if self._at_end():
            raise self._error("Unterminated bracket comment", start + 1)
        return self._make_token(TokenType.BRACKET_COMMENT, start)

    def _lex_bracket_argument(self) -> Token:
        start = self._pos
        self._pos += 1
        equals = self._count_equals()
        if self._current() != "[":
            raise self._error("Invalid bracket argument syntax", start)
        self._pos += 1

        closing = "]" + "=" * equals + "]"
        chars: list[str] = []
        while not self._at_end():
            if self._buffer.slice(self._pos, self._pos + len(closing)) == closing:
                self._pos += len(closing)
                break
            chars.append(self._current())
            self._pos += 1

        if self._at_end():
            raise self._error("Unterminated bracket argument", start)
        return self._make_token(TokenType.STRING, start, "".join(chars))