"""Lexical analyzer (tokenizer) for CDL.

CDL is line oriented: every non-blank line holds one statement. The header of a
statement (``name: kind =``) is tokenized normally, while the value is lexed in
one of these modes chosen by how it starts:

* ``(`` starts a parameter list, followed by ``=>`` and raw expression text
* ``[`` starts a list of string literals
* a double-quoted string is unquoted when it is all that is left on the line
* anything else, including text that merely starts with a quote, is constant
  text running to the end of the line
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from cdl.errors import CDLSyntaxError


class TokenType(Enum):
    """Token types for CDL."""

    # Header
    IDENTIFIER = auto()
    COLON = auto()
    ASSIGN = auto()

    # Function values
    LPAREN = auto()
    RPAREN = auto()
    FAT_ARROW = auto()
    EXPRESSION = auto()

    # Option values
    LBRACKET = auto()
    RBRACKET = auto()
    STRING = auto()

    COMMA = auto()

    # Constant values
    CONSTANT = auto()

    # Special
    NEWLINE = auto()
    EOF = auto()


@dataclass
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    def describe(self) -> str:
        if self.type in (TokenType.NEWLINE, TokenType.EOF):
            return "end of line" if self.type == TokenType.NEWLINE else "end of file"
        return f"{self.type.name.lower().replace('_', ' ')} {self.value!r}"


_INLINE_SPACE = (' ', '\t', '\r')


class Lexer:
    """Tokenizer for CDL source code."""

    def __init__(self, source: str, path: str = ""):
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def error(self, message: str, *, suggestion: Optional[str] = None) -> CDLSyntaxError:
        return CDLSyntaxError(
            message=message,
            path=self.path,
            line=self.line,
            column=self.column,
            suggestion=suggestion,
        )

    def peek(self, offset: int = 0) -> Optional[str]:
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and carriage returns (but not newlines)."""
        while self.peek() in _INLINE_SPACE:
            self.advance()

    def skip_line(self) -> None:
        while self.peek() is not None and self.peek() != '\n':
            self.advance()

    def at_line_end(self) -> bool:
        return self.peek() in ('\n', None)

    def add_token(self, token_type: TokenType, value: str, *, line: int, column: int) -> None:
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def emit(self, token_type: TokenType) -> None:
        """Consume the current character as a single-character token."""
        line, column = self.line, self.column
        self.add_token(token_type, self.advance() or '', line=line, column=column)

    def read_word(self) -> str:
        """Read an identifier or a hyphenated widget keyword."""
        chars = []
        while self.peek() and (self.peek().isalnum() or self.peek() in ('_', '-')):
            chars.append(self.advance())
        return ''.join(chars)

    def read_rest_of_line(self) -> str:
        chars = []
        while not self.at_line_end():
            chars.append(self.advance())
        return ''.join(chars).strip()

    def read_string(self) -> str:
        """Read a double-quoted string literal, honouring backslash escapes."""
        self.advance()  # opening quote
        chars = []
        while True:
            char = self.peek()
            if char is None or char == '\n':
                raise self.error("Unterminated string literal", suggestion='Close the string with \'"\'')
            if char == '"':
                self.advance()
                break
            if char == '\\':
                self.advance()
                escape = self.advance()
                if escape is None or escape == '\n':
                    raise self.error("Unterminated string literal")
                if escape == 'n':
                    chars.append('\n')
                elif escape == 't':
                    chars.append('\t')
                else:
                    chars.append(escape)
            else:
                chars.append(self.advance())
        return ''.join(chars)

    def quoted_to_line_end(self) -> bool:
        """Whether the string literal starting here is the only thing left on the line."""
        pos = self.pos + 1
        while pos < len(self.source):
            char = self.source[pos]
            if char == '\n':
                return False
            if char == "\\":
                if self.source[pos + 1:pos + 2] in ("\n", ""):
                    return False
                pos += 2
                continue
            if char == '"':
                rest = self.source[pos + 1:].split('\n', 1)[0]
                return not rest.strip()
            pos += 1
        return False

    def is_comment(self) -> bool:
        return self.peek() == '#' or (self.peek() == '/' and self.peek(1) == '/')

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            self.skip_whitespace()
            if self.at_line_end():
                self.advance()
                continue
            if self.is_comment():
                self.skip_line()
                continue
            self.tokenize_statement()
            line, column = self.line, self.column
            self.add_token(TokenType.NEWLINE, '\n', line=line, column=column)
            self.advance()

        self.add_token(TokenType.EOF, '', line=self.line, column=self.column)
        return self.tokens

    def tokenize_statement(self) -> None:
        """Tokenize one line: the header up to ``=``, then the value."""
        while True:
            self.skip_whitespace()
            if self.at_line_end():
                return
            char = self.peek()
            if char == '=':
                self.emit(TokenType.ASSIGN)
                self.tokenize_value()
                return
            if char == ':':
                self.emit(TokenType.COLON)
                continue
            if char.isalpha() or char == '_':
                line, column = self.line, self.column
                self.add_token(TokenType.IDENTIFIER, self.read_word(), line=line, column=column)
                continue
            raise self.error(f"Unexpected character: {char!r}")

    def tokenize_value(self) -> None:
        self.skip_whitespace()
        if self.at_line_end():
            return
        char = self.peek()
        if char == '(':
            self.tokenize_function()
        elif char == '[':
            self.tokenize_options()
        elif char == '"' and self.quoted_to_line_end():
            line, column = self.line, self.column
            self.add_token(TokenType.STRING, self.read_string(), line=line, column=column)
        else:
            line, column = self.line, self.column
            self.add_token(TokenType.CONSTANT, self.read_rest_of_line(), line=line, column=column)

    def tokenize_function(self) -> None:
        self.emit(TokenType.LPAREN)
        while True:
            self.skip_whitespace()
            if self.at_line_end():
                return
            char = self.peek()
            if char == ')':
                self.emit(TokenType.RPAREN)
                break
            if char == ',':
                self.emit(TokenType.COMMA)
                continue
            if char.isalpha() or char == '_':
                line, column = self.line, self.column
                self.add_token(TokenType.IDENTIFIER, self.read_word(), line=line, column=column)
                continue
            raise self.error(
                f"Unexpected character in parameter list: {char!r}",
                suggestion="Parameters are cell names separated by commas",
            )

        self.skip_whitespace()
        if self.at_line_end():
            return
        line, column = self.line, self.column
        if self.peek() == '=' and self.peek(1) == '>':
            self.advance()
            self.advance()
            self.add_token(TokenType.FAT_ARROW, '=>', line=line, column=column)
            self.skip_whitespace()
            line, column = self.line, self.column
        self.add_token(TokenType.EXPRESSION, self.read_rest_of_line(), line=line, column=column)

    def tokenize_options(self) -> None:
        self.emit(TokenType.LBRACKET)
        while True:
            self.skip_whitespace()
            if self.at_line_end():
                return
            char = self.peek()
            if char == ']':
                self.emit(TokenType.RBRACKET)
                break
            if char == ',':
                self.emit(TokenType.COMMA)
                continue
            if char == '"':
                line, column = self.line, self.column
                self.add_token(TokenType.STRING, self.read_string(), line=line, column=column)
                continue
            raise self.error(
                f"Unexpected character in options list: {char!r}",
                suggestion='Options are double-quoted strings, e.g. ["red", "green"]',
            )
        self.tokenize_trailing_text()

    def tokenize_trailing_text(self) -> None:
        self.skip_whitespace()
        if self.at_line_end():
            return
        line, column = self.line, self.column
        self.add_token(TokenType.CONSTANT, self.read_rest_of_line(), line=line, column=column)


def tokenize(source: str, path: str = "") -> List[Token]:
    """Tokenize CDL source code."""
    lexer = Lexer(source, path)
    return lexer.tokenize()


__all__ = ["Token", "TokenType", "Lexer", "tokenize"]
