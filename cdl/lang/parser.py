"""Recursive descent parser for CDL.

The parser validates the token stream against the grammar below and produces a
generic parse tree of :class:`ParseNode` objects. Turning that tree into typed
AST nodes is the job of :mod:`cdl.lang.builder`.

Grammar:
    document    = { statement } , EOI ;
    statement   = identifier , ":" , widget_kind , "=" , value ;
    widget_kind = "text-input" | "text-area" | "paragraph" | "radio" ;
    value       = constant | function | options ;
    function    = "(" , identifier , { "," , identifier } , ")" , "=>" , expression ;
    options     = "[" , string , { "," , string } , "]" ;
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from cdl.errors import CDLSyntaxError, create_syntax_error, find_similar
from cdl.widgets import WidgetKind

from .lexer import Token, TokenType, tokenize

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ParseNode:
    """A node of the CDL parse tree.

    ``rule`` names the grammar rule the node matched and ``text`` holds the
    matched source text (string literals are unquoted).
    """

    rule: str
    text: str = ""
    line: int = 0
    column: int = 0
    children: Tuple["ParseNode", ...] = field(default_factory=tuple)

    def child(self, rule: str) -> "ParseNode":
        for node in self.children:
            if node.rule == rule:
                return node
        raise KeyError(rule)


class CDLParser:
    """Parser for a single CDL source string."""

    def __init__(self, source: str, *, path: str = ""):
        self.source = source
        self.path = path
        self.tokens = tokenize(source, path)
        self.pos = 0

    # ====================================================================
    # Token Management
    # ====================================================================

    def peek(self, offset: int = 0) -> Optional[Token]:
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def current(self) -> Optional[Token]:
        return self.peek(0)

    def advance(self) -> Token:
        token = self.current()
        if token is None:
            raise self.error("Unexpected end of file")
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        token = self.current()
        return token is not None and token.type in types

    def expect(self, *types: TokenType, suggestion: Optional[str] = None) -> Token:
        """Expect one of the given token types and consume it."""
        token = self.current()
        if token is None or token.type not in types:
            raise self.unexpected(
                [_describe_type(t) for t in types],
                suggestion=suggestion,
            )
        return self.advance()

    def skip_newlines(self) -> None:
        while self.match(TokenType.NEWLINE):
            self.advance()

    def error(self, message: str, suggestion: Optional[str] = None) -> CDLSyntaxError:
        token = self.current()
        return create_syntax_error(
            message,
            path=self.path,
            line=token.line if token else None,
            column=token.column if token else None,
            suggestion=suggestion,
        )

    def unexpected(self, expected: List[str], *, suggestion: Optional[str] = None) -> CDLSyntaxError:
        token = self.current()
        return create_syntax_error(
            "Unexpected token",
            path=self.path,
            line=token.line if token else None,
            column=token.column if token else None,
            expected=expected,
            found=token.describe() if token else "end of file",
            suggestion=suggestion,
        )

    # ====================================================================
    # Rules
    # ====================================================================

    def parse(self) -> ParseNode:
        """
        Parse the whole document.

        Grammar:
            document = { statement } , EOI ;
        """
        statements: List[ParseNode] = []
        self.skip_newlines()
        while not self.match(TokenType.EOF):
            statements.append(self.parse_statement())
            self.skip_newlines()
        eof = self.expect(TokenType.EOF)
        statements.append(ParseNode("EOI", line=eof.line, column=eof.column))
        return ParseNode("document", text=self.source, line=1, column=1, children=tuple(statements))

    def parse_statement(self) -> ParseNode:
        """
        Grammar:
            statement = identifier , ":" , widget_kind , "=" , value ;
        """
        name = self.parse_identifier("cell name")
        self.expect(TokenType.COLON, suggestion=f"Write '{name.text}: <widget> = <value>'")
        kind = self.parse_widget_kind()
        self.expect(TokenType.ASSIGN, suggestion="Separate the widget kind and the value with '='")
        value = self.parse_value()
        if not self.match(TokenType.NEWLINE, TokenType.EOF):
            raise self.unexpected(["end of line"], suggestion="Write one statement per line")
        return ParseNode(
            "stmt",
            line=name.line,
            column=name.column,
            children=(name, kind, value),
        )

    def parse_identifier(self, what: str = "identifier") -> ParseNode:
        token = self.expect(TokenType.IDENTIFIER)
        if not _IDENTIFIER_PATTERN.match(token.value):
            raise create_syntax_error(
                f"Invalid {what} {token.value!r}",
                path=self.path,
                line=token.line,
                column=token.column,
                expected=["identifier"],
                found=token.value,
                suggestion="Identifiers contain only letters, digits and underscores",
            )
        return ParseNode("identifier", text=token.value, line=token.line, column=token.column)

    def parse_widget_kind(self) -> ParseNode:
        token = self.current()
        keywords = WidgetKind.keywords()
        if token is None or token.type != TokenType.IDENTIFIER:
            raise self.unexpected(["widget kind"])
        if WidgetKind.from_keyword(token.value) is None:
            similar = find_similar(token.value, keywords)
            raise create_syntax_error(
                f"Unknown widget kind {token.value!r}",
                path=self.path,
                line=token.line,
                column=token.column,
                expected=keywords,
                found=token.value,
                suggestion=f"Did you mean '{similar[0]}'?" if similar else None,
            )
        self.advance()
        return ParseNode("widget_kind", text=token.value, line=token.line, column=token.column)

    def parse_value(self) -> ParseNode:
        """
        Grammar:
            value = constant | function | options ;
        """
        if self.match(TokenType.LPAREN):
            return self.parse_function()
        if self.match(TokenType.LBRACKET):
            return self.parse_options()
        if self.match(TokenType.STRING):
            token = self.advance()
            return ParseNode("constant", text=token.value, line=token.line, column=token.column)
        if self.match(TokenType.CONSTANT):
            token = self.current()
            if "=>" in token.value:
                raise self.error(
                    "Derived value is missing its parameter list",
                    suggestion="Wrap the input cells in parentheses, e.g. (a, b) => a + b",
                )
            self.advance()
            return ParseNode("constant", text=token.value, line=token.line, column=token.column)
        raise self.unexpected(["constant", "function", "options"])

    def parse_function(self) -> ParseNode:
        """
        Grammar:
            function = "(" , identifier , { "," , identifier } , ")" , "=>" , expression ;
        """
        start = self.expect(TokenType.LPAREN)
        params = [self.parse_identifier("parameter")]
        while self.match(TokenType.COMMA):
            self.advance()
            params.append(self.parse_identifier("parameter"))
        self.expect(TokenType.RPAREN, suggestion="Close the parameter list with ')'")
        self.expect(TokenType.FAT_ARROW, suggestion="Follow the parameter list with '=>' and an expression")
        body = self.expect(TokenType.EXPRESSION)
        if not body.value:
            raise create_syntax_error(
                "Derived value has an empty body",
                path=self.path,
                line=body.line,
                column=body.column,
                expected=["expression"],
            )
        params_node = ParseNode(
            "params",
            text=", ".join(param.text for param in params),
            line=start.line,
            column=start.column + 1,
            children=tuple(params),
        )
        body_node = ParseNode("body", text=body.value, line=body.line, column=body.column)
        return ParseNode(
            "function",
            line=start.line,
            column=start.column,
            children=(params_node, body_node),
        )

    def parse_options(self) -> ParseNode:
        """
        Grammar:
            options = "[" , string , { "," , string } , "]" ;
        """
        start = self.expect(TokenType.LBRACKET)
        choices = [self.parse_string()]
        while self.match(TokenType.COMMA):
            self.advance()
            choices.append(self.parse_string())
        self.expect(TokenType.RBRACKET, suggestion="Close the options list with ']'")
        return ParseNode("options", line=start.line, column=start.column, children=tuple(choices))

    def parse_string(self) -> ParseNode:
        token = self.expect(TokenType.STRING)
        return ParseNode("string", text=token.value, line=token.line, column=token.column)


def _describe_type(token_type: TokenType) -> str:
    return {
        TokenType.COLON: "':'",
        TokenType.ASSIGN: "'='",
        TokenType.LPAREN: "'('",
        TokenType.RPAREN: "')'",
        TokenType.FAT_ARROW: "'=>'",
        TokenType.LBRACKET: "'['",
        TokenType.RBRACKET: "']'",
        TokenType.COMMA: "','",
        TokenType.EOF: "end of file",
        TokenType.NEWLINE: "end of line",
    }.get(token_type, token_type.name.lower().replace('_', ' '))


def parse_tree(source: str, *, path: str = "") -> ParseNode:
    """Parse *source* into a CDL parse tree."""
    return CDLParser(source, path=path).parse()


__all__ = ["ParseNode", "CDLParser", "parse_tree"]
