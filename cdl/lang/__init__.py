"""CDL front end: lexer, parser and AST builder.

Public API:
    parse_document(source, path) -> Document
"""

from cdl.ast import Document
from cdl.errors import CDLSyntaxError

from .builder import ASTBuilder, build_document
from .lexer import Token, TokenType, tokenize
from .parser import CDLParser, ParseNode, parse_tree


def parse_document(source: str, *, path: str = "") -> Document:
    """
    Parse CDL source into a :class:`~cdl.ast.Document`.

    Args:
        source: CDL source text, one statement per line
        path: Optional file path for error reporting

    Raises:
        CDLSyntaxError: If the source does not match the grammar. Nothing is
            returned for the statements that did parse.

    Example:
        ```python
        document = parse_document('x: text-input = "hello"')
        document.statements[0].cell_name  # "x"
        ```
    """
    return build_document(parse_tree(source, path=path), path=path)


__all__ = [
    "parse_document",
    "parse_tree",
    "build_document",
    "ASTBuilder",
    "CDLParser",
    "CDLSyntaxError",
    "ParseNode",
    "Token",
    "TokenType",
    "tokenize",
]
