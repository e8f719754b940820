"""Build typed AST nodes from a CDL parse tree."""

from __future__ import annotations

from typing import List

from cdl.ast import Const, Document, Fn, Options, Statement, Value
from cdl.errors import create_syntax_error
from cdl.widgets import WidgetKind

from .parser import ParseNode


class ASTBuilder:
    """Walks a ``document`` parse node and materialises a :class:`Document`."""

    def __init__(self, *, path: str = "") -> None:
        self.path = path

    def build(self, tree: ParseNode) -> Document:
        statements: List[Statement] = []
        for node in tree.children:
            if node.rule == "EOI":
                continue
            if node.rule != "stmt":
                raise self._unexpected(node)
            statements.append(self.build_statement(node))
        return Document(statements=tuple(statements), path=self.path)

    def build_statement(self, node: ParseNode) -> Statement:
        name, kind, value = node.children
        widget_kind = WidgetKind.from_keyword(kind.text)
        if widget_kind is None:
            raise self._unexpected(kind)
        return Statement(
            cell_name=name.text.strip(),
            widget_kind=widget_kind,
            value=self.build_value(value),
            line=node.line,
            column=node.column,
        )

    def build_value(self, node: ParseNode) -> Value:
        if node.rule == "constant":
            return Const(literal=node.text)
        if node.rule == "function":
            params = node.child("params")
            body = node.child("body")
            inputs: List[str] = []
            # Ordered set: a repeated parameter keeps its first position.
            for name in params.text.split(","):
                name = name.strip()
                if name not in inputs:
                    inputs.append(name)
            return Fn(inputs=tuple(inputs), body=body.text)
        if node.rule == "options":
            return Options(choices=tuple(child.text for child in node.children))
        raise self._unexpected(node)

    def _unexpected(self, node: ParseNode):
        return create_syntax_error(
            f"Unexpected parse node '{node.rule}'",
            path=self.path,
            line=node.line or None,
            column=node.column or None,
        )


def build_document(tree: ParseNode, *, path: str = "") -> Document:
    return ASTBuilder(path=path).build(tree)


__all__ = ["ASTBuilder", "build_document"]
