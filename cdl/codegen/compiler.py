"""Compile CDL documents into markup with pre-registered event listeners.

Reactivity is compiled into the page as one listener per dependency edge:

* a derived cell with inputs ``a`` and ``b`` gets one listener on ``a`` and one
  on ``b``, each recomputing the whole body and writing it into the cell;
* a choice cell is a hidden store plus a radio group; each radio's listener
  writes its choice into the store and re-dispatches the event on the store,
  so derived cells that read the choice cell recompute too.

Statements are emitted strictly in source order. There is no dependency
sorting, batching or debouncing; when several inputs fire, the last write wins.
"""

from __future__ import annotations

from typing import Optional, Sequence

from cdl.ast import Const, Document, Fn, Options, Statement, choice_id
from cdl.config import CompilerOptions
from cdl.markup import Element, Markup, element, iter_elements, script, text
from cdl.observability import get_logger, log_compile_event
from cdl.validation import validate_document

from .substitution import element_lookup, js_string, substitute

logger = get_logger("cdl.codegen")


def listener(source_id: str, statements: Sequence[str], event: str = "input") -> str:
    """Script registering a listener on ``source_id`` that runs ``statements``."""
    body = "".join(f"  {statement}\n" for statement in statements)
    return (
        f"\n{element_lookup(source_id)}.addEventListener({js_string(event)}, function(event) {{\n"
        f"{body}"
        "});\n"
    )


class ReactiveCompiler:
    """Turns a :class:`~cdl.ast.Document` into a markup tree."""

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()

    def compile(self, document: Document) -> Markup:
        if self.options.strict:
            validate_document(document)
        tree: Markup = []
        for statement in document:
            nodes = self.compile_statement(statement)
            logger.debug(
                "Statement %r (%s, %s) -> %d node(s)",
                statement.cell_name,
                statement.widget_kind,
                type(statement.value).__name__,
                len(nodes),
            )
            tree.extend(nodes)
        log_compile_event(
            path=document.path,
            statements=len(document),
            nodes=len(tree),
            scripts=sum(1 for node in iter_elements(tree) if node.tag == "script"),
            strict=self.options.strict,
            logger=logger,
        )
        return tree

    def compile_statement(self, statement: Statement) -> Markup:
        value = statement.value
        if isinstance(value, Const):
            return self._compile_const(statement, value)
        if isinstance(value, Fn):
            return self._compile_fn(statement, value)
        if isinstance(value, Options):
            return self._compile_options(statement, value)
        raise TypeError(f"Unsupported value type: {type(value).__name__}")

    def _cell_element(self, statement: Statement, *extra) -> Element:
        kind = statement.widget_kind
        attributes = kind.attributes() + [("id", statement.cell_name)] + list(extra)
        return element(kind.tag, attributes)

    def _compile_const(self, statement: Statement, value: Const) -> Markup:
        return [self._cell_element(statement, ("value", value.literal))]

    def _compile_fn(self, statement: Statement, value: Fn) -> Markup:
        body = substitute(value.body, value.inputs, self.options.substitution)
        target = f"{element_lookup(statement.cell_name)}.{statement.widget_kind.accessor}"
        nodes: Markup = []
        for name in value.inputs:
            nodes.append(script(listener(name, [f"{target} = {body};"], self.options.event)))
        nodes.append(self._cell_element(statement))
        return nodes

    def _compile_options(self, statement: Statement, value: Options) -> Markup:
        cell = statement.cell_name
        event = self.options.event
        store = element_lookup(cell)
        nodes: Markup = [element("input", [("type", "hidden"), ("id", cell)])]
        for choice in value.choices:
            radio_id = choice_id(cell, choice)
            nodes.append(
                element(
                    "input",
                    [
                        ("type", "radio"),
                        ("name", cell),
                        ("value", choice),
                        ("id", radio_id),
                    ],
                )
            )
            nodes.append(
                script(
                    listener(
                        radio_id,
                        [
                            f"{store}.value = {js_string(choice)};",
                            f"{store}.dispatchEvent(new Event({js_string(event)}));",
                        ],
                        event,
                    )
                )
            )
            nodes.append(element("label", [("for", radio_id)], [text(choice)]))
        return nodes


def compile_document(document: Document, *, options: Optional[CompilerOptions] = None) -> Markup:
    """Compile a parsed document into a markup tree."""
    return ReactiveCompiler(options).compile(document)


__all__ = ["ReactiveCompiler", "compile_document", "choice_id", "listener"]
