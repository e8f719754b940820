"""Assemble a compiled CDL block into the fragment handed to a host document.

A block consists of a hidden element storing the CDL source, an optional copy
button, and the compiled cells. The ``row`` layout lays the cells out side by
side by wrapping them in a flex container and retrofitting a ``flex`` style
onto each top-level element.
"""

from __future__ import annotations

from typing import Optional

from cdl.codegen import compile_document
from cdl.codegen.substitution import element_lookup
from cdl.config import CompilerOptions
from cdl.errors import CDLConfigError
from cdl.lang import parse_document
from cdl.markup import Element, Markup, element, set_attribute, text

ROW_STYLE = "display: flex; flex-direction: row;"
CELL_STYLE = "flex:1"


def copy_button(block_id: str) -> Element:
    """A button copying the stored source of ``block_id`` to the clipboard."""
    return element(
        "button",
        [("onclick", f"navigator.clipboard.writeText({element_lookup(block_id)}.value);")],
        [text("Copy")],
    )


def apply_layout(tree: Markup, layout: Optional[str]) -> Markup:
    if layout is None:
        return tree
    if layout != "row":
        raise CDLConfigError(message=f"Unknown layout {layout!r}", key="layout")
    for node in tree:
        if isinstance(node, Element) and node.tag != "script":
            set_attribute(node, "style", CELL_STYLE)
    return [element("div", [("style", ROW_STYLE)], tree)]


def assemble_block(
    source: str,
    *,
    block_id: str,
    copy: bool = False,
    layout: Optional[str] = None,
    options: Optional[CompilerOptions] = None,
    path: str = "",
) -> Markup:
    """Compile ``source`` and wrap it as a self-contained block fragment.

    ``layout`` defaults to the layout configured in ``options``.
    """
    options = options or CompilerOptions()
    document = parse_document(source, path=path)
    cells = compile_document(document, options=options)

    fragment: Markup = [element("input", [("type", "hidden"), ("id", block_id), ("value", source)])]
    if copy:
        fragment.append(copy_button(block_id))
    fragment.extend(apply_layout(cells, layout if layout is not None else options.layout))
    return fragment


__all__ = ["assemble_block", "apply_layout", "copy_button", "ROW_STYLE", "CELL_STYLE"]
