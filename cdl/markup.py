"""Markup tree: the intermediate representation emitted by the compiler.

A tree is an ordered list of nodes, each either a :class:`Text` node or an
:class:`Element` with ordered attributes and children.

Escaping happens when nodes are created, never when they are serialized:

* :func:`text` escapes ``&``, ``<`` and ``>`` in its content.
* :func:`raw` keeps its content as is. It is reserved for script bodies.
* :func:`element` and :func:`set_attribute` escape attribute values,
  including double quotes.

The :class:`Text` and :class:`Element` constructors store their arguments
unchanged, so hand-built trees are serialized exactly as written.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from cdl.errors import CDLMarkupError


@dataclass
class Text:
    content: str


@dataclass
class Element:
    tag: str
    attributes: List[Tuple[str, str]] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def get_attribute(self, key: str) -> Optional[str]:
        for name, value in self.attributes:
            if name == key:
                return value
        return None


Node = Union[Text, Element]
Markup = List[Node]


def escape_text(value: str) -> str:
    return html.escape(value, quote=False)


def escape_attribute(value: str) -> str:
    return html.escape(value, quote=True)


def text(content: str) -> Text:
    """Create a text node with markup-special characters escaped."""
    return Text(escape_text(content))


def raw(content: str) -> Text:
    """Create a text node that is emitted verbatim (script bodies only)."""
    return Text(content)


def element(
    tag: str,
    attributes: Iterable[Tuple[str, str]] = (),
    children: Iterable[Node] = (),
) -> Element:
    """Create an element, escaping every attribute value."""
    return Element(
        tag=tag,
        attributes=[(key, escape_attribute(value)) for key, value in attributes],
        children=list(children),
    )


def script(code: str) -> Element:
    return Element(tag="script", children=[raw(code)])


def set_attribute(node: Node, key: str, value: str) -> Element:
    """Set ``key`` on an element, replacing an existing value in place.

    The attribute keeps its position when it already exists and is appended
    otherwise. Any later duplicates of ``key`` are dropped. Children are left
    untouched.

    Raises:
        CDLMarkupError: If ``node`` is a text node.
    """
    if not isinstance(node, Element):
        raise CDLMarkupError(message=f"Cannot set attribute {key!r} on a text node")

    escaped = escape_attribute(value)
    updated: List[Tuple[str, str]] = []
    replaced = False
    for name, current in node.attributes:
        if name != key:
            updated.append((name, current))
        elif not replaced:
            updated.append((name, escaped))
            replaced = True
    if not replaced:
        updated.append((key, escaped))
    node.attributes = updated
    return node


def serialize(tree: Union[Node, Sequence[Node]]) -> str:
    """Render a tree to markup text, depth first."""
    if isinstance(tree, (Text, Element)):
        tree = [tree]
    parts: List[str] = []
    for node in tree:
        _serialize_node(node, parts)
    return "".join(parts)


def _serialize_node(node: Node, parts: List[str]) -> None:
    if isinstance(node, Text):
        parts.append(node.content)
        return
    parts.append(f"<{node.tag}")
    for key, value in node.attributes:
        parts.append(f' {key}="{value}"')
    parts.append(">")
    for child in node.children:
        _serialize_node(child, parts)
    parts.append(f"</{node.tag}>")


def iter_elements(tree: Sequence[Node]) -> Iterator[Element]:
    """Yield every element of the tree in document order."""
    for node in tree:
        if isinstance(node, Element):
            yield node
            yield from iter_elements(node.children)


__all__ = [
    "Text",
    "Element",
    "Node",
    "Markup",
    "text",
    "raw",
    "element",
    "script",
    "set_attribute",
    "serialize",
    "escape_text",
    "escape_attribute",
    "iter_elements",
]
