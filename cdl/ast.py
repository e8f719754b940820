"""AST node definitions for CDL documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from cdl.widgets import WidgetKind


@dataclass(frozen=True)
class Const:
    """A literal baked into the element at compile time."""

    literal: str


@dataclass(frozen=True)
class Fn:
    """A derived cell.

    ``body`` is host-expression text that refers to ``inputs`` as free
    variables. It is never parsed; the compiler rewrites it textually.
    """

    inputs: Tuple[str, ...]
    body: str


@dataclass(frozen=True)
class Options:
    """A finite choice, rendered as a radio group plus a hidden store."""

    choices: Tuple[str, ...]


Value = Union[Const, Fn, Options]


def choice_id(cell_name: str, choice: str) -> str:
    """Synthetic id of the radio control for ``choice``."""
    return f"{cell_name}_{choice}"


@dataclass(frozen=True)
class Statement:
    cell_name: str
    widget_kind: WidgetKind
    value: Value
    line: Optional[int] = field(default=None, compare=False)
    column: Optional[int] = field(default=None, compare=False)


@dataclass(frozen=True)
class Document:
    """A parsed CDL source: its statements in source order."""

    statements: Tuple[Statement, ...] = ()
    path: str = field(default="", compare=False)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def cell_names(self) -> List[str]:
        return [statement.cell_name for statement in self.statements]


__all__ = [
    "Const",
    "Fn",
    "Options",
    "Value",
    "choice_id",
    "Statement",
    "Document",
]
