"""Semantic checks run over a document before code generation.

The generated wiring resolves every cell by element id, so two problems lead
to pages that silently misbehave:

* two elements sharing an id, including a cell named like a synthetic choice
  id (``color_red`` next to ``color: radio = ["red"]``);
* a derived cell reading a cell that is not declared before it, since its
  listener is registered on an element that does not exist yet.
"""

from __future__ import annotations

from typing import Dict, Optional

from cdl.ast import Document, Fn, Options, Statement, choice_id
from cdl.errors import CDLDuplicateCellError, CDLReferenceError
from cdl.observability import get_logger

logger = get_logger("cdl.validation")


def _claim(ids: Dict[str, Statement], element_id: str, statement: Statement, path: str) -> None:
    owner = ids.get(element_id)
    if owner is not None:
        context: Optional[str] = None
        if owner.cell_name != element_id:
            context = f"'{element_id}' is a choice of cell '{owner.cell_name}'"
        elif statement.cell_name != element_id:
            context = f"'{element_id}' is a choice of cell '{statement.cell_name}'"
        raise CDLDuplicateCellError(
            message=f"Element id '{element_id}' is declared more than once",
            path=path or None,
            line=statement.line,
            column=statement.column,
            name=element_id,
            first_line=owner.line,
            context=context,
        )
    ids[element_id] = statement


def validate_document(document: Document) -> None:
    """Raise on duplicate element ids or unresolved derived-cell inputs."""
    path = document.path
    ids: Dict[str, Statement] = {}
    declared: Dict[str, Statement] = {}
    later = {statement.cell_name for statement in document}

    for statement in document:
        value = statement.value
        if isinstance(value, Fn):
            for name in value.inputs:
                if name in declared:
                    continue
                context = None
                if name == statement.cell_name:
                    context = "A derived cell cannot read itself"
                elif name in later:
                    context = f"'{name}' is declared after '{statement.cell_name}'"
                raise CDLReferenceError(
                    message=f"Undefined input '{name}' in derived cell '{statement.cell_name}'",
                    path=path or None,
                    line=statement.line,
                    column=statement.column,
                    name=name,
                    available=list(declared),
                    context=context,
                )

        _claim(ids, statement.cell_name, statement, path)
        if isinstance(value, Options):
            for choice in value.choices:
                _claim(ids, choice_id(statement.cell_name, choice), statement, path)
        declared[statement.cell_name] = statement

    logger.debug("Validated %d statement(s), %d element id(s)", len(document), len(ids))


__all__ = ["validate_document"]
