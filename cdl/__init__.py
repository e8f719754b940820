"""
Component Description Language (CDL) compiler.

CDL declares named cells, one per line, each rendered as a widget::

    name: text-input = "Ada"
    greeting: paragraph = (name) => "Hello, " + name
    color: radio = ["red", "green"]

A cell holds a constant, a value derived from other cells, or a finite set
of choices. The compiler turns a CDL document into markup plus inline
event-listener scripts, so that edits to source cells propagate to the cells
derived from them without any runtime framework.

The code is organised into several modules:

* ``lang`` – lexer, parser and AST builder for CDL source text.
* ``ast`` – immutable dataclasses for parsed documents.
* ``markup`` – the markup tree, escaping helpers and serializer.
* ``codegen`` – the reactive compiler from AST to markup tree.
* ``validation`` – optional duplicate-id and reference checks.
* ``assembly`` – wraps a compiled document as a host-ready fragment.
* ``cli`` – the ``cdl`` command line interface.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata
from typing import Optional


def _local_version() -> Optional[str]:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("cdl-compiler")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

from cdl.assembly import assemble_block  # noqa: E402
from cdl.ast import Const, Document, Fn, Options, Statement  # noqa: E402
from cdl.codegen import ReactiveCompiler, compile_document  # noqa: E402
from cdl.config import CompilerOptions, load_config  # noqa: E402
from cdl.errors import (  # noqa: E402
    CDLConfigError,
    CDLDuplicateCellError,
    CDLError,
    CDLMarkupError,
    CDLReferenceError,
    CDLSemanticError,
    CDLSyntaxError,
)
from cdl.lang import parse_document  # noqa: E402
from cdl.markup import Markup, serialize  # noqa: E402
from cdl.widgets import WidgetKind  # noqa: E402


def compile_source(source: str, *, path: str = "", options: Optional[CompilerOptions] = None) -> Markup:
    """Parse and compile CDL source into a markup tree."""
    return compile_document(parse_document(source, path=path), options=options)


def render(source: str, *, path: str = "", options: Optional[CompilerOptions] = None) -> str:
    """Parse, compile and serialize CDL source to markup text."""
    return serialize(compile_source(source, path=path, options=options))


__all__ = [
    "__version__",
    "assemble_block",
    "compile_document",
    "compile_source",
    "load_config",
    "parse_document",
    "render",
    "serialize",
    "CompilerOptions",
    "Const",
    "Document",
    "Fn",
    "Markup",
    "Options",
    "ReactiveCompiler",
    "Statement",
    "WidgetKind",
    "CDLConfigError",
    "CDLDuplicateCellError",
    "CDLError",
    "CDLMarkupError",
    "CDLReferenceError",
    "CDLSemanticError",
    "CDLSyntaxError",
]
