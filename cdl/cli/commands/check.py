"""Check command: parse (and optionally validate) a CDL file and list its cells."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cdl.ast import Const, Document, Fn, Options
from cdl.lang import parse_document
from cdl.observability import configure_logging
from cdl.validation import validate_document

from ..loading import read_source, resolve_options

console = Console()


def _describe_value(value) -> str:
    if isinstance(value, Const):
        return f"const {value.literal!r}"
    if isinstance(value, Fn):
        return f"({', '.join(value.inputs)}) => {value.body}"
    if isinstance(value, Options):
        return "[" + ", ".join(repr(choice) for choice in value.choices) + "]"
    return type(value).__name__


def cells_table(document: Document) -> Table:
    table = Table(title=f"{escape(document.path or 'CDL document')} ({len(document)} cells)")
    table.add_column("Line", style="dim", justify="right")
    table.add_column("Cell", style="bold blue")
    table.add_column("Widget", style="green")
    table.add_column("Value", style="white")
    for statement in document:
        table.add_row(
            str(statement.line or ""),
            statement.cell_name,
            statement.widget_kind.keyword,
            escape(_describe_value(statement.value)),
        )
    return table


def cmd_check(args: argparse.Namespace) -> None:
    options = resolve_options(args)
    configure_logging(options.log_level)
    source, path = read_source(args.file)
    document = parse_document(source, path=path)
    if options.strict:
        validate_document(document)
    if not args.quiet:
        console.print(cells_table(document))
    console.print(f"[green]✓[/green] {escape(path)}: {len(document)} cell(s) OK")


def add_check_command(subparsers) -> None:
    parser = subparsers.add_parser("check", help="Parse a CDL file and list its cells")
    parser.add_argument("file", help="CDL source file, or '-' for stdin")
    parser.add_argument("--strict", action="store_true", help="Reject duplicate ids and undefined inputs")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print the summary line")
    parser.set_defaults(func=cmd_check)
