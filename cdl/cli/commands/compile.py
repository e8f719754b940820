"""
Compile command implementation.

Turns a CDL source file into a markup fragment, either the bare compiled cells
or, with ``--block-id``, a full block with the stored source and an optional
copy button.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from cdl.assembly import apply_layout, assemble_block
from cdl.codegen import compile_document
from cdl.lang import parse_document
from cdl.markup import serialize
from cdl.observability import configure_logging, get_logger

from ..errors import CLIValidationError, CLIWriteError
from ..loading import read_source, resolve_options

logger = get_logger("cdl.cli")
console = Console(stderr=True)


def cmd_compile(args: argparse.Namespace) -> None:
    """Handle the 'compile' subcommand."""
    if args.copy and not args.block_id:
        raise CLIValidationError("--copy requires --block-id", hint="The copy button copies the stored block source")
    options = resolve_options(args)
    configure_logging(options.log_level)
    source, path = read_source(args.file)

    if args.block_id:
        tree = assemble_block(
            source,
            block_id=args.block_id,
            copy=args.copy,
            options=options,
            path=path,
        )
    else:
        document = parse_document(source, path=path)
        tree = apply_layout(compile_document(document, options=options), options.layout)

    output = serialize(tree)
    if args.output in (None, "-"):
        sys.stdout.write(output + "\n")
        return

    out_path = Path(args.output)
    try:
        out_path.write_text(output + "\n", encoding="utf-8")
    except OSError as exc:
        raise CLIWriteError(f"Cannot write {out_path}: {exc.strerror}", context={"path": str(out_path)}) from exc
    logger.info("Wrote %s", out_path)
    console.print(f"[green]✓[/green] Compiled {escape(path)} -> {escape(str(out_path))}")


def add_compile_command(subparsers) -> None:
    parser = subparsers.add_parser("compile", help="Compile a CDL file to HTML")
    parser.add_argument("file", help="CDL source file, or '-' for stdin")
    parser.add_argument("-o", "--output", help="Write HTML to this file instead of stdout")
    parser.add_argument("--strict", action="store_true", help="Reject duplicate ids and undefined inputs")
    parser.add_argument("--substitution", choices=["token", "text"], help="How derived-cell bodies are rewritten")
    parser.add_argument("--layout", choices=["row"], help="Lay cells out side by side")
    parser.add_argument("--block-id", help="Emit a full block storing the source under this id")
    parser.add_argument("--copy", action="store_true", help="Add a copy button (requires --block-id)")
    parser.set_defaults(func=cmd_compile)
