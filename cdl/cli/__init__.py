"""
CDL CLI entry point.

Usage::

    cdl compile page.cdl -o page.html
    cdl compile page.cdl --block-id demo --copy --layout row
    cdl check page.cdl --strict
"""

import argparse
import sys
from typing import List, Optional

from rich.console import Console

from cdl import __version__
from cdl.errors import CDLError

from .commands import add_check_command, add_compile_command, cmd_check, cmd_compile
from .errors import CLIError, format_cli_error

error_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdl",
        description="Compile Component Description Language documents to reactive HTML.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a cdl.toml or pyproject.toml file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default from config, else WARNING)",
    )
    parser.add_argument("--verbose", action="store_true", help="Show tracebacks on errors")

    subparsers = parser.add_subparsers(dest="command")
    add_compile_command(subparsers)
    add_check_command(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 2

    try:
        args.func(args)
    except (CDLError, CLIError) as exc:
        error_console.print(
            format_cli_error(exc, verbose=args.verbose, include_traceback=args.verbose),
            style="bold red",
            markup=False,
            highlight=False,
        )
        return 1
    return 0


__all__ = ["main", "build_parser", "cmd_compile", "cmd_check"]


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
