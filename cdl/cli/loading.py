"""Input and configuration loading shared by CLI commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Tuple

from cdl.config import CompilerOptions, apply_cli_overrides, load_config

from .errors import CLIFileNotFoundError


def read_source(file_arg: str) -> Tuple[str, str]:
    """Return ``(source, path)`` for a file argument, ``-`` meaning stdin."""
    if file_arg == "-":
        return sys.stdin.read(), "<stdin>"
    path = Path(file_arg)
    if not path.is_file():
        raise CLIFileNotFoundError(
            f"CDL source file not found: {file_arg}",
            hint="Pass the path to a .cdl file, or '-' to read from stdin",
            context={"path": str(path)},
        )
    return path.read_text(encoding="utf-8"), str(path)


def resolve_options(args: argparse.Namespace) -> CompilerOptions:
    """Load the workspace config and apply command line overrides on top."""
    config = getattr(args, "config", None)
    options = load_config(Path.cwd(), Path(config) if config else None)
    return apply_cli_overrides(
        options,
        strict=True if getattr(args, "strict", False) else None,
        substitution=getattr(args, "substitution", None),
        layout=getattr(args, "layout", None),
        log_level=getattr(args, "log_level", None),
    )


__all__ = ["read_source", "resolve_options"]
