"""CLI subcommands."""

from .check import add_check_command, cmd_check
from .compile import add_compile_command, cmd_compile

__all__ = [
    "add_check_command",
    "add_compile_command",
    "cmd_check",
    "cmd_compile",
]
