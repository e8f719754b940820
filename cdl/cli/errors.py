"""
Error handling for the CDL CLI.

Compiler errors (:class:`cdl.errors.CDLError`) already carry locations and
codes; the classes here cover failures that belong to the command line itself,
such as unreadable input files.
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, Optional

# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIFileNotFoundError(CLIError):
    """Source file or output directory not found."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


class CLIValidationError(CLIError):
    """Invalid or incompatible command line arguments."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


class CLIWriteError(CLIError):
    """Output file could not be written."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_WRITE_ERROR')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False,
) -> str:
    """
    Format an exception for CLI display.

    Examples:
        >>> print(format_cli_error(CLIFileNotFoundError("missing.cdl", hint="Check the path")))
        Error: missing.cdl
        Hint: Check the path
    """
    if isinstance(exc, CLIError):
        lines = [f"Error: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        formatter = getattr(exc, "format", None)
        lines = [f"Error: {formatter() if callable(formatter) else exc}"]

    if include_traceback:
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if len(trace) > _CLI_TRACE_LIMIT:
            trace = "..." + trace[-_CLI_TRACE_LIMIT:]
        lines.append(trace.rstrip())

    return "\n".join(lines)


__all__ = [
    "CLIError",
    "CLIFileNotFoundError",
    "CLIValidationError",
    "CLIWriteError",
    "format_cli_error",
]
