"""Centralised logging helpers for the CDL compiler."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = "cdl") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def log_compile_event(
    *,
    path: Optional[str],
    statements: int,
    nodes: int,
    scripts: int,
    strict: bool,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured log entry summarising one compilation."""

    payload: Dict[str, Any] = {
        "path": path or "<string>",
        "statements": statements,
        "nodes": nodes,
        "scripts": scripts,
        "strict": strict,
    }
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("cdl.codegen")
    target_logger.info(
        "Compiled %d statement(s) into %d node(s)",
        statements,
        nodes,
        extra={"cdl_event": "compile", "cdl_data": payload},
    )


def configure_logging(level: str = "WARNING") -> None:
    """Install a basic stderr handler; used by the CLI only."""

    logging.basicConfig(
        level=level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
