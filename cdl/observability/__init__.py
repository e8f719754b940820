"""Lightweight observability helpers for logging."""

from __future__ import annotations

from .logging import configure_logging, get_logger, log_compile_event

__all__ = [
    "configure_logging",
    "get_logger",
    "log_compile_event",
]
