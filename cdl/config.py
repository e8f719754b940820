"""Compiler configuration for CDL projects."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

from cdl.errors import CDLConfigError

SUBSTITUTION_MODES = ("token", "text")
LAYOUTS = ("row",)


@dataclass(frozen=True)
class CompilerOptions:
    """Options controlling a compilation call."""

    # Run the duplicate-id and reference checks before code generation.
    strict: bool = False
    # "token" rewrites whole identifiers only; "text" replaces every substring.
    substitution: str = "token"
    # DOM event the generated listeners subscribe to.
    event: str = "input"
    layout: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.substitution not in SUBSTITUTION_MODES:
            raise CDLConfigError(
                message=f"Unknown substitution mode {self.substitution!r}; expected one of {', '.join(SUBSTITUTION_MODES)}",
                key="substitution",
            )
        if self.layout is not None and self.layout not in LAYOUTS:
            raise CDLConfigError(
                message=f"Unknown layout {self.layout!r}; expected one of {', '.join(LAYOUTS)}",
                key="layout",
            )
        if not self.event or not self.event.isidentifier():
            raise CDLConfigError(message=f"Invalid event name {self.event!r}", key="event")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise CDLConfigError(message=f"Unknown log level {self.log_level!r}", key="log_level")


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise RuntimeError("TOML parsing requires Python 3.11 or later.")
    with path.open("rb") as handle:
        return tomllib.load(handle)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in ("cdl.toml", "pyproject.toml"):
        path = root / candidate
        if path.exists():
            return path
    return None


def _section(data: Dict[str, Any], path: Path) -> Dict[str, Any]:
    if path.name == "pyproject.toml":
        return (data.get("tool") or {}).get("cdl") or {}
    return data.get("compiler") or {}


def _parse_options(section: Dict[str, Any], path: Path) -> CompilerOptions:
    defaults = CompilerOptions()
    known = {"strict", "substitution", "event", "layout", "log_level"}
    unknown = sorted(set(section) - known)
    if unknown:
        raise CDLConfigError(
            message=f"Unknown compiler option(s): {', '.join(unknown)}",
            path=str(path),
            key=unknown[0],
        )
    strict = section.get("strict", defaults.strict)
    if not isinstance(strict, bool):
        raise CDLConfigError(message="'strict' must be true or false", path=str(path), key="strict")
    try:
        return CompilerOptions(
            strict=strict,
            substitution=str(section.get("substitution", defaults.substitution)),
            event=str(section.get("event", defaults.event)),
            layout=str(section["layout"]) if section.get("layout") else None,
            log_level=str(section.get("log_level", defaults.log_level)),
        )
    except CDLConfigError as exc:
        exc.path = str(path)
        raise


def load_config(root: Path, explicit: Optional[Path] = None) -> CompilerOptions:
    """Load options from ``cdl.toml`` (``[compiler]``) or ``pyproject.toml`` (``[tool.cdl]``)."""
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        if explicit is not None:
            raise CDLConfigError(message="Configuration file not found", path=str(explicit))
        return CompilerOptions()
    try:
        data = _read_toml_config(config_path)
    except ValueError as exc:  # tomllib.TOMLDecodeError
        raise CDLConfigError(message=f"Invalid TOML: {exc}", path=str(config_path)) from exc
    return _parse_options(_section(data, config_path), config_path)


def apply_cli_overrides(
    options: CompilerOptions,
    *,
    strict: Optional[bool] = None,
    substitution: Optional[str] = None,
    layout: Optional[str] = None,
    log_level: Optional[str] = None,
) -> CompilerOptions:
    changes: Dict[str, Any] = {}
    if strict is not None:
        changes["strict"] = strict
    if substitution is not None:
        changes["substitution"] = substitution
    if layout is not None:
        changes["layout"] = layout
    if log_level is not None:
        changes["log_level"] = log_level
    return replace(options, **changes) if changes else options


__all__ = [
    "CompilerOptions",
    "SUBSTITUTION_MODES",
    "LAYOUTS",
    "load_config",
    "locate_config_file",
    "apply_cli_overrides",
]
