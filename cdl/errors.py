"""Unified error handling for the CDL compiler.

This module provides structured error types with:
- Line numbers and column positions
- Expected vs. found token information
- Human-readable suggestions
- Error codes for programmatic handling
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CDLError(Exception):
    """Base class for all CDL errors."""

    message: str
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    code: str = "CDL_ERROR"

    def __str__(self) -> str:
        """Format error message with location."""
        parts = []

        if self.path:
            parts.append(f"File: {self.path}")

        if self.line is not None:
            if self.column is not None:
                parts.append(f"Line {self.line}:{self.column}")
            else:
                parts.append(f"Line {self.line}")

        parts.append(f"[{self.code}] {self.message}")

        return " | ".join(parts)

    def format(self) -> str:
        return str(self)


@dataclass
class CDLSyntaxError(CDLError):
    """Syntax error with detailed context."""

    expected: List[str] = field(default_factory=list)
    found: Optional[str] = None
    suggestion: Optional[str] = None
    code: str = "SYNTAX_ERROR"

    def __str__(self) -> str:
        """Format syntax error with expectations and suggestions."""
        base = super().__str__()
        details = []

        if self.expected:
            if len(self.expected) == 1:
                details.append(f"Expected: {self.expected[0]}")
            else:
                details.append(f"Expected one of: {', '.join(self.expected)}")

        if self.found:
            details.append(f"Found: {self.found}")

        if self.suggestion:
            details.append(f"Suggestion: {self.suggestion}")

        if details:
            return base + "\n  " + "\n  ".join(details)

        return base


@dataclass
class CDLMarkupError(CDLError):
    """Markup tree used outside its contract (e.g. attributes on a text node)."""

    code: str = "MARKUP_ERROR"


@dataclass
class CDLConfigError(CDLError):
    """Invalid compiler configuration value."""

    key: Optional[str] = None
    code: str = "CONFIG_ERROR"


@dataclass
class CDLSemanticError(CDLError):
    """Semantic validation error."""

    context: Optional[str] = None
    code: str = "SEMANTIC_ERROR"

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            return f"{base}\n  Context: {self.context}"
        return base


@dataclass
class CDLDuplicateCellError(CDLSemanticError):
    """Two statements (or a statement and a synthetic choice id) share an id."""

    name: Optional[str] = None
    first_line: Optional[int] = None
    code: str = "DUPLICATE_CELL"

    def __str__(self) -> str:
        base = CDLError.__str__(self)
        details = []

        if self.name:
            details.append(f"Duplicate id: {self.name}")

        if self.first_line:
            details.append(f"First declared at line: {self.first_line}")

        if self.context:
            details.append(f"Context: {self.context}")

        if details:
            return base + "\n  " + "\n  ".join(details)

        return base


@dataclass
class CDLReferenceError(CDLSemanticError):
    """A derived cell reads a cell that is not declared before it."""

    name: Optional[str] = None
    available: List[str] = field(default_factory=list)
    code: str = "REFERENCE_ERROR"

    def __str__(self) -> str:
        """Format reference error with available names."""
        base = CDLError.__str__(self)
        details = []

        if self.name:
            details.append(f"Undefined: {self.name}")

        if self.available:
            similar = self._find_similar(self.name, self.available) if self.name else []
            if similar:
                details.append(f"Did you mean: {', '.join(similar[:3])}?")
            else:
                details.append(f"Available names: {', '.join(self.available[:5])}")

        if self.context:
            details.append(f"Context: {self.context}")

        if details:
            return base + "\n  " + "\n  ".join(details)

        return base

    @staticmethod
    def _find_similar(target: str, candidates: List[str], max_distance: int = 2) -> List[str]:
        return find_similar(target, candidates, max_distance=max_distance)


def levenshtein(s1: str, s2: str) -> int:
    if len(s1) < len(s2):
        return levenshtein(s2, s1)
    if len(s2) == 0:
        return len(s1)
    previous_row = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row
    return previous_row[-1]


def find_similar(target: str, candidates: List[str], max_distance: int = 2) -> List[str]:
    """Find similar names using Levenshtein distance."""
    similar = [
        (name, levenshtein(target.lower(), name.lower()))
        for name in candidates
    ]
    similar.sort(key=lambda x: x[1])
    return [name for name, dist in similar if dist <= max_distance]


def create_syntax_error(
    message: str,
    *,
    path: Optional[str] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
    expected: Optional[List[str]] = None,
    found: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> CDLSyntaxError:
    """Create a syntax error with context."""
    return CDLSyntaxError(
        message=message,
        path=path,
        line=line,
        column=column,
        expected=expected or [],
        found=found,
        suggestion=suggestion,
    )


__all__ = [
    "CDLError",
    "CDLSyntaxError",
    "CDLMarkupError",
    "CDLConfigError",
    "CDLSemanticError",
    "CDLDuplicateCellError",
    "CDLReferenceError",
    "create_syntax_error",
    "find_similar",
]
