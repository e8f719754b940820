"""Rewrite derived-cell bodies so free variables read live element values."""

from __future__ import annotations

import json
import re
from typing import Callable, Dict, Sequence

from cdl.errors import CDLConfigError


def js_string(value: str) -> str:
    """Quote ``value`` as a script string literal that is safe inside ``<script>``."""
    return json.dumps(value).replace("</", "<\\/")


def element_lookup(element_id: str) -> str:
    return f"document.getElementById({js_string(element_id)})"


def value_read(cell_name: str) -> str:
    return f"{element_lookup(cell_name)}.value"


# String and template literals are matched first so names inside them are left alone.
_STRING_LITERAL = r'"(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\''
_TEMPLATE_LITERAL = r'`(?:\\.|\$\{[^}]*\}|[^`\\])*`'
_PLACEHOLDER = re.compile(r"\$\{([^}]*)\}")


def _is_property_access(body: str, start: int) -> bool:
    """True when the name at ``start`` follows a single ``.`` (not a spread)."""
    return body[start - 1 : start] == "." and body[max(start - 3, 0) : start] != "..."


def substitute_tokens(body: str, inputs: Sequence[str]) -> str:
    """Replace whole-identifier occurrences of each input in a single pass.

    An occurrence preceded by a single ``.`` is a property access and is kept;
    ``...name`` is a spread and is replaced. Inside template literals only the
    ``${...}`` placeholders are rewritten. The inserted text is never rescanned.
    """
    if not inputs:
        return body
    names = "|".join(re.escape(name) for name in sorted(inputs, key=len, reverse=True))
    pattern = re.compile(rf"({_STRING_LITERAL})|({_TEMPLATE_LITERAL})|(?<![\w$])({names})(?![\w$])")

    def _placeholder(match: "re.Match[str]") -> str:
        return "${" + substitute_tokens(match.group(1), inputs) + "}"

    def _replace(match: "re.Match[str]") -> str:
        if match.group(1) is not None:
            return match.group(1)
        if match.group(2) is not None:
            return _PLACEHOLDER.sub(_placeholder, match.group(2))
        if _is_property_access(match.string, match.start(3)):
            return match.group(3)
        return value_read(match.group(3))

    return pattern.sub(_replace, body)


def substitute_text(body: str, inputs: Sequence[str]) -> str:
    """Replace every substring occurrence of each input, one input at a time."""
    for name in inputs:
        body = body.replace(name, value_read(name))
    return body


SUBSTITUTIONS: Dict[str, Callable[[str, Sequence[str]], str]] = {
    "token": substitute_tokens,
    "text": substitute_text,
}


def substitute(body: str, inputs: Sequence[str], mode: str = "token") -> str:
    try:
        strategy = SUBSTITUTIONS[mode]
    except KeyError:
        raise CDLConfigError(message=f"Unknown substitution mode {mode!r}", key="substitution") from None
    return strategy(body, inputs)


__all__ = [
    "SUBSTITUTIONS",
    "element_lookup",
    "js_string",
    "substitute",
    "substitute_text",
    "substitute_tokens",
    "value_read",
]
