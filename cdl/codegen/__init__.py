"""Code generation: CDL AST to markup with reactive glue."""

from .compiler import ReactiveCompiler, choice_id, compile_document, listener
from .substitution import js_string, substitute, value_read

__all__ = [
    "ReactiveCompiler",
    "choice_id",
    "compile_document",
    "js_string",
    "listener",
    "substitute",
    "value_read",
]
