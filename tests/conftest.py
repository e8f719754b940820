"""Shared pytest fixtures and helpers for the CDL test suite."""

from html.parser import HTMLParser
from typing import Dict, List, Tuple

import pytest

from cdl import CompilerOptions, compile_source
from cdl.markup import Element


class _StartTagCollector(HTMLParser):
    """Collects (tag, attributes) for every start tag in document order."""

    def __init__(self) -> None:
        super().__init__()
        self.tags: List[Tuple[str, Dict[str, str]]] = []

    def handle_starttag(self, tag, attrs):
        self.tags.append((tag, dict(attrs)))


def start_tags(markup: str) -> List[Tuple[str, Dict[str, str]]]:
    collector = _StartTagCollector()
    collector.feed(markup)
    collector.close()
    return collector.tags


@pytest.fixture
def parse_html():
    """Parse serialized markup back into (tag, attributes) pairs."""
    return start_tags


@pytest.fixture
def compile_cdl():
    """Compile CDL source with keyword options forwarded to CompilerOptions."""

    def _compile(source: str, **options):
        return compile_source(source, options=CompilerOptions(**options))

    return _compile


def script_bodies(tree) -> List[str]:
    return [
        node.children[0].content
        for node in tree
        if isinstance(node, Element) and node.tag == "script"
    ]


@pytest.fixture
def scripts():
    """Return the text of every top-level script element of a tree."""
    return script_bodies
