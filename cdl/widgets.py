"""Widget kinds and their rendering table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class WidgetSpec:
    """How a widget kind renders: element tag, baseline attributes and DOM accessor."""

    tag: str
    attributes: Tuple[Tuple[str, str], ...]
    accessor: str


class WidgetKind(Enum):
    """Widget kinds a cell can be rendered as."""

    TEXT_INPUT = "text-input"
    TEXT_AREA = "text-area"
    PARAGRAPH = "paragraph"
    RADIO = "radio"

    def __str__(self) -> str:
        return self.value

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def spec(self) -> WidgetSpec:
        return _WIDGET_TABLE[self]

    @property
    def tag(self) -> str:
        return self.spec.tag

    @property
    def accessor(self) -> str:
        return self.spec.accessor

    def attributes(self) -> List[Tuple[str, str]]:
        """Baseline attributes, as a fresh list the caller may extend."""
        return list(self.spec.attributes)

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["WidgetKind"]:
        return _KEYWORDS.get(keyword)

    @classmethod
    def keywords(cls) -> List[str]:
        return [kind.value for kind in cls]


_WIDGET_TABLE: Dict[WidgetKind, WidgetSpec] = {
    WidgetKind.TEXT_INPUT: WidgetSpec("input", (("type", "text"),), "value"),
    WidgetKind.TEXT_AREA: WidgetSpec("textarea", (), "value"),
    WidgetKind.PARAGRAPH: WidgetSpec("p", (), "innerHTML"),
    WidgetKind.RADIO: WidgetSpec("input", (("type", "radio"),), "checked"),
}

_KEYWORDS: Dict[str, WidgetKind] = {kind.value: kind for kind in WidgetKind}


__all__ = ["WidgetKind", "WidgetSpec"]
