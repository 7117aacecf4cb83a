"""Text template data model (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from src.models.style import validate_style_value


@dataclass(frozen=True)
class TextTemplate:
    """A named, immutable style bundle applied to text overlays by field merge."""

    template_id: str
    name: str
    category: str  # "titles", "captions", "quotes", "lower-thirds", "arabic", "effects"
    style: Mapping[str, Any]

    def __post_init__(self) -> None:
        for key, value in self.style.items():
            validate_style_value(key, value)
        object.__setattr__(self, "style", MappingProxyType(dict(self.style)))

    @classmethod
    def from_dict(cls, data: dict) -> TextTemplate:
        return cls(
            template_id=data["template_id"],
            name=data.get("name", data["template_id"]),
            category=data.get("category", "titles"),
            style=data.get("style", {}),
        )
