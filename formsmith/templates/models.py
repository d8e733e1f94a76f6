"""Data models for parsed field formats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class FormatSegment:
    """A literal span or a ``{token}`` placeholder of a format string."""

    kind: Literal["literal", "token"]
    text: str
    name: str | None = None


@dataclass(frozen=True)
class InlineAttribute:
    """A quoted ``name="value"`` pair found on the opening tag of a format."""

    name: str
    value: str
    capture: str
    start: int
    end: int


@dataclass(frozen=True)
class ParsedFormat:
    """Structural view of a format string, computed once and reused per render."""

    text: str
    tag: str | None = None
    segments: tuple[FormatSegment, ...] = field(default_factory=tuple)
    tokens: tuple[str, ...] = field(default_factory=tuple)
    inline_attributes: tuple[InlineAttribute, ...] = field(default_factory=tuple)

    def inline_attribute(self, name: str) -> InlineAttribute | None:
        """Return the last inline attribute with the given name, if any."""

        found: InlineAttribute | None = None
        for attribute in self.inline_attributes:
            if attribute.name == name:
                found = attribute
        return found
