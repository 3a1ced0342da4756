"""Format-string AST nodes and the rendered Segment type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class Segment:
    """One unit of rendered output. ``style`` is an opaque token."""

    text: str
    style: Optional[str] = None

    def with_default_style(self, style: Optional[str]) -> "Segment":
        if self.style is not None or style is None:
            return self
        return Segment(self.text, style)


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Escape:
    char: str


@dataclass(frozen=True, slots=True)
class Variable:
    name: str


@dataclass(frozen=True, slots=True)
class MetaVariable:
    """A ``$name`` that expands to another format string."""

    name: str


@dataclass(frozen=True, slots=True)
class StyleGroup:
    """``[children](style_key)``"""

    children: Tuple["FormatNode", ...]
    style_key: str


FormatNode = Union[Text, Escape, Variable, MetaVariable, StyleGroup]
