"""Format-string evaluation against pluggable variable and style resolvers.

Usage::

    formatter = StringFormatter("[+$count](green)")
    segments = formatter.evaluate(MappingResolver.from_text({"count": "3"}.get))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from gitline.formatter.errors import RecursionLimitError, UnknownVariableError
from gitline.formatter.models import (
    Escape,
    FormatNode,
    MetaVariable,
    Segment,
    StyleGroup,
    Text,
    Variable,
)
from gitline.formatter.parser import parse_format

MAX_META_DEPTH = 8


class VariableResolver(Protocol):
    def resolve_variable(self, name: str) -> Optional[List[Segment]]:
        """Segments for *name*; ``[]`` when absent, ``None`` when unknown."""


class StyleResolver(Protocol):
    def resolve_style(self, key: str) -> Optional[str]:
        """Style token for *key*, or ``None`` to render unstyled."""


class Resolver(VariableResolver, StyleResolver, Protocol):
    pass


class MappingResolver:
    """Resolver built from two plain callables."""

    def __init__(
        self,
        variables: Callable[[str], Optional[List[Segment]]] = lambda name: None,
        styles: Callable[[str], Optional[str]] = lambda key: key or None,
    ) -> None:
        self._variables = variables
        self._styles = styles

    @classmethod
    def from_text(
        cls,
        mapper: Callable[[str], Optional[str]],
        styles: Callable[[str], Optional[str]] = lambda key: key or None,
    ) -> "MappingResolver":
        """Wrap a name → text mapper; each value becomes one unstyled segment."""

        def variables(name: str) -> Optional[List[Segment]]:
            value = mapper(name)
            return None if value is None else [Segment(value)]

        return cls(variables, styles)

    def resolve_variable(self, name: str) -> Optional[List[Segment]]:
        return self._variables(name)

    def resolve_style(self, key: str) -> Optional[str]:
        return self._styles(key)


@dataclass
class _Output:
    segments: List[Segment] = field(default_factory=list)
    referenced: bool = False  # subtree contains a variable
    produced: bool = False  # at least one of those variables rendered

    def extend(self, other: "_Output") -> None:
        self.segments.extend(other.segments)
        self.referenced |= other.referenced
        self.produced |= other.produced


class _Evaluator:
    def __init__(
        self,
        resolver: Resolver,
        meta: Mapping[str, str],
        format_str: str,
    ) -> None:
        self._resolver = resolver
        self._meta = meta
        self._format_str = format_str
        self._expansions: Dict[str, Tuple[FormatNode, ...]] = {}

    def run(self, nodes: Sequence[FormatNode], style: Optional[str], depth: int) -> _Output:
        out = _Output()
        literal: List[str] = []

        def flush() -> None:
            if literal:
                out.segments.append(Segment("".join(literal), style))
                literal.clear()

        for node in nodes:
            if isinstance(node, Text):
                literal.append(node.value)
            elif isinstance(node, Escape):
                literal.append(node.char)
            elif isinstance(node, Variable):
                flush()
                out.extend(self._variable(node, style))
            elif isinstance(node, MetaVariable):
                flush()
                out.extend(self._meta_variable(node, style, depth))
            elif isinstance(node, StyleGroup):
                flush()
                out.extend(self._group(node, depth))
            else:  # pragma: no cover
                raise TypeError(f"unexpected format node: {node!r}")
        flush()
        return out

    def _variable(self, node: Variable, style: Optional[str]) -> _Output:
        segments = self._resolver.resolve_variable(node.name)
        if segments is None:
            raise UnknownVariableError(self._format_str, node.name)
        return _Output(
            segments=[s.with_default_style(style) for s in segments],
            referenced=True,
            produced=bool(segments),
        )

    def _meta_variable(self, node: MetaVariable, style: Optional[str], depth: int) -> _Output:
        if depth >= MAX_META_DEPTH:
            raise RecursionLimitError(self._format_str, node.name, MAX_META_DEPTH)
        nodes = self._expansions.get(node.name)
        if nodes is None:
            nodes = parse_format(self._meta[node.name], self._meta)
            self._expansions[node.name] = nodes
        return self.run(nodes, style, depth + 1)

    def _group(self, node: StyleGroup, depth: int) -> _Output:
        style = self._resolver.resolve_style(node.style_key)
        inner = self.run(node.children, style, depth)
        if inner.referenced and not inner.produced:
            # Every variable in the group is absent: drop its decoration too
            return _Output(referenced=True)
        return inner


def evaluate(
    nodes: Sequence[FormatNode],
    resolver: Resolver,
    *,
    meta: Optional[Mapping[str, str]] = None,
    format_str: str = "",
) -> List[Segment]:
    """Evaluate parsed *nodes* and return the rendered segments.

    Raises UnknownVariableError, RecursionLimitError, or FormatParseError
    (from a malformed meta-variable expansion). Never returns partial output.
    """
    return _Evaluator(resolver, meta or {}, format_str).run(nodes, None, 0).segments


class StringFormatter:
    """A parsed format string, ready to evaluate against a resolver."""

    def __init__(self, format_str: str, meta: Optional[Mapping[str, str]] = None) -> None:
        self.format_str = format_str
        self.meta: Mapping[str, str] = dict(meta or {})
        self.nodes = parse_format(format_str, self.meta)

    def __repr__(self) -> str:
        return f"StringFormatter({self.format_str!r})"

    def evaluate(self, resolver: Resolver) -> List[Segment]:
        return evaluate(self.nodes, resolver, meta=self.meta, format_str=self.format_str)
