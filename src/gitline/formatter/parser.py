"""Format-string parser.

Grammar::

    format    := (text | escape | variable | group)*
    variable  := "$" [A-Za-z0-9_]+
    group     := "[" format "]" "(" style_key ")"
    escape    := "\\" ( "$" | "[" | "]" | "(" | ")" | "\\" )

Bare ``(`` and ``)`` are reserved and must be escaped in text.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from gitline.formatter.errors import FormatParseError
from gitline.formatter.models import (
    Escape,
    FormatNode,
    MetaVariable,
    StyleGroup,
    Text,
    Variable,
)

ESCAPABLE = frozenset("$[]()\\")

_VARIABLE_NAME_RE = re.compile(r"[A-Za-z0-9_]+")


class _Parser:
    def __init__(self, format_str: str, meta_names: Iterable[str]) -> None:
        self._src = format_str
        self._meta = frozenset(meta_names)
        self._pos = 0

    def parse(self) -> Tuple[FormatNode, ...]:
        return tuple(self._sequence(in_group=False))

    def _error(self, message: str, position: int) -> FormatParseError:
        return FormatParseError(self._src, message, position)

    def _sequence(self, in_group: bool) -> List[FormatNode]:
        nodes: List[FormatNode] = []
        text: List[str] = []

        def flush() -> None:
            if text:
                nodes.append(Text("".join(text)))
                text.clear()

        src = self._src
        while self._pos < len(src):
            ch = src[self._pos]

            if ch == "\\":
                nxt = src[self._pos + 1] if self._pos + 1 < len(src) else ""
                if nxt not in ESCAPABLE:
                    raise self._error("invalid escape sequence", self._pos)
                flush()
                nodes.append(Escape(nxt))
                self._pos += 2

            elif ch == "$":
                m = _VARIABLE_NAME_RE.match(src, self._pos + 1)
                if not m:
                    raise self._error("expected a variable name after `$`", self._pos)
                flush()
                name = m.group(0)
                nodes.append(MetaVariable(name) if name in self._meta else Variable(name))
                self._pos = m.end()

            elif ch == "[":
                flush()
                nodes.append(self._group())

            elif ch == "]":
                if not in_group:
                    raise self._error("unmatched `]`", self._pos)
                flush()
                self._pos += 1
                return nodes

            elif ch in "()":
                raise self._error(f"unexpected `{ch}`", self._pos)

            else:
                text.append(ch)
                self._pos += 1

        if in_group:
            raise self._error("unclosed `[`", len(src))
        flush()
        return nodes

    def _group(self) -> StyleGroup:
        open_pos = self._pos
        self._pos += 1  # '['
        try:
            children = self._sequence(in_group=True)
        except FormatParseError as exc:
            if exc.reason.startswith("unclosed `[`"):
                raise self._error("unclosed `[`", open_pos) from None
            raise

        if self._pos >= len(self._src) or self._src[self._pos] != "(":
            raise self._error("expected `(style)` after `]`", self._pos)
        close = self._src.find(")", self._pos + 1)
        if close == -1:
            raise self._error("unclosed `(`", self._pos)
        style_key = self._src[self._pos + 1:close].strip()
        self._pos = close + 1
        return StyleGroup(children=tuple(children), style_key=style_key)


def parse_format(format_str: str, meta_names: Iterable[str] = ()) -> Tuple[FormatNode, ...]:
    """Parse *format_str* into a tuple of nodes.

    Names listed in *meta_names* become MetaVariable nodes.
    Raises FormatParseError on any syntax error.
    """
    return _Parser(format_str, meta_names).parse()
