"""Format-string errors. Every error names the format string it came from."""

from __future__ import annotations

from typing import Optional


class FormatError(Exception):
    """Base class for anything that stops a format string from rendering."""

    def __init__(self, format_str: str, message: str) -> None:
        self.format_str = format_str
        self.reason = message
        super().__init__(f"Error in format string `{format_str}`: {message}")


class FormatParseError(FormatError):
    """Malformed syntax: unbalanced groups, bad escapes, dangling ``$``."""

    def __init__(self, format_str: str, message: str, position: Optional[int] = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(format_str, message)


class UnknownVariableError(FormatError):
    """A ``$name`` the resolver does not know about."""

    def __init__(self, format_str: str, name: str) -> None:
        self.name = name
        super().__init__(format_str, f"unknown variable `${name}`")


class RecursionLimitError(FormatError):
    """Meta-variable expansion nested deeper than the allowed limit."""

    def __init__(self, format_str: str, name: str, limit: int) -> None:
        self.name = name
        self.limit = limit
        super().__init__(
            format_str,
            f"meta-variable `${name}` exceeds the expansion limit of {limit}",
        )
