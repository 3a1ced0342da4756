"""Format-string engine — ``$variables``, ``[groups](style)`` and escapes."""

from gitline.formatter.errors import (
    FormatError,
    FormatParseError,
    RecursionLimitError,
    UnknownVariableError,
)
from gitline.formatter.models import Segment
from gitline.formatter.parser import parse_format
from gitline.formatter.string_formatter import (
    MAX_META_DEPTH,
    MappingResolver,
    Resolver,
    StringFormatter,
    evaluate,
)

__all__ = [
    "MAX_META_DEPTH",
    "FormatError",
    "FormatParseError",
    "MappingResolver",
    "RecursionLimitError",
    "Resolver",
    "Segment",
    "StringFormatter",
    "UnknownVariableError",
    "evaluate",
    "parse_format",
]
