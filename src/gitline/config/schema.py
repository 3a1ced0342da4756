"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_FORMAT = r"[\[$all_status\] ]($style)"


@dataclass
class GitStatusConfig:
    format: str = DEFAULT_FORMAT
    style: str = "red bold"
    conflicted: str = "="
    ahead: str = "⇡"
    behind: str = "⇣"
    diverged: str = "⇕"
    untracked: str = "?"
    stashed: str = r"\$"
    modified: str = "!"
    staged: str = "+"
    added: str = "+"
    renamed: str = "»"
    deleted: str = "✘"
    unmerged: Optional[str] = None  # not part of $all_status
    disabled: bool = False


@dataclass
class OutputConfig:
    plain: bool = False  # print text without colour
    trailing_newline: bool = False


@dataclass
class GitlineConfig:
    version: str = "1.0"
    git_status: GitStatusConfig = field(default_factory=GitStatusConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
