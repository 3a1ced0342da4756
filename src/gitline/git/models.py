"""Data models for repository probing."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured result of an external command."""

    stdout: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class GitStatus:
    """Categorised file counts for one working tree.

    Every field is independently derived from ``git status --porcelain``.
    The all-zero default stands for "no repository" or "git failed".
    """

    untracked: int = 0
    added: int = 0
    modified: int = 0
    renamed: int = 0
    deleted: int = 0
    stashed: int = 0
    unmerged: int = 0
    ahead: int = 0
    behind: int = 0
    diverged: int = 0
    conflicted: int = 0
    staged: int = 0

    @property
    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))

    @property
    def is_clean(self) -> bool:
        return self.total == 0

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
