"""Porcelain status parser — ``git status --porcelain`` text to counts.

Each line starts with two status characters: the index status and the
worktree status, followed by a space and the path::

    M  src/prompt.py
     M src/main.py
    ?? README.md
    UU conflicted.txt

With ``--branch`` the listing opens with a header naming the branch and
its upstream, plus the divergence when there is any::

    ## main...origin/main [ahead 2, behind 1]

See https://git-scm.com/docs/git-status#_short_format
"""

from __future__ import annotations

import re
from collections import Counter

from gitline.git.models import GitStatus

BRANCH_HEADER_PREFIX = "## "
UNTRACKED_CODE = "??"

_AHEAD_RE = re.compile(r"\[[^\]]*\bahead (\d+)")
_BEHIND_RE = re.compile(r"\[[^\]]*\bbehind (\d+)")

# Both sides report the same unmerged state: "both deleted", "both added",
# "both modified". Other equal pairs (MM, ...) are ordinary changes.
CONFLICT_CODES = frozenset({"DD", "AA", "UU"})

# Status letter → GitStatus field
_LETTER_CATEGORY: dict[str, str] = {
    "A": "added",
    "M": "modified",
    "D": "deleted",
    "R": "renamed",
    "C": "added",  # a copy counts as an addition
    "U": "modified",  # unresolved merge marker
    "?": "untracked",
}


def _letter_codes(line: str) -> str:
    """Return the two status characters, padding missing ones with spaces."""
    return line[:2].ljust(2)


def classify(line: str) -> str | None:
    """Return the GitStatus field a porcelain line counts towards, if any."""
    codes = _letter_codes(line)
    if codes == UNTRACKED_CODE:
        return "untracked"
    if codes in CONFLICT_CODES:
        return "conflicted"
    index, worktree = codes
    # The worktree column wins; fall back to the index column when it is blank
    letter = worktree if worktree != " " else index
    return _LETTER_CATEGORY.get(letter)


def parse_branch_header(line: str) -> tuple[int, int]:
    """Return ``(ahead, behind)`` from a ``## local...upstream [...]`` header."""
    ahead = _AHEAD_RE.search(line)
    behind = _BEHIND_RE.search(line)
    return (
        int(ahead.group(1)) if ahead else 0,
        int(behind.group(1)) if behind else 0,
    )


def parse_porcelain(listing: str) -> GitStatus:
    """Parse porcelain status output into a GitStatus.

    Every file line counts towards at most one category. Unknown status
    codes are skipped; git adds new ones across versions. A ``## `` branch
    header is never counted as a file; it supplies ``ahead`` and ``behind``,
    and ``diverged`` is 1 when both are non-zero.
    """
    counts: Counter[str] = Counter()
    for line in listing.splitlines():
        if not line:
            continue
        if line.startswith(BRANCH_HEADER_PREFIX):
            ahead, behind = parse_branch_header(line)
            counts["ahead"] = ahead
            counts["behind"] = behind
            counts["diverged"] = int(ahead > 0 and behind > 0)
            continue
        category = classify(line)
        if category is not None:
            counts[category] += 1
    return GitStatus(**counts)
