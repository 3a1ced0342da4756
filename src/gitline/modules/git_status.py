"""git_status module — turns repository counts into prompt segments.

By default the following symbols represent the working tree status:

  - ``=`` this branch has merge conflicts
  - ``⇡`` ahead of the tracked branch
  - ``⇣`` behind the tracked branch
  - ``⇕`` diverged from the tracked branch
  - ``?`` untracked files in the working directory
  - ``$`` a stash exists for the local repository
  - ``!`` file modifications in the working directory
  - ``+`` a file has been staged, or a new file added to the index
  - ``»`` a renamed file has been added to the staging area
  - ``✘`` a file's deletion has been added to the staging area

A category with a zero count renders nothing at all, so a clean tree
renders no segments and the module is hidden. When the branch has diverged
only ``⇕`` is shown; ``⇡`` and ``⇣`` stay hidden.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from gitline.config.schema import GitStatusConfig
from gitline.formatter import FormatError, MappingResolver, Segment, StringFormatter
from gitline.git.models import GitStatus
from gitline.git.repository import Repository

logger = logging.getLogger(__name__)

MODULE_NAME = "git_status"

ALL_STATUS_FORMAT = (
    "$conflicted$stashed$deleted$renamed$modified$staged$added$untracked$ahead$behind$diverged"
)

META_VARIABLES: Dict[str, str] = {"all_status": ALL_STATUS_FORMAT}


def format_count(
    format_str: Optional[str],
    config_path: str,
    count: int,
    **extra: int,
) -> List[Segment]:
    """Render a per-category template with ``$count`` bound.

    Zero counts and unconfigured templates render nothing. A broken
    template is logged and treated as empty.
    """
    if count == 0 or not format_str:
        return []

    values = {"count": str(count), **{k: str(v) for k, v in extra.items()}}
    try:
        return StringFormatter(format_str).evaluate(MappingResolver.from_text(values.get))
    except FormatError as exc:
        logger.warning("Error parsing format string `%s`: %s", config_path, exc)
        return []


def _category_variables(
    config: GitStatusConfig,
    status: GitStatus,
) -> Dict[str, Callable[[], List[Segment]]]:
    def category(name: str, hidden: bool = False, **extra: int) -> Callable[[], List[Segment]]:
        return lambda: format_count(
            getattr(config, name),
            f"{MODULE_NAME}.{name}",
            0 if hidden else getattr(status, name),
            **extra,
        )

    # A diverged branch shows only the diverged symbol
    diverged = status.diverged > 0

    return {
        "conflicted": category("conflicted"),
        "stashed": category("stashed"),
        "deleted": category("deleted"),
        "renamed": category("renamed"),
        "modified": category("modified"),
        "staged": category("staged"),
        "added": category("added"),
        "untracked": category("untracked"),
        "unmerged": category("unmerged"),
        "ahead": category("ahead", hidden=diverged),
        "behind": category("behind", hidden=diverged),
        "diverged": category(
            "diverged", ahead_count=status.ahead, behind_count=status.behind
        ),
    }


def render_status(status: GitStatus, config: GitStatusConfig) -> List[Segment]:
    """Evaluate the master format for *status*.

    Raises FormatError if the master format is broken.
    """
    variables = _category_variables(config, status)

    def resolve_variable(name: str) -> Optional[List[Segment]]:
        producer = variables.get(name)
        return producer() if producer is not None else None

    def resolve_style(key: str) -> Optional[str]:
        if key == "$style":
            return config.style
        return key or None

    formatter = StringFormatter(config.format, meta=META_VARIABLES)
    return formatter.evaluate(MappingResolver(resolve_variable, resolve_style))


def render(repo: Optional[Repository], config: GitStatusConfig) -> Optional[List[Segment]]:
    """Return the module's segments, or None when there is nothing to display."""
    if repo is None or config.disabled:
        return None

    try:
        segments = render_status(repo.status, config)
    except FormatError as exc:
        logger.warning("Error in module `%s`:\n%s", MODULE_NAME, exc)
        return None

    return segments or None
