"""Rich terminal output — segments to styled text, plus the repository info table."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.table import Table
from rich.text import Text

from gitline.formatter import Segment
from gitline.git.repository import Repository

logger = logging.getLogger(__name__)


def _resolve_style(token: Optional[str]) -> Optional[Style]:
    if not token:
        return None
    try:
        return Style.parse(token)
    except StyleSyntaxError:
        logger.debug("Unknown style `%s`, rendering unstyled", token)
        return None


def to_text(segments: Iterable[Segment]) -> Text:
    """Join segments into one rich Text, resolving each style token."""
    text = Text()
    for segment in segments:
        text.append(segment.text, style=_resolve_style(segment.style))
    return text


def render(
    segments: Iterable[Segment],
    *,
    plain: bool = False,
    trailing_newline: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print segments to stdout for embedding in a prompt."""
    # Colour even when stdout is a pipe
    console = console or Console(highlight=False, soft_wrap=True, force_terminal=not plain)
    text = to_text(segments)
    end = "\n" if trailing_newline else ""
    if plain:
        console.out(text.plain, end=end, highlight=False)
    else:
        console.print(text, end=end, soft_wrap=True)


def render_info(repo: Repository, *, console: Optional[Console] = None) -> None:
    """Print what is known about the repository."""
    console = console or Console()

    table = Table(title="gitline", show_header=False, title_style="bold", border_style="dim")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Root", str(repo.root_dir))
    table.add_row("Git dir", str(repo.git_dir))
    table.add_row("Branch", Text(repo.branch))
    table.add_row("Hash", repo.hash or "[dim]-[/dim]")

    status = repo.status
    if status.is_clean:
        table.add_row("Status", "[green]clean[/green]")
    else:
        for name, count in status.as_dict().items():
            if count:
                table.add_row(name, f"[yellow]{count}[/yellow]")

    console.print(table)
