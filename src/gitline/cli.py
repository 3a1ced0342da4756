"""gitline CLI — Typer application with prompt, info, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitline import __version__

app = typer.Typer(
    name="gitline",
    help="Git status segments for your shell prompt.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


def _load_config(config: Optional[str]):
    """Load config, exit 2 on failure."""
    from gitline.config.loader import ConfigError, load_config

    try:
        return load_config(config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── prompt ────────────────────────────────────────────────────────────────────


@app.command()
def prompt(
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Directory to inspect (default: cwd)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to gitline.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Override the git_status format string"),
    plain: bool = typer.Option(False, "--plain", help="Print without colour"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging on stderr"),
) -> None:
    """Print the git status segments for the current directory."""
    from gitline.git.repository import Repository
    from gitline.modules import git_status
    from gitline.output import terminal

    _setup_logging(debug)
    cfg = _load_config(config)
    if format is not None:
        cfg.git_status.format = format

    repo = Repository.discover(path or Path.cwd())
    segments = git_status.render(repo, cfg.git_status)
    if segments is None:
        raise typer.Exit(code=0)

    terminal.render(
        segments,
        plain=plain or cfg.output.plain,
        trailing_newline=cfg.output.trailing_newline,
    )


# ── info ──────────────────────────────────────────────────────────────────────


@app.command()
def info(
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Directory to inspect (default: cwd)"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging on stderr"),
) -> None:
    """Show the repository root, branch, hash, and status counts."""
    from gitline.git.repository import Repository
    from gitline.output import terminal

    _setup_logging(debug)
    repo = Repository.discover(path or Path.cwd())
    if repo is None:
        console.print("[dim]Not inside a git repository.[/dim]")
        raise typer.Exit(code=1)

    terminal.render_info(repo, console=Console())


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Where to write (default: ~/.config/gitline.toml)"),
) -> None:
    """Generate a starter gitline.toml."""
    from gitline.config.defaults import DEFAULT_TOML
    from gitline.config.loader import default_config_path

    config_path = Path(config) if config else default_config_path()

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {config_path} already exists (use --force to overwrite)")
        raise typer.Exit(code=1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitline {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """gitline — git status segments for your shell prompt."""
