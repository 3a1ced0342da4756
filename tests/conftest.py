"""Shared test fixtures — fake .git trees, stub command runners, temp git repos."""

from __future__ import annotations

import subprocess
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from gitline.git.models import CommandOutput


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.config/gitline.toml and GITLINE_* out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for var in ("GITLINE_CONFIG", "GITLINE_FORMAT", "GITLINE_STYLE", "GITLINE_DISABLED"):
        monkeypatch.delenv(var, raising=False)
    return home


class CountingRunner:
    """Stand-in for exec_cmd that records calls and replays canned output."""

    def __init__(
        self,
        status: Optional[CommandOutput] = None,
        rev_parse: Optional[CommandOutput] = None,
        stash: Optional[CommandOutput] = None,
        delay: float = 0.0,
    ) -> None:
        self.status = status
        self.rev_parse = rev_parse
        self.stash = stash
        self.delay = delay
        self.calls: List[Tuple[str, List[str]]] = []
        self._lock = threading.Lock()

    def __call__(self, program: str, args: Sequence[str]) -> Optional[CommandOutput]:
        with self._lock:
            self.calls.append((program, list(args)))
        if self.delay:
            time.sleep(self.delay)
        if "status" in args:
            return self.status
        if "rev-parse" in args:
            return self.rev_parse
        if "rev-list" in args:
            return self.stash
        return None

    def count(self, subcommand: str) -> int:
        return sum(1 for _, args in self.calls if subcommand in args)


@pytest.fixture
def counting_runner() -> Callable[..., CountingRunner]:
    return CountingRunner


@pytest.fixture
def make_git_dir() -> Callable[..., Path]:
    """Create ``<root>/.git`` with a HEAD file and return the .git path."""

    def _make(root: Path, head: Optional[str] = "ref: refs/heads/main\n") -> Path:
        git_dir = root / ".git"
        git_dir.mkdir(parents=True)
        if head is not None:
            (git_dir / "HEAD").write_text(head)
        return git_dir

    return _make


@pytest.fixture
def sample_porcelain() -> str:
    """Porcelain output covering every category the parser knows."""
    return (
        " M src/main.py\n"
        "M  src/prompt.py\n"
        "A  src/new.py\n"
        " D old.py\n"
        "R  before.py -> after.py\n"
        "C  copy.py\n"
        "UU merge.py\n"
        "?? notes.txt\n"
        "!! build/\n"
    )


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", str(repo)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=repo, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=repo, capture_output=True, check=True,
    )
    # Initial commit
    readme = repo / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=repo, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init", "--no-gpg-sign"],
        cwd=repo, capture_output=True, check=True,
    )
    return repo


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


def _commit_file(repo: Path, name: str, content: str) -> None:
    (repo / name).write_text(content)
    _git(repo, "add", name)
    _git(repo, "commit", "-m", f"update {name}", "--no-gpg-sign")


@pytest.fixture
def run_git() -> Callable[..., None]:
    """Run a git command in a repository, failing the test on a non-zero exit."""
    return _git


@pytest.fixture
def commit_file() -> Callable[[Path, str, str], None]:
    """Write a file and commit it."""
    return _commit_file


@pytest.fixture
def tmp_git_clone(tmp_git_repo: Path, tmp_path: Path) -> Path:
    """Clone ``tmp_git_repo`` so the clone's branch tracks ``origin``."""
    clone = tmp_path / "clone"
    subprocess.run(
        ["git", "clone", str(tmp_git_repo), str(clone)],
        capture_output=True, check=True,
    )
    _git(clone, "config", "user.email", "test@test.com")
    _git(clone, "config", "user.name", "Test")
    return clone
