"""Repository handle — discovery plus lazily memoised branch, hash and status."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from gitline.git.adapter import Runner, exec_cmd
from gitline.git.models import GitStatus
from gitline.git.once import OnceCell
from gitline.git.porcelain import parse_porcelain

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
DETACHED_BRANCH = "HEAD"
STASH_REF = "refs/stash"
_GITDIR_PREFIX = "gitdir:"


def _resolve_git_dir(candidate: Path) -> Optional[Path]:
    """Return the metadata directory behind *candidate*.

    Worktrees and submodules replace the ``.git`` directory with a file
    holding ``gitdir: <path>``, relative to the directory containing it.
    """
    if candidate.is_dir():
        return candidate
    try:
        contents = candidate.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    if not contents.startswith(_GITDIR_PREFIX):
        return None
    target = Path(contents[len(_GITDIR_PREFIX):].strip())
    if not target.is_absolute():
        target = candidate.parent / target
    return target


class Repository:
    """A point-in-time handle on one git working tree.

    ``branch``, ``hash`` and ``status`` are computed on first access and
    cached for the lifetime of the handle.
    """

    def __init__(self, git_dir: Path, root_dir: Path, runner: Runner = exec_cmd) -> None:
        self.git_dir = git_dir
        self.root_dir = root_dir
        self._runner = runner
        self._branch: OnceCell[str] = OnceCell()
        self._hash: OnceCell[Optional[str]] = OnceCell()
        self._status: OnceCell[GitStatus] = OnceCell()

    def __repr__(self) -> str:
        return f"Repository(git_dir={self.git_dir!r}, root_dir={self.root_dir!r})"

    # ---- discovery ----

    @classmethod
    def discover(cls, start_path: Path, runner: Runner = exec_cmd) -> Optional["Repository"]:
        """Walk up from *start_path* and return the first enclosing repository."""
        start_path = Path(start_path).absolute()
        for path in (start_path, *start_path.parents):
            logger.debug("Checking for git instance: %s", path)
            repository = cls._scan(path, runner)
            if repository is not None:
                return repository
        return None

    @classmethod
    def _scan(cls, path: Path, runner: Runner) -> Optional["Repository"]:
        candidate = path / GIT_DIR_NAME
        if not candidate.exists():
            return None
        git_dir = _resolve_git_dir(candidate)
        if git_dir is None:
            logger.debug("Ignoring unreadable %s", candidate)
            return None
        logger.debug("Git repository found at %s", path)
        return cls(git_dir=git_dir, root_dir=path, runner=runner)

    # ---- branch ----

    @property
    def branch(self) -> str:
        return self._branch.get_or_init(self._branch_or_detached)

    def _branch_or_detached(self) -> str:
        branch = self._read_branch()
        return DETACHED_BRANCH if branch is None else branch

    def _read_branch(self) -> Optional[str]:
        head_file = self.git_dir / "HEAD"
        try:
            contents = head_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Unable to read %s: %s", head_file, exc)
            return None
        slash = contents.rfind("/")
        if slash == -1:
            return None
        return contents[slash + 1:].rstrip()

    # ---- hash ----

    @property
    def hash(self) -> Optional[str]:
        return self._hash.get_or_init(self._read_hash)

    def _read_hash(self) -> Optional[str]:
        output = self._git("rev-parse", "HEAD")
        if output is None:
            return None
        return output.strip() or None

    # ---- status ----

    @property
    def status(self) -> GitStatus:
        return self._status.get_or_init(self._read_status)

    def _read_status(self) -> GitStatus:
        output = self._git(
            "--work-tree", str(self.root_dir), "status", "--porcelain", "--branch"
        )
        if output is None:
            return GitStatus()
        return replace(parse_porcelain(output), stashed=self._read_stash_count())

    def _read_stash_count(self) -> int:
        # Exits non-zero when refs/stash does not exist
        output = self._git("rev-list", "--walk-reflogs", "--count", STASH_REF)
        if output is None:
            return 0
        try:
            return int(output.strip())
        except ValueError:
            logger.debug("Unexpected stash count output: %r", output)
            return 0

    def _git(self, *args: str) -> Optional[str]:
        """Run git against this handle's metadata directory; None on failure."""
        result = self._runner("git", ["--git-dir", str(self.git_dir), *args])
        if result is None or not result.ok:
            return None
        return result.stdout
