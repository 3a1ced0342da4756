"""Git interface layer — process runner, porcelain parsing, repository handle."""

from gitline.git.adapter import exec_cmd
from gitline.git.models import CommandOutput, GitStatus
from gitline.git.porcelain import parse_porcelain
from gitline.git.repository import Repository

__all__ = [
    "CommandOutput",
    "GitStatus",
    "Repository",
    "exec_cmd",
    "parse_porcelain",
]
