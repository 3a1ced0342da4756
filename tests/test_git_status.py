"""Tests for the git_status module — counts to segments."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import pytest

from gitline.config.schema import GitStatusConfig
from gitline.formatter import Segment
from gitline.git.models import CommandOutput, GitStatus
from gitline.git.repository import Repository
from gitline.modules.git_status import ALL_STATUS_FORMAT, format_count, render, render_status


def text_of(segments) -> str:
    return "".join(s.text for s in segments)


@pytest.fixture
def repo_with_status(tmp_path: Path, make_git_dir, counting_runner):
    def _make(porcelain: str) -> Repository:
        make_git_dir(tmp_path)
        runner = counting_runner(status=CommandOutput(porcelain, 0))
        return Repository.discover(tmp_path, runner=runner)

    return _make


class TestFormatCount:
    def test_zero_count_renders_nothing(self):
        assert format_count("+$count", "git_status.staged", 0) == []

    def test_count_bound(self):
        assert text_of(format_count("+$count", "git_status.staged", 3)) == "+3"

    def test_symbol_without_count(self):
        assert format_count("!", "git_status.modified", 5) == [Segment("!")]

    def test_unconfigured_template(self):
        assert format_count(None, "git_status.unmerged", 2) == []

    def test_extra_variables(self):
        segments = format_count(
            "⇕⇡$ahead_count⇣$behind_count", "git_status.diverged", 1,
            ahead_count=1, behind_count=2,
        )
        assert text_of(segments) == "⇕⇡1⇣2"

    def test_broken_template_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gitline.modules.git_status"):
            assert format_count("[$count", "git_status.staged", 1) == []
        assert "git_status.staged" in caplog.text


class TestRenderStatus:
    def test_all_zero_is_empty(self):
        config = GitStatusConfig(format="$all_status")
        assert render_status(GitStatus(), config) == []

    def test_default_format_clean_tree(self):
        assert render_status(GitStatus(), GitStatusConfig()) == []

    def test_default_format(self):
        segments = render_status(GitStatus(modified=1, untracked=2), GitStatusConfig())
        assert segments == [
            Segment("[", "red bold"),
            Segment("!", "red bold"),
            Segment("?", "red bold"),
            Segment("] ", "red bold"),
        ]

    def test_all_status_order(self):
        status = GitStatus(
            conflicted=1, stashed=1, deleted=1, renamed=1, modified=1,
            staged=1, added=1, untracked=1, ahead=1, behind=1, diverged=1,
        )
        segments = render_status(status, GitStatusConfig(format="$all_status"))
        assert text_of(segments) == "=$✘»!++?⇕"

    def test_all_status_names_every_category(self):
        for name in ("conflicted", "stashed", "deleted", "renamed", "modified",
                     "staged", "added", "untracked", "ahead", "behind", "diverged"):
            assert f"${name}" in ALL_STATUS_FORMAT

    def test_nested_style_in_category(self):
        config = GitStatusConfig(staged="+[$count](green)")
        segments = render_status(GitStatus(staged=1), config)
        assert segments == [
            Segment("[", "red bold"),
            Segment("+", "red bold"),
            Segment("1", "green"),
            Segment("] ", "red bold"),
        ]

    def test_behind_uses_behind_count(self):
        config = GitStatusConfig(format="$behind", behind="⇣$count")
        assert text_of(render_status(GitStatus(ahead=5, behind=2), config)) == "⇣2"

    def test_ahead_and_behind_without_divergence(self):
        config = GitStatusConfig(format="$all_status")
        assert text_of(render_status(GitStatus(ahead=2), config)) == "⇡"
        assert text_of(render_status(GitStatus(behind=3), config)) == "⇣"

    def test_diverged_hides_ahead_and_behind(self):
        config = GitStatusConfig(format="$all_status", ahead="⇡$count", behind="⇣$count")
        status = GitStatus(ahead=1, behind=2, diverged=1)
        assert text_of(render_status(status, config)) == "⇕"

    def test_diverged_counts(self):
        config = GitStatusConfig(format="$diverged", diverged="⇕⇡$ahead_count⇣$behind_count")
        status = GitStatus(diverged=1, ahead=1, behind=1)
        assert text_of(render_status(status, config)) == "⇕⇡1⇣1"

    def test_unmerged_when_configured(self):
        status = GitStatus(unmerged=2)
        assert render_status(status, GitStatusConfig(format="$unmerged")) == []
        config = GitStatusConfig(format="$unmerged", unmerged="u$count")
        assert text_of(render_status(status, config)) == "u2"

    def test_literal_style_key(self):
        config = GitStatusConfig(format="[$modified](blue)")
        assert render_status(GitStatus(modified=1), config) == [Segment("!", "blue")]


class TestRender:
    def test_no_repository(self):
        assert render(None, GitStatusConfig()) is None

    def test_clean_tree_renders_nothing(self, repo_with_status):
        assert render(repo_with_status(""), GitStatusConfig()) is None

    def test_dirty_tree(self, repo_with_status):
        segments = render(repo_with_status(" M a\n?? b\n"), GitStatusConfig())
        assert text_of(segments) == "[!?] "

    def test_disabled(self, repo_with_status):
        config = GitStatusConfig(disabled=True)
        assert render(repo_with_status(" M a\n"), config) is None

    def test_broken_format_logged(self, repo_with_status, caplog):
        config = replace(GitStatusConfig(), format="[$all_status")
        with caplog.at_level(logging.WARNING, logger="gitline.modules.git_status"):
            assert render(repo_with_status(" M a\n"), config) is None
        assert "[$all_status" in caplog.text

    def test_unknown_variable_logged(self, repo_with_status, caplog):
        config = GitStatusConfig(format="$nonsense")
        with caplog.at_level(logging.WARNING, logger="gitline.modules.git_status"):
            assert render(repo_with_status(" M a\n"), config) is None
        assert "nonsense" in caplog.text
