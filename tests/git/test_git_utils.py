"""Tests for git helpers."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from gitvibe.git.utils import (
	GitError,
	StagedChanges,
	commit,
	filter_lock_files,
	get_current_branch,
	get_last_n_commit_diffs,
	get_last_n_commit_hashes,
	get_last_n_commit_messages,
	get_staged_changes,
	get_staged_diff,
	is_git_repo,
	run_git_command,
)

if TYPE_CHECKING:
	from pathlib import Path

skip_without_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

LOCKED_DIFF = """\
diff --git a/src/app.py b/src/app.py
--- a/src/app.py
+++ b/src/app.py
@@ -1 +1 @@
-old
+new
diff --git a/package-lock.json b/package-lock.json
--- a/package-lock.json
+++ b/package-lock.json
@@ -1 +1 @@
-{"v": 1}
+{"v": 2}
diff --git a/web/yarn.lock b/web/yarn.lock
--- a/web/yarn.lock
+++ b/web/yarn.lock
@@ -1 +1 @@
-a
+b
diff --git a/README.md b/README.md
--- a/README.md
+++ b/README.md
@@ -1 +1 @@
+docs
"""


@pytest.mark.unit
class TestFilterLockFiles:
	"""Test filter_lock_files."""

	def test_lock_sections_removed(self) -> None:
		"""Sections of lock files are dropped, at any depth."""
		filtered = filter_lock_files(LOCKED_DIFF)

		assert "package-lock.json" not in filtered
		assert "yarn.lock" not in filtered
		assert "diff --git a/src/app.py b/src/app.py\n" in filtered
		assert filtered.endswith("+docs\n")

	def test_other_files_untouched(self) -> None:
		"""A diff without lock files is returned as is."""
		diff = LOCKED_DIFF.split("diff --git a/package-lock.json")[0]

		assert filter_lock_files(diff) == diff

	def test_empty(self) -> None:
		"""Empty input stays empty."""
		assert filter_lock_files("") == ""


@pytest.mark.unit
class TestStagedChanges:
	"""Test StagedChanges."""

	def test_format_for_model(self) -> None:
		"""The model text lists branch, counts and files before the diff."""
		changes = StagedChanges(
			branch="feature/login",
			files=["a.py", "b.py"],
			additions=3,
			deletions=1,
			diff="diff --git a/a.py b/a.py\n+x\n",
		)

		assert changes.format_for_model() == (
			"Branch: feature/login\n"
			"Files changed: 2\n"
			"Additions: +3\n"
			"Deletions: -1\n"
			"\n"
			"Modified files:\n"
			"- a.py\n"
			"- b.py\n"
			"\n"
			"Git diff:\n"
			"diff --git a/a.py b/a.py\n+x\n"
		)

	def test_is_empty(self) -> None:
		"""Whitespace-only diffs count as empty."""
		assert StagedChanges("main", [], 0, 0, " \n").is_empty
		assert not StagedChanges("main", ["a"], 1, 0, "+a").is_empty


@pytest.mark.unit
class TestRunGitCommand:
	"""Test run_git_command error handling."""

	def test_missing_executable(self) -> None:
		"""A missing git binary becomes GitError."""
		with (
			patch("gitvibe.git.utils.subprocess.run", side_effect=FileNotFoundError("git")),
			pytest.raises(GitError, match="Command not found"),
		):
			run_git_command(["git", "status"])

	def test_failure_includes_stderr(self) -> None:
		"""git's error output is part of the error."""
		error = subprocess.CalledProcessError(128, ["git", "status"], stderr="fatal: not a git repository\n")
		with (
			patch("gitvibe.git.utils.subprocess.run", side_effect=error),
			pytest.raises(GitError, match="not a git repository"),
		):
			run_git_command(["git", "status"])

	def test_branch_unknown_on_failure(self) -> None:
		"""Branch lookup never fails."""
		with patch("gitvibe.git.utils.run_git_command", side_effect=GitError("boom")):
			assert get_current_branch() == "unknown"

	def test_commit_count_must_be_positive(self) -> None:
		"""Asking for zero commits is rejected."""
		with pytest.raises(ValueError, match="at least 1"):
			get_last_n_commit_hashes(0)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
	"""Empty git repository with a local identity."""
	path = tmp_path / "repo"
	path.mkdir()
	for command in (
		["git", "init", "-q"],
		["git", "config", "user.email", "dev@example.com"],
		["git", "config", "user.name", "Dev"],
		["git", "config", "commit.gpgsign", "false"],
	):
		subprocess.run(command, cwd=path, check=True, capture_output=True)  # noqa: S603
	return path


def stage(repo: Path, files: dict[str, str]) -> None:
	"""Write and stage files."""
	for name, content in files.items():
		(repo / name).write_text(content)
	subprocess.run(["git", "add", *files], cwd=repo, check=True, capture_output=True)  # noqa: S603, S607


@skip_without_git
@pytest.mark.git
class TestRepository:
	"""Tests against a real repository."""

	def test_is_git_repo(self, repo: Path, tmp_path: Path) -> None:
		"""Repositories are detected and plain directories are not."""
		plain = tmp_path / "plain"
		plain.mkdir()

		assert is_git_repo(repo) is True
		assert is_git_repo(plain) is False

	def test_nothing_staged(self, repo: Path) -> None:
		"""A clean index gives an empty model text."""
		assert get_staged_diff(repo) == ""

	def test_staged_changes_without_lock_files(self, repo: Path) -> None:
		"""Staged lock files are left out of the diff and the counts."""
		stage(repo, {"app.py": "print('hi')\nprint('bye')\n", "poetry.lock": "locked\n"})

		changes = get_staged_changes(repo)

		assert changes.files == ["app.py"]
		assert changes.additions == 2
		assert changes.deletions == 0
		assert "poetry.lock" not in changes.diff
		assert changes.branch

		text = get_staged_diff(repo)
		assert text.startswith(f"Branch: {changes.branch}\n")
		assert "- app.py\n" in text

	def test_commit_and_history(self, repo: Path) -> None:
		"""Committed messages and diffs are read back newest first."""
		stage(repo, {"one.txt": "1\n"})
		commit("feat: add one", repo)
		stage(repo, {"two.txt": "2\n", "uv.lock": "lock\n"})
		commit("feat: add two\n\nWith a body.", repo)

		assert get_last_n_commit_messages(2, repo) == ["feat: add two\n\nWith a body.", "feat: add one"]

		diffs = get_last_n_commit_diffs(2, repo)
		assert len(diffs) == 2
		assert "two.txt" in diffs[0]
		assert "uv.lock" not in diffs[0]
		assert "one.txt" in diffs[1]

	def test_commit_with_nothing_staged(self, repo: Path) -> None:
		"""A failing commit raises GitError."""
		with pytest.raises(GitError, match="Failed to create commit"):
			commit("feat: nothing", repo)

	def test_failing_command(self, repo: Path) -> None:
		"""A failing git command raises GitError."""
		with pytest.raises(GitError, match="Git command failed"):
			run_git_command(["git", "rev-parse", "--verify", "no-such-ref"], repo)
