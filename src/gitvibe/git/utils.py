"""Git utilities for gitvibe."""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from gitvibe.git.diff_splitter import parse_diff

logger = logging.getLogger(__name__)

LOCK_FILES: Final[frozenset[str]] = frozenset(
	{
		"package-lock.json",
		"yarn.lock",
		"pnpm-lock.yaml",
		"bun.lockb",
		"requirements.txt.lock",
		"poetry.lock",
		"Pipfile.lock",
		"uv.lock",
		"Gemfile.lock",
		"composer.lock",
		"Cargo.lock",
		"go.sum",
		"Podfile.lock",
		"pubspec.lock",
		"packages.lock.json",
	}
)

_SECTION_SPLIT_PATTERN = re.compile(r"^(?=diff --git )", re.MULTILINE)
_SECTION_PATH_PATTERN = re.compile(r"^diff --git a/(.+?) b/")


class GitError(Exception):
	"""Custom exception for Git-related errors."""


@dataclass(frozen=True)
class StagedChanges:
	"""Staged changes of the working tree."""

	branch: str
	files: list[str]
	additions: int
	deletions: int
	diff: str

	@property
	def is_empty(self) -> bool:
		"""Whether nothing relevant is staged."""
		return not self.diff.strip()

	def format_for_model(self) -> str:
		"""
		Render the changes as the text sent to the model.

		Returns:
		    Branch, counts and file list followed by the raw diff

		"""
		lines = [
			f"Branch: {self.branch}",
			f"Files changed: {len(self.files)}",
			f"Additions: +{self.additions}",
			f"Deletions: -{self.deletions}",
			"",
			"Modified files:",
			*(f"- {name}" for name in self.files),
			"",
			"Git diff:",
			self.diff,
		]
		return "\n".join(lines)


def run_git_command(command: list[str], cwd: Path | None = None) -> str:
	"""
	Run a Git command and return its output.

	Args:
	    command: Git command to run, as an argument list
	    cwd: Working directory (optional)

	Returns:
	    Command output as string

	Raises:
	    GitError: If the command fails or git is not installed

	"""
	logger.debug("Running: %s", " ".join(command))
	try:
		result = subprocess.run(  # noqa: S603
			command,
			cwd=cwd,
			capture_output=True,
			text=True,
			encoding="utf-8",
			errors="replace",
			check=True,
		)
	except FileNotFoundError as e:
		msg = f"Command not found: {command[0]}"
		raise GitError(msg) from e
	except subprocess.CalledProcessError as e:
		error_msg = f"Git command failed: {' '.join(command)}\nError: {(e.stderr or '').strip()}"
		logger.debug(error_msg)
		raise GitError(error_msg) from e
	else:
		return result.stdout


def is_git_repo(path: Path | None = None) -> bool:
	"""Check whether ``path`` (default: cwd) is inside a Git work tree."""
	try:
		output = run_git_command(["git", "rev-parse", "--is-inside-work-tree"], path)
	except GitError:
		return False
	return output.strip() == "true"


def get_current_branch(path: Path | None = None) -> str:
	"""Name of the checked out branch, ``unknown`` on a detached or unborn HEAD."""
	try:
		branch = run_git_command(["git", "branch", "--show-current"], path).strip()
	except GitError:
		logger.debug("Could not determine current branch", exc_info=True)
		return "unknown"
	return branch or "unknown"


def filter_lock_files(diff: str) -> str:
	"""
	Remove the sections of lock files from a diff.

	Args:
	    diff: Unified diff text, possibly with several files

	Returns:
	    The diff without sections whose path ends in a known lock file name

	"""
	kept: list[str] = []
	for section in _SECTION_SPLIT_PATTERN.split(diff):
		match = _SECTION_PATH_PATTERN.match(section)
		if match and Path(match.group(1)).name in LOCK_FILES:
			logger.debug("Dropping lock file %s from diff", match.group(1))
			continue
		kept.append(section)
	return "".join(kept)


def get_staged_changes(path: Path | None = None) -> StagedChanges:
	"""
	Collect the staged changes, with lock files removed.

	Returns:
	    StagedChanges with counts computed from the filtered diff

	Raises:
	    GitError: If git fails

	"""
	diff = filter_lock_files(run_git_command(["git", "diff", "--cached"], path))
	summary = parse_diff(diff)
	return StagedChanges(
		branch=get_current_branch(path),
		files=summary.filenames,
		additions=summary.total_additions,
		deletions=summary.total_deletions,
		diff=diff,
	)


def get_staged_diff(path: Path | None = None) -> str:
	"""Staged changes formatted for the model, empty when nothing is staged."""
	changes = get_staged_changes(path)
	if changes.is_empty:
		return ""
	return changes.format_for_model()


def get_last_n_commit_hashes(n: int, path: Path | None = None) -> list[str]:
	"""Hashes of the last ``n`` commits on HEAD, newest first."""
	if n < 1:
		msg = f"Number of commits must be at least 1, got {n}"
		raise ValueError(msg)
	output = run_git_command(["git", "log", f"-n{n}", "--format=%H"], path)
	return [line for line in output.splitlines() if line.strip()]


def get_last_n_commit_diffs(n: int, path: Path | None = None) -> list[str]:
	"""
	Get the full ``git show`` output of the last ``n`` commits.

	Args:
	    n: Number of commits
	    path: Repository path (optional)

	Returns:
	    One filtered diff per commit, newest first

	Raises:
	    GitError: If git fails

	"""
	return [
		filter_lock_files(run_git_command(["git", "show", commit_hash], path))
		for commit_hash in get_last_n_commit_hashes(n, path)
	]


def get_last_n_commit_messages(n: int, path: Path | None = None) -> list[str]:
	"""Full messages of the last ``n`` commits, newest first."""
	messages: list[str] = []
	for commit_hash in get_last_n_commit_hashes(n, path):
		messages.append(run_git_command(["git", "log", "-1", "--format=%B", commit_hash], path).strip())
	return messages


def commit(message: str, path: Path | None = None) -> None:
	"""
	Create a commit with the given message.

	The message is passed on stdin, so it needs no quoting.

	Raises:
	    GitError: If the commit fails

	"""
	try:
		subprocess.run(  # noqa: S603
			["git", "commit", "-F", "-"],  # noqa: S607
			cwd=path,
			input=message,
			capture_output=True,
			text=True,
			encoding="utf-8",
			check=True,
		)
	except FileNotFoundError as e:
		msg = "git is not installed or not in PATH"
		raise GitError(msg) from e
	except subprocess.CalledProcessError as e:
		msg = f"Failed to create commit: {(e.stderr or e.stdout or '').strip()}"
		raise GitError(msg) from e
