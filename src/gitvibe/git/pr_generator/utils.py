"""Utility functions for PR generation."""

from __future__ import annotations

import logging
import re
import subprocess

from gitvibe.git.utils import GitError
from gitvibe.llm import InvalidModelOutputError

from .schemas import PRResult, PullRequest

logger = logging.getLogger(__name__)

_HEADING_PREFIX_PATTERN = re.compile(r"^#+\s*")
_PR_NUMBER_PATTERN = re.compile(r"/pull/(\d+)$")


class PRCreationError(GitError):
	"""Error raised when there's an issue creating a pull request."""


def parse_pr_text(text: str) -> PRResult:
	"""
	Split model output into a PR title and description.

	The first line is the title, with any Markdown heading marker removed.
	Everything after it is the description.

	Args:
	    text: Model output

	Returns:
	    The parsed PRResult

	Raises:
	    InvalidModelOutputError: If the output is empty

	"""
	stripped = text.strip()
	if not stripped:
		msg = "The model returned an empty pull request description"
		raise InvalidModelOutputError(msg)

	first_line, _, rest = stripped.partition("\n")
	title = _HEADING_PREFIX_PATTERN.sub("", first_line).strip()
	return PRResult(title=title, description=rest.strip())


def format_summaries(summaries: list[str]) -> str:
	"""Join per-chunk summaries with horizontal rules."""
	return "\n\n---\n\n".join(summary.strip() for summary in summaries)


def create_pull_request(title: str, description: str) -> PullRequest:
	"""
	Create a pull request for the current branch with the GitHub CLI.

	Args:
	    title: PR title
	    description: PR description

	Returns:
	    PullRequest with the URL printed by ``gh``

	Raises:
	    PRCreationError: If gh is missing or PR creation fails

	"""
	try:
		subprocess.run(["gh", "--version"], check=True, capture_output=True, text=True)  # noqa: S607
	except (subprocess.CalledProcessError, FileNotFoundError) as e:
		msg = "GitHub CLI (gh) is not installed or not in PATH. Please install it to create PRs."
		raise PRCreationError(msg) from e

	cmd = ["gh", "pr", "create", "--title", title, "--body", description]
	logger.debug("Running GitHub CLI: gh pr create --title %r", title)
	try:
		result = subprocess.run(  # noqa: S603
			cmd,
			check=True,
			capture_output=True,
			text=True,
			encoding="utf-8",
		)
	except subprocess.CalledProcessError as e:
		error_message = e.stderr.strip() if e.stderr else "Unknown gh error"
		msg = f"Failed to create PR: {error_message}"
		raise PRCreationError(msg) from e

	pr_url = result.stdout.strip()
	pr_number = None
	match = _PR_NUMBER_PATTERN.search(pr_url)
	if match:
		pr_number = int(match.group(1))
	else:
		logger.warning("Could not extract PR number from URL: %s", pr_url)

	return PullRequest(title=title, description=description, url=pr_url or None, number=pr_number)
