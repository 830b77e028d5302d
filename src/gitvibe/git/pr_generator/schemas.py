"""Schemas for pull request generation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PRResult:
	"""Generated pull request content."""

	title: str
	description: str

	def to_markdown(self) -> str:
		"""Title and description as one block, for the clipboard."""
		return f"{self.title}\n\n{self.description}"


@dataclass(frozen=True)
class PullRequest:
	"""A pull request created on the remote."""

	title: str
	description: str
	url: str | None = None
	number: int | None = None
