"""Schema definitions for parsed diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChangeStatus(str, Enum):
	"""How a file was touched by a diff."""

	ADDED = "added"
	MODIFIED = "modified"
	DELETED = "deleted"


@dataclass(frozen=True)
class DiffFileChange:
	"""One file's change in a unified diff."""

	filename: str
	status: ChangeStatus = ChangeStatus.MODIFIED
	additions: int = 0
	deletions: int = 0
	content: str = ""

	def to_block(self) -> str:
		"""
		Render the change as a self-describing text block for prompts.

		Returns:
		    ``File: <name>`` and ``Status: <status>`` header lines followed by the
		    added/removed lines.

		"""
		return f"File: {self.filename}\nStatus: {self.status.value}\n{self.content}"


@dataclass(frozen=True)
class DiffSummary:
	"""Ordered collection of file changes, in order of appearance in the diff."""

	files: tuple[DiffFileChange, ...] = field(default_factory=tuple)

	@property
	def filenames(self) -> list[str]:
		"""Names of all files in the summary."""
		return [change.filename for change in self.files]

	@property
	def total_additions(self) -> int:
		"""Sum of added lines across files."""
		return sum(change.additions for change in self.files)

	@property
	def total_deletions(self) -> int:
		"""Sum of removed lines across files."""
		return sum(change.deletions for change in self.files)

	def __len__(self) -> int:
		"""Return the number of files."""
		return len(self.files)
