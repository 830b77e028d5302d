"""Single-pass parser turning unified diff text into a DiffSummary."""

from __future__ import annotations

import logging
import re

from .schemas import ChangeStatus, DiffFileChange, DiffSummary

logger = logging.getLogger(__name__)

FILE_HEADER_PREFIX = "diff --git"
_FILE_HEADER_PATTERN = re.compile(r"^diff --git a/(.+?) b/(.+)$")


class _FileBuilder:
	"""Mutable accumulator for the file currently being parsed."""

	__slots__ = ("additions", "content", "deletions", "filename", "status")

	def __init__(self, filename: str) -> None:
		self.filename = filename
		self.status = ChangeStatus.MODIFIED
		self.additions = 0
		self.deletions = 0
		self.content: list[str] = []

	def build(self) -> DiffFileChange:
		return DiffFileChange(
			filename=self.filename,
			status=self.status,
			additions=self.additions,
			deletions=self.deletions,
			content="".join(self.content),
		)


def parse_diff(diff_text: str) -> DiffSummary:
	"""
	Parse a unified diff into per-file change records.

	The parse is a forward-only state machine: a ``diff --git`` header starts a
	new file and flushes the previous one, mode lines set the status, and
	``+``/``-`` lines (excluding the ``+++``/``---`` file markers) are counted
	and collected. Headers that cannot be matched are skipped together with the
	lines that follow them. Binary files come out with zero counts and empty
	content.

	Args:
	    diff_text: Raw output of ``git diff`` or ``git show``

	Returns:
	    DiffSummary with files in order of appearance

	"""
	files: list[DiffFileChange] = []
	current: _FileBuilder | None = None

	for line in diff_text.splitlines():
		if line.startswith(FILE_HEADER_PREFIX):
			if current is not None:
				files.append(current.build())
			match = _FILE_HEADER_PATTERN.match(line)
			if match:
				current = _FileBuilder(match.group(1))
			else:
				logger.debug("Skipping unparsable diff header: %r", line[:200])
				current = None
			continue

		if current is None:
			continue

		if line.startswith("new file mode"):
			current.status = ChangeStatus.ADDED
		elif line.startswith("deleted file mode"):
			current.status = ChangeStatus.DELETED
		elif line.startswith("+") and not line.startswith("+++"):
			current.additions += 1
			current.content.append(line + "\n")
		elif line.startswith("-") and not line.startswith("---"):
			current.deletions += 1
			current.content.append(line + "\n")

	if current is not None:
		files.append(current.build())

	logger.debug("Parsed %d file(s) from diff", len(files))
	return DiffSummary(files=tuple(files))
