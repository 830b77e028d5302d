"""Splitting diffs and commit lists into bounded-size chunks."""

from __future__ import annotations

import logging

from .constants import LINE_BREAK_WINDOW
from .parser import parse_diff

logger = logging.getLogger(__name__)


def requires_chunking(text: str, threshold: int) -> bool:
	"""
	Decide whether an input is too large for a single generation call.

	Args:
	    text: Diff or joined commit corpus
	    threshold: Largest size, in characters, still handled in one pass

	Returns:
	    True when the input must go through the chunk-and-merge path

	"""
	return len(text) > threshold


def _validate_budget(max_chunk_size: int, overlap: int = 0) -> None:
	if max_chunk_size <= 0:
		msg = f"max_chunk_size must be positive, got {max_chunk_size}"
		raise ValueError(msg)
	if overlap < 0:
		msg = f"overlap must not be negative, got {overlap}"
		raise ValueError(msg)
	if overlap >= max_chunk_size * LINE_BREAK_WINDOW:
		msg = (
			f"overlap ({overlap}) must be smaller than "
			f"{LINE_BREAK_WINDOW:.0%} of max_chunk_size ({max_chunk_size})"
		)
		raise ValueError(msg)


def _overlap_tail(lines: list[str], overlap: int, budget: int) -> list[str]:
	"""Trailing lines of a flushed piece to repeat at the start of the next one."""
	limit = min(overlap, budget)
	tail: list[str] = []
	size = 0
	for line in reversed(lines):
		size += len(line) + 1
		if size > limit:
			break
		tail.append(line)
	tail.reverse()
	return tail


def _split_block_by_lines(block: str, max_chunk_size: int, overlap: int) -> list[str]:
	"""Split one oversized file block at line boundaries."""
	pieces: list[str] = []
	current: list[str] = []
	size = 0

	for line in block.split("\n"):
		added = len(line) + (1 if current else 0)
		if current and size + added > max_chunk_size:
			pieces.append("\n".join(current))
			current = _overlap_tail(current, overlap, max_chunk_size - len(line) - 1)
			size = len("\n".join(current))
			added = len(line) + (1 if current else 0)
		current.append(line)
		size += added

	if current:
		pieces.append("\n".join(current))
	return pieces


def chunk_diff(diff: str, max_chunk_size: int, overlap: int = 0) -> list[str]:
	"""
	Split a diff into chunks made of whole per-file blocks.

	Files are packed greedily in order of appearance. A file whose block is
	larger than the budget on its own is split at line boundaries, and those
	pieces may repeat up to ``overlap`` characters of trailing lines from the
	previous piece. Lines are never split, so a single line longer than the
	budget becomes a chunk of its own.

	Args:
	    diff: Raw unified diff text
	    max_chunk_size: Maximum chunk size in characters
	    overlap: Characters of context repeated between pieces of a split file

	Returns:
	    Ordered list of chunks; empty when the diff contains no files

	"""
	_validate_budget(max_chunk_size, overlap)

	if not diff.strip():
		return []
	if len(diff) <= max_chunk_size:
		return [diff]

	summary = parse_diff(diff)
	chunks: list[str] = []
	buffer: list[str] = []
	buffer_size = 0

	def flush() -> None:
		nonlocal buffer, buffer_size
		if buffer:
			chunks.append("\n".join(buffer))
		buffer = []
		buffer_size = 0

	for change in summary.files:
		block = change.to_block().rstrip("\n")
		separator = 1 if buffer else 0

		if buffer and buffer_size + separator + len(block) > max_chunk_size:
			flush()
			separator = 0

		if len(block) > max_chunk_size:
			flush()
			pieces = _split_block_by_lines(block, max_chunk_size, overlap)
			logger.debug("Split %s into %d pieces", change.filename, len(pieces))
			chunks.extend(pieces)
			continue

		buffer.append(block)
		buffer_size += separator + len(block)

	flush()
	logger.debug("Chunked diff of %d chars into %d chunk(s)", len(diff), len(chunks))
	return chunks


def chunk_diff_string(diff: str, max_chunk_size: int, overlap: int) -> list[str]:
	"""
	Split text into fixed windows without looking at diff structure.

	A window that would end mid-line is pulled back to the last newline, as long
	as that newline sits in the final fifth of the window. Each following window
	starts ``overlap`` characters before the previous one ended.

	Args:
	    diff: Text to split
	    max_chunk_size: Maximum chunk size in characters
	    overlap: Characters shared between adjacent chunks

	Returns:
	    Ordered list of chunks; ``[""]`` for empty input

	"""
	_validate_budget(max_chunk_size, overlap)

	if len(diff) <= max_chunk_size:
		return [diff]

	chunks: list[str] = []
	length = len(diff)
	start = 0

	while start < length:
		end = start + max_chunk_size
		if end < length:
			last_newline = diff.rfind("\n", 0, end + 1)
			if last_newline > start + max_chunk_size * LINE_BREAK_WINDOW:
				end = last_newline

		chunks.append(diff[start:end])
		if end >= length:
			break
		start = max(start + 1, end - overlap)

	return chunks


def chunk_commits(commits: list[str], max_chunk_size: int) -> list[list[str]]:
	"""
	Group commit texts into batches whose joined size stays within the budget.

	A commit that alone exceeds the budget is broken into its lines first, so
	its parts can be distributed over consecutive batches.

	Args:
	    commits: Commit messages or per-commit diffs, in order
	    max_chunk_size: Maximum batch size in characters

	Returns:
	    Ordered list of batches

	"""
	_validate_budget(max_chunk_size)

	groups: list[list[str]] = []
	current: list[str] = []
	current_size = 0

	for commit in commits:
		parts = commit.split("\n") if len(commit) > max_chunk_size else [commit]

		for part in parts:
			part_size = len(part) + 1
			if current and current_size + part_size > max_chunk_size:
				groups.append(current)
				current = []
				current_size = 0
			current.append(part)
			current_size += part_size

	if current:
		groups.append(current)
	return groups
