"""Diff parsing and chunking."""

from .parser import parse_diff
from .schemas import ChangeStatus, DiffFileChange, DiffSummary
from .splitter import chunk_commits, chunk_diff, chunk_diff_string, requires_chunking

__all__ = [
	"ChangeStatus",
	"DiffFileChange",
	"DiffSummary",
	"chunk_commits",
	"chunk_diff",
	"chunk_diff_string",
	"parse_diff",
	"requires_chunking",
]
