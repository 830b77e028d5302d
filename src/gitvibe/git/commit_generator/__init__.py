"""Commit message generation."""

from .generator import CommitMessageGenerator
from .schemas import (
	CommitResultsSchema,
	FallbackOutput,
	ParseOutcome,
	StructuredCommitResult,
	StructuredOutput,
)
from .utils import format_bullets, parse_structured_output

__all__ = [
	"CommitMessageGenerator",
	"CommitResultsSchema",
	"FallbackOutput",
	"ParseOutcome",
	"StructuredCommitResult",
	"StructuredOutput",
	"format_bullets",
	"parse_structured_output",
]
