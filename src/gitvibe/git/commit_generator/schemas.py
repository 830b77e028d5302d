"""Schemas for commit message generation."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator


class CommitResultsSchema(BaseModel):
	"""JSON object the model is asked to return: ``{"results": [...]}``."""

	results: list[str] = Field(min_length=1)

	@field_validator("results", mode="before")
	@classmethod
	def _drop_blank(cls, value: object) -> object:
		if isinstance(value, list):
			return [item.strip() for item in value if isinstance(item, str) and item.strip()]
		return value


@dataclass(frozen=True)
class StructuredOutput:
	"""Model output that matched the results schema."""

	results: tuple[str, ...]


@dataclass(frozen=True)
class FallbackOutput:
	"""Model output that could not be parsed; kept as raw text."""

	raw_text: str


ParseOutcome = StructuredOutput | FallbackOutput


@dataclass(frozen=True)
class StructuredCommitResult:
	"""Final commit message variations, at least one."""

	variations: tuple[str, ...]

	def __post_init__(self) -> None:
		"""Ensure there is at least one variation."""
		if not self.variations:
			msg = "StructuredCommitResult requires at least one variation"
			raise ValueError(msg)
