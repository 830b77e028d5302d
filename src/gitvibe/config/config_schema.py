"""Schemas for gitvibe configuration profiles."""

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gitvibe.git.diff_splitter.constants import (
	DEFAULT_CHUNK_OVERLAP,
	DEFAULT_CONCURRENCY,
	DEFAULT_MAX_CHUNK_SIZE,
	DEFAULT_MAX_COMMIT_CHUNK_SIZE,
	DEFAULT_MAX_DIFF_SIZE,
	LINE_BREAK_WINDOW,
)

from .prompts import (
	DEFAULT_COMMIT_PROMPT,
	DEFAULT_MERGE_COMMIT_PROMPT,
	DEFAULT_MERGE_PR_PROMPT,
	DEFAULT_PR_CHUNK_PROMPT,
	DEFAULT_PR_PROMPT,
)


class Provider(str, Enum):
	"""Hosted model providers gitvibe can talk to."""

	OPENAI = "openai"
	ANTHROPIC = "anthropic"
	GOOGLE = "google"
	GROQ = "groq"


DEFAULT_MODELS: Final[dict[Provider, str]] = {
	Provider.OPENAI: "gpt-5-mini",
	Provider.ANTHROPIC: "claude-3-7-sonnet-latest",
	Provider.GOOGLE: "gemini-2.5-flash",
	Provider.GROQ: "moonshotai/kimi-k2-instruct",
}

KNOWN_MODELS: Final[dict[Provider, tuple[str, ...]]] = {
	Provider.OPENAI: ("gpt-5-mini", "gpt-4o-mini", "gpt-5-nano", "gpt-5"),
	Provider.ANTHROPIC: (
		"claude-3-7-sonnet-latest",
		"claude-3-5-sonnet-latest",
		"claude-3-7-sonnet-20250219",
		"claude-4-sonnet-20250514",
		"claude-4-opus-20250514",
	),
	Provider.GOOGLE: ("gemini-2.5-flash", "gemini-2.0-flash-lite", "gemini-2.0-flash", "gemini-2.5-pro"),
	Provider.GROQ: (
		"moonshotai/kimi-k2-instruct",
		"moonshotai/kimi-k2-instruct-0905",
		"openai/gpt-oss-120b",
		"meta-llama/llama-4-maverick-17b-128e-instruct",
		"meta-llama/llama-4-scout-17b-16e-instruct",
	),
}


class ChunkingConfig(BaseModel):
	"""Size budgets for the chunk-and-merge path."""

	model_config = ConfigDict(frozen=True, extra="forbid")

	max_diff_size: int = Field(default=DEFAULT_MAX_DIFF_SIZE, gt=0)
	max_chunk_size: int = Field(default=DEFAULT_MAX_CHUNK_SIZE, gt=0)
	chunk_overlap: int = Field(default=DEFAULT_CHUNK_OVERLAP, ge=0)
	max_commit_chunk_size: int = Field(default=DEFAULT_MAX_COMMIT_CHUNK_SIZE, gt=0)
	concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)

	@model_validator(mode="after")
	def _check_overlap(self) -> ChunkingConfig:
		# Overlap has to fit before the earliest point a window may be cut back to.
		if self.chunk_overlap >= self.max_chunk_size * LINE_BREAK_WINDOW:
			msg = (
				f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
				f"{LINE_BREAK_WINDOW:.0%} of max_chunk_size ({self.max_chunk_size})"
			)
			raise ValueError(msg)
		return self


class ProfileConfig(BaseModel):
	"""A named configuration profile, stored as one YAML file."""

	model_config = ConfigDict(frozen=True, extra="forbid")

	ai_provider: Provider = Provider.OPENAI
	model: str | None = None
	commit_prompt: str = DEFAULT_COMMIT_PROMPT
	pr_prompt: str = DEFAULT_PR_PROMPT
	merge_commit_prompt: str = DEFAULT_MERGE_COMMIT_PROMPT
	merge_pr_prompt: str = DEFAULT_MERGE_PR_PROMPT
	pr_chunk_prompt: str = DEFAULT_PR_CHUNK_PROMPT
	temperature: float = Field(default=0.7, ge=0.0, le=2.0)
	max_commit_tokens: int = Field(default=1000, gt=0)
	max_pr_tokens: int = Field(default=2000, gt=0)
	stream_output: bool = True
	commit_variations: int = Field(default=2, ge=1)
	chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)

	@property
	def resolved_model(self) -> str:
		"""Model to call, falling back to the provider default."""
		return self.model or DEFAULT_MODELS[self.ai_provider]
