"""Generate commit messages from staged diffs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitvibe.git.diff_splitter import chunk_diff, chunk_diff_string, requires_chunking
from gitvibe.llm import (
	GenerationRequest,
	InvalidModelOutputError,
	generate_for_chunks,
	render_prompt,
)

from .schemas import FallbackOutput, StructuredCommitResult
from .utils import clean_commit_message, format_bullets, outcome_results, parse_structured_output

if TYPE_CHECKING:
	from gitvibe.config import ProfileConfig
	from gitvibe.llm import GenerationGateway

logger = logging.getLogger(__name__)


class CommitMessageGenerator:
	"""Generates commit message variations for a diff, chunking large diffs."""

	def __init__(self, gateway: GenerationGateway, profile: ProfileConfig) -> None:
		"""
		Initialize the commit message generator.

		Args:
		    gateway: Gateway used for all model calls
		    profile: Active configuration profile

		"""
		self.gateway = gateway
		self.profile = profile

	def _request(self, prompt: str) -> GenerationRequest:
		return GenerationRequest(
			prompt=prompt,
			max_output_tokens=self.profile.max_commit_tokens,
			temperature=self.profile.temperature,
			model=self.profile.resolved_model,
			provider=self.profile.ai_provider,
		)

	@staticmethod
	def _to_result(results: list[str] | tuple[str, ...]) -> StructuredCommitResult:
		return StructuredCommitResult(variations=tuple(clean_commit_message(r) for r in results))

	async def generate(self, diff: str) -> StructuredCommitResult:
		"""
		Generate commit message variations for a diff.

		Diffs up to ``chunking.max_diff_size`` characters are sent in a single
		call; larger ones go through ``summarize_large``.

		Args:
		    diff: Diff text, usually the formatted staged diff

		Returns:
		    The generated variations

		Raises:
		    InvalidModelOutputError: If the final model output is unusable
		    ChunkGenerationError: If every chunk of a large diff failed
		    ProviderError: If the single call of a small diff failed

		"""
		if requires_chunking(diff, self.profile.chunking.max_diff_size):
			logger.info("Diff is %d chars, using chunked generation", len(diff))
			return await self.summarize_large(diff)

		prompt = render_prompt(
			self.profile.commit_prompt,
			{"diff": diff, "n_commit": self.profile.commit_variations},
		)
		response = await self.gateway.complete(self._request(prompt))
		outcome = parse_structured_output(response)
		if isinstance(outcome, FallbackOutput):
			msg = "Could not parse commit messages from the model response"
			logger.debug("Unparsable response: %s", response[:500])
			raise InvalidModelOutputError(msg)
		return self._to_result(outcome.results)

	def split(self, diff: str) -> list[str]:
		"""Split a large diff into chunks, by file when the diff has file headers."""
		chunking = self.profile.chunking
		chunks = chunk_diff(diff, chunking.max_chunk_size, chunking.chunk_overlap)
		if not chunks:
			logger.debug("No file headers found, splitting diff as plain text")
			chunks = chunk_diff_string(diff, chunking.max_chunk_size, chunking.chunk_overlap)
		return chunks

	async def summarize_large(self, diff: str) -> StructuredCommitResult:
		"""
		Generate commit messages for a diff too large for a single call.

		Each chunk gets its own commit message call. The per-chunk messages are
		then merged by one more call into the final variations.

		Args:
		    diff: Diff text

		Returns:
		    The merged variations

		Raises:
		    ChunkGenerationError: If every chunk failed
		    InvalidModelOutputError: If the merge output is unusable

		"""
		chunks = self.split(diff)
		logger.debug("Generating commit messages for %d chunk(s)", len(chunks))

		async def summarize_chunk(index: int, chunk: str) -> list[str]:
			prompt = render_prompt(
				self.profile.commit_prompt,
				{"diff": chunk, "n_commit": self.profile.commit_variations},
			)
			response = await self.gateway.complete(self._request(prompt))
			logger.debug("Chunk %d/%d done", index + 1, len(chunks))
			return outcome_results(parse_structured_output(response))

		partials = await generate_for_chunks(chunks, summarize_chunk, self.profile.chunking.concurrency)
		messages = [message for partial in partials for message in partial]
		if not any(messages):
			msg = "The model returned no usable output for any chunk"
			raise InvalidModelOutputError(msg)

		merge_prompt = render_prompt(
			self.profile.merge_commit_prompt,
			{"messages": format_bullets(messages), "n_commit": self.profile.commit_variations},
		)
		response = await self.gateway.complete(self._request(merge_prompt))
		outcome = parse_structured_output(response)
		if isinstance(outcome, FallbackOutput):
			msg = "Could not parse merged commit messages from the model response"
			logger.debug("Unparsable merge response: %s", response[:500])
			raise InvalidModelOutputError(msg)
		return self._to_result(outcome.results)
