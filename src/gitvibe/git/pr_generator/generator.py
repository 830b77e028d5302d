"""Generate pull request titles and descriptions from commits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitvibe.git.diff_splitter import chunk_commits, requires_chunking
from gitvibe.llm import GenerationRequest, generate_for_chunks, render_prompt

from .utils import format_summaries, parse_pr_text

if TYPE_CHECKING:
	from collections.abc import Callable

	from gitvibe.config import ProfileConfig
	from gitvibe.llm import GenerationGateway

	from .schemas import PRResult

	TextCallback = Callable[[str], None]

logger = logging.getLogger(__name__)


class PRGenerator:
	"""Generates a PR title and description for a list of commits."""

	def __init__(self, gateway: GenerationGateway, profile: ProfileConfig) -> None:
		"""
		Initialize the PR generator.

		Args:
		    gateway: Gateway used for all model calls
		    profile: Active configuration profile

		"""
		self.gateway = gateway
		self.profile = profile

	def _request(self, prompt: str) -> GenerationRequest:
		return GenerationRequest(
			prompt=prompt,
			max_output_tokens=self.profile.max_pr_tokens,
			temperature=self.profile.temperature,
			model=self.profile.resolved_model,
			provider=self.profile.ai_provider,
		)

	async def _final_call(self, prompt: str, on_text: TextCallback | None) -> str:
		"""Run the last call of a generation, streaming it when enabled."""
		request = self._request(prompt)
		if not (self.profile.stream_output and on_text is not None):
			return await self.gateway.complete(request)

		fragments: list[str] = []
		async for fragment in self.gateway.stream(request):
			fragments.append(fragment)
			on_text(fragment)
		return "".join(fragments)

	async def generate(self, commits: list[str], on_text: TextCallback | None = None) -> PRResult:
		"""
		Generate a PR title and description.

		Args:
		    commits: Commit diffs or messages, in order
		    on_text: Called with each text fragment when output is streamed

		Returns:
		    The parsed PRResult

		Raises:
		    InvalidModelOutputError: If the model returned nothing
		    ChunkGenerationError: If every chunk of a large input failed
		    ProviderError: If the single call of a small input failed

		"""
		corpus = "\n".join(commits)
		if requires_chunking(corpus, self.profile.chunking.max_diff_size):
			logger.info("Commits are %d chars, using chunked generation", len(corpus))
			return await self.summarize_large(commits, on_text)

		prompt = render_prompt(self.profile.pr_prompt, {"commits": corpus})
		return parse_pr_text(await self._final_call(prompt, on_text))

	async def summarize_large(self, commits: list[str], on_text: TextCallback | None = None) -> PRResult:
		"""
		Generate a PR for commits too large for a single call.

		Commits are grouped into batches, each batch is summarized on its own,
		and the summaries are merged by a final call.

		Raises:
		    ChunkGenerationError: If every batch failed
		    InvalidModelOutputError: If the merge output is empty

		"""
		groups = chunk_commits(commits, self.profile.chunking.max_commit_chunk_size)
		chunks = ["\n".join(group) for group in groups]
		logger.debug("Summarizing %d commit batch(es)", len(chunks))

		async def summarize_chunk(index: int, chunk: str) -> str:
			prompt = render_prompt(self.profile.pr_chunk_prompt, {"diff": chunk, "commits": chunk})
			summary = await self.gateway.complete(self._request(prompt))
			logger.debug("Batch %d/%d done", index + 1, len(chunks))
			return summary

		summaries = await generate_for_chunks(chunks, summarize_chunk, self.profile.chunking.concurrency)
		merge_prompt = render_prompt(self.profile.merge_pr_prompt, {"messages": format_summaries(summaries)})
		return parse_pr_text(await self._final_call(merge_prompt, on_text))
