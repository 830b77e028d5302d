"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gitvibe.config import ChunkingConfig, ProfileConfig

if TYPE_CHECKING:
	from collections.abc import AsyncIterator, Callable

	from gitvibe.llm import GenerationRequest

TEST_COMMIT_PROMPT = "COMMIT n={n_commit}\n{diff}"
TEST_MERGE_COMMIT_PROMPT = "MERGE n={n_commit}\n{messages}"
TEST_PR_PROMPT = "PR\n{commits}"
TEST_PR_CHUNK_PROMPT = "PRCHUNK\n{diff}"
TEST_MERGE_PR_PROMPT = "PRMERGE\n{messages}"


class FakeGateway:
	"""
	Stand-in for GenerationGateway that records requests.

	Responses come from ``handler(request)`` when given, otherwise from the
	queued ``responses`` in call order. An exception instance as a response is
	raised instead of returned.

	"""

	def __init__(
		self,
		responses: list[str | Exception] | None = None,
		handler: Callable[[GenerationRequest], str | Exception] | None = None,
		fragment_size: int = 4,
	) -> None:
		self.requests: list[GenerationRequest] = []
		self.streamed: list[GenerationRequest] = []
		self._responses = list(responses or [])
		self._handler = handler
		self._fragment_size = fragment_size

	def _next(self, request: GenerationRequest) -> str:
		self.requests.append(request)
		result = self._handler(request) if self._handler else self._responses.pop(0)
		if isinstance(result, Exception):
			raise result
		return result

	async def complete(self, request: GenerationRequest) -> str:
		return self._next(request).strip()

	async def stream(self, request: GenerationRequest) -> AsyncIterator[str]:
		self.streamed.append(request)
		text = self._next(request)
		for start in range(0, len(text), self._fragment_size):
			yield text[start : start + self._fragment_size]

	@property
	def prompts(self) -> list[str]:
		"""Prompts of all requests, in call order."""
		return [request.prompt for request in self.requests]


@pytest.fixture
def make_profile() -> Callable[..., ProfileConfig]:
	"""Build profiles with short, recognizable templates and small budgets."""

	def _make(**overrides: object) -> ProfileConfig:
		chunking = overrides.pop("chunking", None) or ChunkingConfig(
			max_diff_size=200,
			max_chunk_size=150,
			chunk_overlap=0,
			max_commit_chunk_size=60,
			concurrency=2,
		)
		values: dict[str, object] = {
			"ai_provider": "openai",
			"model": "gpt-test",
			"commit_prompt": TEST_COMMIT_PROMPT,
			"merge_commit_prompt": TEST_MERGE_COMMIT_PROMPT,
			"pr_prompt": TEST_PR_PROMPT,
			"pr_chunk_prompt": TEST_PR_CHUNK_PROMPT,
			"merge_pr_prompt": TEST_MERGE_PR_PROMPT,
			"temperature": 0.3,
			"max_commit_tokens": 111,
			"max_pr_tokens": 222,
			"stream_output": False,
			"commit_variations": 2,
			"chunking": chunking,
		}
		values.update(overrides)
		return ProfileConfig.model_validate(values)

	return _make


def make_file_diff(name: str, lines: int = 2, status: str = "modified") -> str:
	"""Build the ``git diff`` section of one file with distinct 41-char added lines."""
	header = [f"diff --git a/{name} b/{name}"]
	if status == "added":
		header.append("new file mode 100644")
	header += [f"--- a/{name}", f"+++ b/{name}", f"@@ -0,0 +1,{lines} @@"]
	body = [f"+{name[:6]:<6}{index:02d}".ljust(41, "x") for index in range(lines)]
	return "\n".join(header + body) + "\n"


@pytest.fixture
def file_diff() -> Callable[..., str]:
	"""Expose make_file_diff to tests."""
	return make_file_diff


@pytest.fixture
def fake_gateway_factory() -> type[FakeGateway]:
	"""Expose the FakeGateway class to tests."""
	return FakeGateway
