"""Error classes for model-side failures."""

from __future__ import annotations


class LLMError(Exception):
	"""Base exception for errors raised while generating text with a model."""


class ProviderError(LLMError):
	"""A call to a model provider failed (network, authentication, rate limit)."""

	def __init__(self, provider: str, message: str) -> None:
		"""
		Initialize the error.

		Args:
		    provider: Provider the request was sent to
		    message: Message of the underlying failure

		"""
		self.provider = provider
		self.message = message
		super().__init__(f"{provider}: {message}")


class InvalidModelOutputError(LLMError):
	"""The final model output could not be turned into a result."""


class ChunkGenerationError(LLMError):
	"""Generation failed for one chunk, or for every chunk of a large input."""

	def __init__(self, message: str, chunk_index: int | None = None) -> None:
		self.chunk_index = chunk_index
		super().__init__(message)
