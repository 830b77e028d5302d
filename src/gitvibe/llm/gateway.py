"""Single seam between gitvibe and hosted model providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from gitvibe.config import KNOWN_MODELS, ConfigurationError, Provider

from .errors import ProviderError

if TYPE_CHECKING:
	from collections.abc import AsyncIterator, Callable, Mapping

	from pydantic_ai.models import Model

	ModelFactory = Callable[[Provider, str, str], Model]

logger = logging.getLogger(__name__)

CONNECTION_CHECK_PROMPT = "Reply with the single word: ok"


@dataclass(frozen=True)
class GenerationRequest:
	"""One prompt to send to one model."""

	prompt: str
	max_output_tokens: int
	temperature: float
	model: str
	provider: Provider

	def __post_init__(self) -> None:
		"""Validate the request values."""
		if self.max_output_tokens <= 0:
			msg = f"max_output_tokens must be positive, got {self.max_output_tokens}"
			raise ValueError(msg)
		if not 0.0 <= self.temperature <= 2.0:
			msg = f"temperature must be between 0 and 2, got {self.temperature}"
			raise ValueError(msg)
		if not self.model:
			msg = "model must not be empty"
			raise ValueError(msg)
		if not isinstance(self.provider, Provider):
			msg = f"Unsupported provider: {self.provider!r}"
			raise ValueError(msg)


def build_model(provider: Provider, model_name: str, api_key: str) -> Model:
	"""
	Create a pydantic-ai model bound to an API key.

	Args:
	    provider: Provider hosting the model
	    model_name: Provider-specific model identifier
	    api_key: API key for the provider

	Returns:
	    A pydantic-ai model instance

	Raises:
	    ConfigurationError: If the provider is not supported

	"""
	# Provider SDKs are only imported for the provider actually used
	if provider is Provider.OPENAI:
		from pydantic_ai.models.openai import OpenAIChatModel
		from pydantic_ai.providers.openai import OpenAIProvider

		return OpenAIChatModel(model_name, provider=OpenAIProvider(api_key=api_key))
	if provider is Provider.ANTHROPIC:
		from pydantic_ai.models.anthropic import AnthropicModel
		from pydantic_ai.providers.anthropic import AnthropicProvider

		return AnthropicModel(model_name, provider=AnthropicProvider(api_key=api_key))
	if provider is Provider.GOOGLE:
		from pydantic_ai.models.google import GoogleModel
		from pydantic_ai.providers.google import GoogleProvider

		return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))
	if provider is Provider.GROQ:
		from pydantic_ai.models.groq import GroqModel
		from pydantic_ai.providers.groq import GroqProvider

		return GroqModel(model_name, provider=GroqProvider(api_key=api_key))

	msg = f"Unsupported provider: {provider}"
	raise ConfigurationError(msg)


class GenerationGateway:
	"""
	Sends generation requests to the configured providers.

	Each request is a single attempt. Failures surface as ``ProviderError``
	with the provider's message; retry policy is left to the caller.

	"""

	def __init__(
		self,
		api_keys: Mapping[Provider, str],
		model_factory: ModelFactory = build_model,
	) -> None:
		"""
		Initialize the gateway.

		Args:
		    api_keys: API key per provider
		    model_factory: Callable building a pydantic-ai model from
		        provider, model name and API key

		"""
		self._api_keys = dict(api_keys)
		self._model_factory = model_factory

	def _agent(self, request: GenerationRequest) -> Agent[None, str]:
		api_key = self._api_keys.get(request.provider)
		if not api_key:
			msg = f"No API key configured for {request.provider.value}. Run 'gitvibe init' to set one."
			raise ConfigurationError(msg)
		model = self._model_factory(request.provider, request.model, api_key)
		return Agent(model, output_type=str)

	@staticmethod
	def _settings(request: GenerationRequest) -> ModelSettings:
		return ModelSettings(temperature=request.temperature, max_tokens=request.max_output_tokens)

	@staticmethod
	def validate_model(provider: Provider, model: str) -> bool:
		"""
		Check a model name against the known catalog.

		The check is advisory: providers add models faster than the catalog is
		updated, so an unknown name only produces a warning.

		Returns:
		    True if the model is in the catalog

		"""
		if model in KNOWN_MODELS.get(provider, ()):
			return True
		logger.warning("Model %s is not a known %s model, using it anyway", model, provider.value)
		return False

	async def complete(self, request: GenerationRequest) -> str:
		"""
		Generate the full response for a request.

		Args:
		    request: The generation request

		Returns:
		    The response text, stripped of surrounding whitespace

		Raises:
		    ConfigurationError: If no API key is configured for the provider
		    ProviderError: If the provider call fails

		"""
		agent = self._agent(request)
		logger.debug(
			"Calling %s model %s (prompt: %d chars, max_tokens: %d)",
			request.provider.value,
			request.model,
			len(request.prompt),
			request.max_output_tokens,
		)
		try:
			result = await agent.run(request.prompt, model_settings=self._settings(request))
		except Exception as e:
			logger.debug("Generation with %s failed", request.provider.value, exc_info=True)
			raise ProviderError(request.provider.value, str(e)) from e
		return result.output.strip()

	async def stream(self, request: GenerationRequest) -> AsyncIterator[str]:
		"""
		Stream the response for a request as text fragments.

		Closing the iterator early ends the underlying stream and releases the
		connection.

		Args:
		    request: The generation request

		Yields:
		    Text fragments in order; their concatenation is the full response

		Raises:
		    ConfigurationError: If no API key is configured for the provider
		    ProviderError: If the provider call fails

		"""
		agent = self._agent(request)
		logger.debug("Streaming from %s model %s", request.provider.value, request.model)
		try:
			async with agent.run_stream(request.prompt, model_settings=self._settings(request)) as result:
				async for fragment in result.stream_text(delta=True):
					yield fragment
		except Exception as e:
			logger.debug("Streaming from %s failed", request.provider.value, exc_info=True)
			raise ProviderError(request.provider.value, str(e)) from e

	async def check_connection(self, provider: Provider, model: str) -> bool:
		"""
		Send a tiny prompt to verify that the key and model work.

		Returns:
		    True if the provider answered

		"""
		request = GenerationRequest(
			prompt=CONNECTION_CHECK_PROMPT,
			max_output_tokens=16,
			temperature=0.0,
			model=model,
			provider=provider,
		)
		try:
			await self.complete(request)
		except (ProviderError, ConfigurationError) as e:
			logger.warning("Connection check failed: %s", e)
			return False
		return True
