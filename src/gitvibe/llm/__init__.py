"""Model access for gitvibe."""

from .errors import ChunkGenerationError, InvalidModelOutputError, LLMError, ProviderError
from .gateway import GenerationGateway, GenerationRequest, build_model
from .prompts import render_prompt
from .reducer import gather_in_order, generate_for_chunks

__all__ = [
	"ChunkGenerationError",
	"GenerationGateway",
	"GenerationRequest",
	"InvalidModelOutputError",
	"LLMError",
	"ProviderError",
	"build_model",
	"gather_in_order",
	"generate_for_chunks",
	"render_prompt",
]
