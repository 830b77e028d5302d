"""Shared option annotations and setup for gitvibe commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
	from gitvibe.config import ProfileConfig
	from gitvibe.llm import GenerationGateway

ConfigOpt = Annotated[
	str | None,
	typer.Option("--config", help="Configuration profile to use instead of the default."),
]

CopyFlag = Annotated[bool, typer.Option("--copy", help="Copy the result to the clipboard.")]


def load_generation_context(config_name: str | None) -> tuple[ProfileConfig, GenerationGateway]:
	"""
	Resolve the profile and build a gateway holding its provider's API key.

	Args:
	    config_name: Profile from ``--config``; None for the default profile

	Returns:
	    The profile and a ready gateway

	Raises:
	    ConfigError: If the profile cannot be resolved or no API key is found

	"""
	from gitvibe.config import ConfigStore
	from gitvibe.llm import GenerationGateway
	from gitvibe.utils.credentials import CredentialStore

	profile = ConfigStore().resolve_profile(config_name)
	api_key = CredentialStore().require_secret(profile.ai_provider)
	GenerationGateway.validate_model(profile.ai_provider, profile.resolved_model)
	return profile, GenerationGateway({profile.ai_provider: api_key})
