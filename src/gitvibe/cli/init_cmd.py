"""Implementation of the init command with its setup wizard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import asyncer
import typer

if TYPE_CHECKING:
	from questionary import Question

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "default"
CUSTOM_MODEL_CHOICE = "Custom model"
USE_EXISTING_KEY = "use"
ENTER_NEW_KEY = "new"


def register_command(app: typer.Typer) -> None:
	"""Register the init command with the CLI app."""

	@app.command(name="init")
	@asyncer.runnify
	async def init_command() -> None:
		"""Set up gitvibe: pick a provider and model, and store an API key."""
		await _init_command_impl()


async def _ask(question: Question) -> Any:  # noqa: ANN401
	"""Ask a questionary question, treating Ctrl-C as cancellation."""
	answer = await question.ask_async()
	if answer is None:
		raise KeyboardInterrupt
	return answer


async def _init_command_impl() -> None:
	"""Actual implementation of the init command."""
	import questionary
	from rich.panel import Panel

	from gitvibe.config import DEFAULT_MODELS, KNOWN_MODELS, ConfigError, ConfigStore, ProfileConfig, Provider
	from gitvibe.llm import GenerationGateway
	from gitvibe.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt, loading_spinner
	from gitvibe.utils.credentials import CredentialStore

	credentials = CredentialStore()
	store = ConfigStore()

	try:
		console.print(
			Panel.fit(
				"[bold]Welcome to gitvibe![/bold]\n\nLet's set up your AI configuration.",
				title="gitvibe Setup",
				border_style="blue",
			)
		)

		provider = Provider(
			await _ask(
				questionary.select(
					"Select AI provider:",
					choices=[
						questionary.Choice("Groq", value=Provider.GROQ.value),
						questionary.Choice("OpenAI", value=Provider.OPENAI.value),
						questionary.Choice("Google", value=Provider.GOOGLE.value),
						questionary.Choice("Anthropic", value=Provider.ANTHROPIC.value),
					],
					default=Provider.GROQ.value,
				)
			)
		)

		api_key = credentials.get_secret(provider)
		if api_key:
			action = await _ask(
				questionary.select(
					f"API key found for {provider.value}. What would you like to do?",
					choices=[
						questionary.Choice("Use existing key", value=USE_EXISTING_KEY),
						questionary.Choice("Enter new key", value=ENTER_NEW_KEY),
					],
				)
			)
			if action == ENTER_NEW_KEY:
				api_key = None

		model = await _ask(
			questionary.select(
				"Select model:",
				choices=[*KNOWN_MODELS[provider], CUSTOM_MODEL_CHOICE],
				default=DEFAULT_MODELS[provider],
			)
		)
		if model == CUSTOM_MODEL_CHOICE:
			model = await _ask(
				questionary.text("Enter custom model name:", validate=lambda text: bool(text.strip()) or "Required")
			)
			model = str(model).strip()
			GenerationGateway.validate_model(provider, model)

		if not api_key:
			api_key = str(
				await _ask(
					questionary.password(
						"Enter API key:",
						validate=lambda text: bool(text.strip()) or "API key is required",
					)
				)
			).strip()

		credentials.set_secret(provider, api_key)

		profile = ProfileConfig(ai_provider=provider, model=str(model))
		path = store.save_profile(DEFAULT_PROFILE_NAME, profile)
		store.set_default_name(DEFAULT_PROFILE_NAME)
		logger.debug("Saved default profile to %s", path)

		gateway = GenerationGateway({provider: api_key})
		with loading_spinner("Testing configuration..."):
			success = await gateway.check_connection(provider, profile.resolved_model)

		if not success:
			credentials.delete_secret(provider)
			exit_with_error("Test failed. Please check your API key and model, then run 'gitvibe init' again.")

		console.print(f'[green]Setup complete! Configuration saved as "{DEFAULT_PROFILE_NAME}".[/green]')

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except ConfigError as e:
		exit_with_error(str(e), exception=e)
