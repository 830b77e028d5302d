"""Command for generating commit messages from staged changes."""

from __future__ import annotations

import logging
from typing import Annotated

import asyncer
import typer

from .cli_types import ConfigOpt, CopyFlag

logger = logging.getLogger(__name__)

EditFlag = Annotated[bool, typer.Option("--edit", help="Edit the message in $EDITOR before using it.")]

CommitFlag = Annotated[
	bool,
	typer.Option("--commit", "--apply", help="Commit the staged changes with the message."),
]

ACTION_EDIT = "edit"
ACTION_COPY = "copy"
ACTION_COMMIT = "commit"

# Actions always run in this order, so a copied or committed message is the edited one
ACTION_ORDER = (ACTION_EDIT, ACTION_COPY, ACTION_COMMIT)


def register_command(app: typer.Typer) -> None:
	"""Register the commit command and its ``c`` alias with the CLI app."""

	@app.command(name="commit")
	@asyncer.runnify
	async def commit_command(
		copy: CopyFlag = False,
		edit: EditFlag = False,
		do_commit: CommitFlag = False,
		config: ConfigOpt = None,
	) -> None:
		"""Generate a commit message from staged changes."""
		await _commit_command_impl(copy=copy, edit=edit, do_commit=do_commit, config_name=config)

	@app.command(name="c", hidden=True)
	@asyncer.runnify
	async def commit_alias_command(
		copy: CopyFlag = False,
		edit: EditFlag = False,
		do_commit: CommitFlag = False,
		config: ConfigOpt = None,
	) -> None:
		"""Alias for 'commit'."""
		await _commit_command_impl(copy=copy, edit=edit, do_commit=do_commit, config_name=config)


async def _choose_message(variations: tuple[str, ...]) -> str:
	"""Let the user pick one of several variations."""
	import questionary

	if len(variations) == 1:
		return variations[0]

	choice = await questionary.select(
		"Select a commit message:",
		choices=[questionary.Choice(title=message.splitlines()[0], value=message) for message in variations],
	).ask_async()
	if choice is None:
		raise KeyboardInterrupt
	return choice


async def _choose_actions() -> list[str]:
	import questionary

	selected = await questionary.checkbox(
		"What would you like to do?",
		choices=[
			questionary.Choice("Edit message", value=ACTION_EDIT),
			questionary.Choice("Copy to clipboard", value=ACTION_COPY),
			questionary.Choice("Commit with this message", value=ACTION_COMMIT),
		],
	).ask_async()
	if selected is None:
		raise KeyboardInterrupt
	return selected


async def _commit_command_impl(copy: bool, edit: bool, do_commit: bool, config_name: str | None) -> None:
	"""Actual implementation of the commit command."""
	from gitvibe.config import ConfigError
	from gitvibe.git.commit_generator import CommitMessageGenerator
	from gitvibe.git.utils import GitError, commit, get_staged_diff, is_git_repo
	from gitvibe.llm import LLMError
	from gitvibe.utils.cli_utils import (
		console,
		copy_to_clipboard,
		exit_with_error,
		handle_keyboard_interrupt,
		loading_spinner,
		show_warning,
	)

	from .cli_types import load_generation_context

	try:
		if not is_git_repo():
			exit_with_error("Not a git repository.")

		diff = get_staged_diff()
		if not diff:
			console.print("[yellow]No staged changes found.[/yellow]")
			return

		profile, gateway = load_generation_context(config_name)
		generator = CommitMessageGenerator(gateway, profile)

		with loading_spinner("Generating commit message..."):
			result = await generator.generate(diff)

		console.print("\n[bold]Generated commit message(s):[/bold]")
		for index, variation in enumerate(result.variations, start=1):
			console.print(f"[cyan]{index}.[/cyan] {variation}", highlight=False)

		message = await _choose_message(result.variations)

		requested = {ACTION_EDIT: edit, ACTION_COPY: copy, ACTION_COMMIT: do_commit}
		actions = [action for action in ACTION_ORDER if requested[action]]
		if not actions:
			chosen = await _choose_actions()
			actions = [action for action in ACTION_ORDER if action in chosen]

		for action in actions:
			if action == ACTION_EDIT:
				edited = typer.edit(message, extension=".txt")
				if edited is not None and edited.strip():
					message = edited.strip()
			elif action == ACTION_COPY:
				if copy_to_clipboard(message):
					console.print("[green]Copied to clipboard.[/green]")
				else:
					show_warning("Could not copy to clipboard. Install xclip, xsel or wl-clipboard on Linux.")
			elif action == ACTION_COMMIT:
				commit(message)
				console.print("[green]Committed successfully.[/green]")

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except (ConfigError, GitError, LLMError) as e:
		exit_with_error(str(e), exception=e)
