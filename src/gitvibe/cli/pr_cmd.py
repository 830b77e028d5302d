"""Command for generating pull request descriptions from recent commits."""

from __future__ import annotations

import logging
from typing import Annotated

import asyncer
import typer

from .cli_types import ConfigOpt, CopyFlag

logger = logging.getLogger(__name__)

CommitsOpt = Annotated[
	int,
	typer.Option("--commits", min=1, help="Number of recent commits to include."),
]

OpenFlag = Annotated[bool, typer.Option("--open", help="Open a pull request with the GitHub CLI.")]

ACTION_COPY = "copy"
ACTION_OPEN = "open"
ACTION_SKIP = "skip"


def register_command(app: typer.Typer) -> None:
	"""Register the pr command with the CLI app."""

	@app.command(name="pr")
	@asyncer.runnify
	async def pr_command(
		commits: CommitsOpt = 1,
		copy: CopyFlag = False,
		open_pr: OpenFlag = False,
		config: ConfigOpt = None,
	) -> None:
		"""Generate a pull request title and description from recent commits."""
		await _pr_command_impl(n_commits=commits, copy=copy, open_pr=open_pr, config_name=config)


async def _pr_command_impl(n_commits: int, copy: bool, open_pr: bool, config_name: str | None) -> None:
	"""Actual implementation of the pr command."""
	import questionary

	from gitvibe.config import ConfigError
	from gitvibe.git.pr_generator import PRGenerator, create_pull_request
	from gitvibe.git.utils import GitError, get_last_n_commit_diffs, is_git_repo
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

		commit_diffs = get_last_n_commit_diffs(n_commits)
		if not commit_diffs:
			console.print("[yellow]No commits found.[/yellow]")
			return

		profile, gateway = load_generation_context(config_name)
		generator = PRGenerator(gateway, profile)

		console.print(f"Generating PR description from the last {len(commit_diffs)} commit(s)...")
		if profile.stream_output:

			def echo(fragment: str) -> None:
				console.print(fragment, end="", markup=False, highlight=False)

			result = await generator.generate(commit_diffs, on_text=echo)
			console.print()
		else:
			with loading_spinner("Generating PR description..."):
				result = await generator.generate(commit_diffs)

		console.print("\n[bold]Generated PR:[/bold]")
		console.print(f"[bold]Title:[/bold] {result.title}", highlight=False)
		console.print("[bold]Description:[/bold]")
		console.print(result.description, markup=False, highlight=False)

		actions = [action for action, wanted in ((ACTION_COPY, copy), (ACTION_OPEN, open_pr)) if wanted]
		if not actions:
			answer = await questionary.select(
				"What would you like to do?",
				choices=[
					questionary.Choice("Copy to clipboard", value=ACTION_COPY),
					questionary.Choice("Open PR with GitHub CLI", value=ACTION_OPEN),
					questionary.Choice("Nothing", value=ACTION_SKIP),
				],
			).ask_async()
			if answer and answer != ACTION_SKIP:
				actions.append(answer)

		for action in actions:
			if action == ACTION_COPY:
				if copy_to_clipboard(result.to_markdown()):
					console.print("[green]Copied to clipboard.[/green]")
				else:
					show_warning("Could not copy to clipboard. Install xclip, xsel or wl-clipboard on Linux.")
			elif action == ACTION_OPEN:
				pull_request = create_pull_request(result.title, result.description)
				console.print(f"[green]PR created successfully:[/green] {pull_request.url or ''}")

	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except (ConfigError, GitError, LLMError) as e:
		exit_with_error(str(e), exception=e)
