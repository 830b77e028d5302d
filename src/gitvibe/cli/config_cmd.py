"""Commands for managing configuration profiles."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

NameArg = Annotated[str, typer.Argument(help="Profile name.")]
OptionalNameArg = Annotated[str | None, typer.Argument(help="Profile name. Defaults to the default profile.")]

config_app = typer.Typer(help="Manage configuration profiles.", no_args_is_help=True)


def register_command(app: typer.Typer) -> None:
	"""Register the config command group with the CLI app."""
	app.add_typer(config_app, name="config")


@config_app.command(name="new")
def new_command(name: NameArg) -> None:
	"""Create a profile from the defaults and open it in your editor."""
	from gitvibe.config import ConfigError, ConfigStore, ProfileConfig
	from gitvibe.utils.cli_utils import console, exit_with_error

	store = ConfigStore()
	try:
		path = store.profile_path(name)
		if path.exists():
			exit_with_error(f"Configuration '{name}' already exists at {path}.")

		store.save_profile(name, ProfileConfig())
		typer.edit(filename=str(path))

		try:
			store.load_profile(name)
		except ConfigError as e:
			store.delete_profile(name)
			exit_with_error(f"Configuration '{name}' is invalid and was not saved.", exception=e)

		console.print(f"[green]Configuration '{name}' created at {path}.[/green]")
	except ConfigError as e:
		exit_with_error(str(e), exception=e)


@config_app.command(name="list")
def list_command() -> None:
	"""List all profiles."""
	from gitvibe.config import ConfigStore
	from gitvibe.utils.cli_utils import console

	store = ConfigStore()
	profiles = store.list_profiles_with_validity()
	if not profiles:
		console.print("No configurations found. Run 'gitvibe init' to create one.")
		return

	default_name = store.get_default_name()
	for name, is_valid in profiles:
		markers = []
		if name == default_name:
			markers.append("[green](default)[/green]")
		if not is_valid:
			markers.append("[red](invalid)[/red]")
		console.print(" ".join([f"- {name}", *markers]))


@config_app.command(name="show")
def show_command(name: OptionalNameArg = None) -> None:
	"""Show the contents of a profile."""
	from gitvibe.config import ConfigError, ConfigFileNotFoundError, ConfigStore, ConfigurationError
	from gitvibe.utils.cli_utils import console, exit_with_error

	store = ConfigStore()
	try:
		if name is None:
			name = store.get_default_name()
			if name is None:
				msg = "No default configuration found. Run 'gitvibe init' first."
				raise ConfigurationError(msg)
		path = store.profile_path(name)
		if not path.is_file():
			msg = f"Configuration '{name}' not found."
			raise ConfigFileNotFoundError(msg)
		console.print(f"[bold]Configuration '{name}'[/bold] ({path})\n")
		console.print(path.read_text(encoding="utf-8"), markup=False, highlight=False)
	except ConfigError as e:
		exit_with_error(str(e), exception=e)


@config_app.command(name="set-default")
def set_default_command(name: NameArg) -> None:
	"""Make a profile the default."""
	from gitvibe.config import ConfigError, ConfigStore
	from gitvibe.utils.cli_utils import console, exit_with_error

	store = ConfigStore()
	try:
		store.load_profile(name)
		store.set_default_name(name)
	except ConfigError as e:
		exit_with_error(str(e), exception=e)
	console.print(f"[green]Default configuration set to '{name}'.[/green]")
