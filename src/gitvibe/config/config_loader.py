"""
Configuration store for gitvibe.

Profiles are YAML files under ``<config_dir>/configs/<name>.yaml``. The name
of the default profile is kept in ``<config_dir>/default.txt``.

"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from gitvibe.config.config_schema import ProfileConfig

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "GITVIBE_CONFIG_DIR"
PROFILE_SUFFIX = ".yaml"
DEFAULT_FILE_NAME = "default.txt"

_PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
	"""Exception raised when a configuration profile does not exist."""


class ConfigParsingError(ConfigError):
	"""Exception raised when a configuration profile cannot be parsed."""


class ConfigurationError(ConfigError):
	"""Exception raised when gitvibe is not configured well enough to run."""


class ConfigStore:
	"""
	Reads and writes named configuration profiles.

	Nothing is cached: every call goes to disk, so edits made in an editor
	between calls are picked up.

	"""

	def __init__(self, config_dir: Path | None = None) -> None:
		"""
		Initialize the store.

		Args:
		    config_dir: Root directory for profiles. Defaults to
		        ``$GITVIBE_CONFIG_DIR`` or ``$XDG_CONFIG_HOME/gitvibe``.

		"""
		self.config_dir = (config_dir or self.default_config_dir()).expanduser()
		logger.debug("Using configuration directory %s", self.config_dir)

	@staticmethod
	def default_config_dir() -> Path:
		"""Resolve the configuration directory from the environment."""
		override = os.environ.get(CONFIG_DIR_ENV)
		if override:
			return Path(override)
		return Path(xdg_config_home) / "gitvibe"

	@property
	def profiles_dir(self) -> Path:
		"""Directory holding one YAML file per profile."""
		return self.config_dir / "configs"

	@property
	def default_file(self) -> Path:
		"""File holding the default profile name."""
		return self.config_dir / DEFAULT_FILE_NAME

	def profile_path(self, name: str) -> Path:
		"""
		Get the file path of a profile.

		Args:
		    name: Profile name

		Returns:
		    Path of the profile's YAML file, whether or not it exists

		Raises:
		    ConfigurationError: If the name is not a valid profile name

		"""
		if not _PROFILE_NAME_PATTERN.match(name):
			msg = f"Invalid profile name: {name!r}. Use letters, digits, '.', '_' or '-'."
			raise ConfigurationError(msg)
		return self.profiles_dir / f"{name}{PROFILE_SUFFIX}"

	def list_profiles(self) -> list[str]:
		"""Names of all stored profiles, sorted."""
		if not self.profiles_dir.is_dir():
			return []
		return sorted(path.stem for path in self.profiles_dir.glob(f"*{PROFILE_SUFFIX}") if path.is_file())

	def list_profiles_with_validity(self) -> list[tuple[str, bool]]:
		"""
		List profiles together with whether each one loads cleanly.

		Returns:
		    ``(name, is_valid)`` pairs, sorted by name

		"""
		results: list[tuple[str, bool]] = []
		for name in self.list_profiles():
			try:
				self.load_profile(name)
			except ConfigError as e:
				logger.debug("Profile %s is invalid: %s", name, e)
				results.append((name, False))
			else:
				results.append((name, True))
		return results

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file into a dictionary.

		Args:
		    file_path: Path to the YAML file to parse

		Returns:
		    Parsed YAML content, empty for an empty file

		Raises:
		    yaml.YAMLError: If the file is not valid YAML or not a mapping

		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
		if content is None:
			return {}
		if not isinstance(content, dict):
			msg = f"File {file_path} does not contain a valid YAML dictionary"
			raise yaml.YAMLError(msg)
		return content

	def load_profile(self, name: str) -> ProfileConfig:
		"""
		Load and validate a profile.

		Args:
		    name: Profile name

		Returns:
		    The validated profile

		Raises:
		    ConfigFileNotFoundError: If the profile does not exist
		    ConfigParsingError: If the file is not valid YAML or fails validation

		"""
		path = self.profile_path(name)
		if not path.is_file():
			msg = f"Configuration profile '{name}' not found at {path}"
			raise ConfigFileNotFoundError(msg)

		try:
			data = self._parse_yaml_file(path)
		except (OSError, yaml.YAMLError) as e:
			msg = f"Could not read configuration profile '{name}': {e}"
			raise ConfigParsingError(msg) from e

		try:
			profile = ProfileConfig.model_validate(data)
		except ValidationError as e:
			msg = f"Configuration profile '{name}' is invalid: {e}"
			raise ConfigParsingError(msg) from e

		logger.debug("Loaded configuration profile %s from %s", name, path)
		return profile

	def save_profile(self, name: str, profile: ProfileConfig) -> Path:
		"""
		Write a profile to disk, replacing any existing file.

		Args:
		    name: Profile name
		    profile: Profile to store

		Returns:
		    Path of the written file

		"""
		path = self.profile_path(name)
		path.parent.mkdir(parents=True, exist_ok=True)
		data = profile.model_dump(mode="json", exclude_none=True)
		with path.open("w", encoding="utf-8") as f:
			yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True, width=120)
		logger.debug("Saved configuration profile %s to %s", name, path)
		return path

	def delete_profile(self, name: str) -> bool:
		"""
		Delete a profile, clearing the default if it pointed at it.

		Returns:
		    True if a file was removed

		"""
		path = self.profile_path(name)
		if not path.is_file():
			return False
		path.unlink()
		if self.get_default_name() == name:
			self.default_file.unlink(missing_ok=True)
		logger.debug("Deleted configuration profile %s", name)
		return True

	def get_default_name(self) -> str | None:
		"""Name of the default profile, or None if none is set."""
		if not self.default_file.is_file():
			return None
		name = self.default_file.read_text(encoding="utf-8").strip()
		return name or None

	def set_default_name(self, name: str) -> None:
		"""
		Mark an existing profile as the default.

		Raises:
		    ConfigFileNotFoundError: If the profile does not exist

		"""
		if not self.profile_path(name).is_file():
			msg = f"Configuration profile '{name}' not found"
			raise ConfigFileNotFoundError(msg)
		self.config_dir.mkdir(parents=True, exist_ok=True)
		self.default_file.write_text(f"{name}\n", encoding="utf-8")

	def resolve_profile(self, name: str | None = None) -> ProfileConfig:
		"""
		Load the named profile, or the default one when no name is given.

		Args:
		    name: Explicit profile name, typically from ``--config``

		Returns:
		    The validated profile

		Raises:
		    ConfigurationError: If no name is given and no default is set

		"""
		if name is None:
			name = self.get_default_name()
			if name is None:
				msg = "No default configuration found. Run 'gitvibe init' first."
				raise ConfigurationError(msg)
		return self.load_profile(name)
