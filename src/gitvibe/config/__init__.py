"""Configuration profiles and their on-disk store."""

from .config_loader import (
	ConfigError,
	ConfigFileNotFoundError,
	ConfigParsingError,
	ConfigStore,
	ConfigurationError,
)
from .config_schema import DEFAULT_MODELS, KNOWN_MODELS, ChunkingConfig, ProfileConfig, Provider

__all__ = [
	"DEFAULT_MODELS",
	"KNOWN_MODELS",
	"ChunkingConfig",
	"ConfigError",
	"ConfigFileNotFoundError",
	"ConfigParsingError",
	"ConfigStore",
	"ConfigurationError",
	"ProfileConfig",
	"Provider",
]
