"""API key storage backed by the operating system keychain."""

from __future__ import annotations

import logging
import os
from typing import Final

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from gitvibe.config import ConfigurationError, Provider

logger = logging.getLogger(__name__)

KEYRING_ACCOUNT: Final = "api-key"

ENV_VARS: Final[dict[Provider, str]] = {
	Provider.OPENAI: "OPENAI_API_KEY",
	Provider.ANTHROPIC: "ANTHROPIC_API_KEY",
	Provider.GOOGLE: "GOOGLE_API_KEY",
	Provider.GROQ: "GROQ_API_KEY",
}


def service_name(provider: Provider) -> str:
	"""Keychain service name used for a provider."""
	return f"gitvibe-{provider.value}"


class CredentialStore:
	"""
	Looks up and stores provider API keys.

	Environment variables take precedence over the keychain, so CI runs and
	``.env`` files work without touching the keychain.

	"""

	def get_secret(self, provider: Provider) -> str | None:
		"""
		Get the API key for a provider.

		Args:
		    provider: Provider to look up

		Returns:
		    The key, or None if neither the environment nor the keychain has one

		"""
		env_value = os.environ.get(ENV_VARS[provider], "").strip()
		if env_value:
			logger.debug("Using %s from environment", ENV_VARS[provider])
			return env_value

		try:
			secret = keyring.get_password(service_name(provider), KEYRING_ACCOUNT)
		except KeyringError as e:
			logger.warning("Could not read %s API key from keychain: %s", provider.value, e)
			return None
		return secret or None

	def require_secret(self, provider: Provider) -> str:
		"""
		Get the API key for a provider, failing if there is none.

		Raises:
		    ConfigurationError: If no key is available

		"""
		secret = self.get_secret(provider)
		if not secret:
			msg = (
				f"No API key found for {provider.value}. Set {ENV_VARS[provider]} "
				"or run 'gitvibe init' to store one."
			)
			raise ConfigurationError(msg)
		return secret

	def set_secret(self, provider: Provider, secret: str) -> None:
		"""
		Store an API key in the keychain.

		Raises:
		    ConfigurationError: If the keychain rejects the write

		"""
		try:
			keyring.set_password(service_name(provider), KEYRING_ACCOUNT, secret)
		except KeyringError as e:
			msg = f"Could not store {provider.value} API key in the keychain: {e}"
			raise ConfigurationError(msg) from e
		logger.debug("Stored %s API key in keychain", provider.value)

	def delete_secret(self, provider: Provider) -> bool:
		"""
		Remove a stored API key from the keychain.

		Returns:
		    True if a key was removed

		"""
		try:
			keyring.delete_password(service_name(provider), KEYRING_ACCOUNT)
		except PasswordDeleteError:
			return False
		except KeyringError as e:
			logger.warning("Could not delete %s API key from keychain: %s", provider.value, e)
			return False
		return True
