"""Thin wrappers around azure-keyvault-secrets so callers can swap the client in tests."""

from __future__ import annotations

import logging

from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import SecretClient

logger = logging.getLogger(__name__)


class SecretClientFactory:
    """Build a SecretClient for a vault using the ambient Azure credential chain."""

    def create(self, vault_uri: str) -> SecretClient:
        return SecretClient(vault_url=vault_uri, credential=DefaultAzureCredential())


class KeyVaultSecretReader:
    def __init__(self, factory: SecretClientFactory | None = None) -> None:
        self._factory = factory or SecretClientFactory()

    def read_secret(self, vault_uri: str, secret_name: str) -> str | None:
        """Return the current value of `secret_name`, or None when the vault holds no value."""
        client = self._factory.create(vault_uri)
        secret = client.get_secret(secret_name)
        logger.debug("Read secret name=%s from vault=%s", secret_name, vault_uri)
        return secret.value
