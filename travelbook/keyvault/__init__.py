"""
Secret sources for the Entra client secret.

Key Vault is read through the Azure SDK (``DefaultAzureCredential``); Docker
secrets are plain files mounted under ``/run/secrets``.
"""

from .client import KeyVaultSecretReader, SecretClientFactory
from .loader import AzureAdSecretLoader, load_client_secret, read_docker_secret

__all__ = [
    "AzureAdSecretLoader",
    "KeyVaultSecretReader",
    "SecretClientFactory",
    "load_client_secret",
    "read_docker_secret",
]
