from __future__ import annotations

import logging
from pathlib import Path

from travelbook.config import AppConfig

from .client import KeyVaultSecretReader

logger = logging.getLogger(__name__)

DOCKER_CLIENT_SECRET_NAME = "travelbook_azure_client_secret"


class AzureAdSecretLoader:
    """
    Fill `AzureAd.ClientSecret` from Key Vault.

    Notes:
    - Both `KeyVault.VaultUri` and `KeyVault.AzureAdClientSecret` must be set,
      otherwise the config is returned untouched (local runs, Docker secrets).
    - The config is immutable; a new AppConfig is returned.
    """

    def __init__(self, reader: KeyVaultSecretReader | None = None) -> None:
        self._reader = reader or KeyVaultSecretReader()

    def load(self, config: AppConfig) -> AppConfig:
        if config is None:
            raise TypeError("config must not be None")

        vault_uri = config.key_vault.vault_uri
        secret_name = config.key_vault.azure_ad_client_secret
        if not vault_uri or not secret_name:
            logger.info("Key Vault not configured; keeping AzureAd client secret as is")
            return config

        secret = self._reader.read_secret(vault_uri, secret_name)
        if secret is None:
            raise RuntimeError(f"Key Vault secret {secret_name!r} has no value")

        logger.info("AzureAd client secret loaded from Key Vault secret=%s", secret_name)
        return config.with_client_secret(secret)


def read_docker_secret(name: str, secrets_dir: str | Path = "/run/secrets") -> str:
    path = Path(secrets_dir) / name
    if not path.is_file():
        raise FileNotFoundError(f"Docker secret not found: {path}")
    return path.read_text(encoding="utf-8").strip()


def load_client_secret(
    config: AppConfig,
    secrets_dir: str | Path = "/run/secrets",
    loader: AzureAdSecretLoader | None = None,
) -> AppConfig:
    """
    Startup secret resolution.

    With ``UseEntraID`` the secret is first taken from the Docker secret
    file; Key Vault, when configured, has the last word.
    """
    if config.use_entra_id:
        config = config.with_client_secret(read_docker_secret(DOCKER_CLIENT_SECRET_NAME, secrets_dir))
        logger.info("AzureAd client secret loaded from Docker secret")
    return (loader or AzureAdSecretLoader()).load(config)
