from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_pascal


class _Section(BaseModel):
    # Sections keep the PascalCase keys of the original appsettings file.
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="ignore")


class AzureAdConfig(_Section):
    instance: str = "https://login.microsoftonline.com/"
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str | None = None
    domain: str = ""
    callback_path: str = "/signin-oidc"
    signed_out_callback_path: str = "/signout-callback-oidc"
    signed_out_redirect_uri: str = "/"

    @property
    def authority(self) -> str:
        return f"{self.instance.rstrip('/')}/{self.tenant_id}"


class KeyVaultConfig(_Section):
    vault_uri: str | None = None
    azure_ad_client_secret: str | None = None


class MicrosoftGraphConfig(_Section):
    base_url: str = "https://graph.microsoft.com/v1.0"
    scopes: list[str] = Field(default_factory=lambda: ["user.read"])

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value: Any) -> Any:
        # appsettings usually carries a single space-separated string
        if isinstance(value, str):
            return [s for s in value.split() if s]
        return value


class AppConfig(_Section):
    azure_ad: AzureAdConfig = Field(default_factory=AzureAdConfig)
    key_vault: KeyVaultConfig = Field(default_factory=KeyVaultConfig)
    microsoft_graph: MicrosoftGraphConfig = Field(default_factory=MicrosoftGraphConfig)
    use_entra_id: bool = Field(default=False, alias="UseEntraID")

    def with_client_secret(self, secret: str) -> AppConfig:
        """Return a copy whose AzureAd section carries `secret`."""
        azure_ad = self.azure_ad.model_copy(update={"client_secret": secret})
        return self.model_copy(update={"azure_ad": azure_ad})


def load_app_config(path: Path) -> AppConfig:
    if not path.is_file():
        raise ValueError(f"App config not found: {path}")

    raw_text = path.read_text(encoding="utf-8")
    raw: Any = yaml.safe_load(raw_text) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"App config must be a mapping: {path}")

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid app config {path}: {exc}") from exc
