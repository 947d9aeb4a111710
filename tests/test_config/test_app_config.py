"""Tests for the YAML app config and env settings."""

import pytest

from travelbook.config import AppConfig, load_app_config
from travelbook.settings import Settings


def _write(tmp_path, text: str):
    path = tmp_path / "appsettings.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_app_config_reads_pascal_case_sections(tmp_path):
    path = _write(
        tmp_path,
        """
AzureAd:
  TenantId: tenant-1
  ClientId: client-1
  Domain: contoso.com
  SignedOutRedirectUri: https://app.contoso.com/
KeyVault:
  VaultUri: https://kv.vault.azure.net/
  AzureAdClientSecret: travelbook-client-secret
MicrosoftGraph:
  Scopes: user.read user.readwrite.all
UseEntraID: true
""",
    )
    cfg = load_app_config(path)
    assert cfg.azure_ad.tenant_id == "tenant-1"
    assert cfg.azure_ad.client_id == "client-1"
    assert cfg.azure_ad.domain == "contoso.com"
    assert cfg.azure_ad.callback_path == "/signin-oidc"
    assert cfg.azure_ad.authority == "https://login.microsoftonline.com/tenant-1"
    assert cfg.key_vault.vault_uri == "https://kv.vault.azure.net/"
    assert cfg.key_vault.azure_ad_client_secret == "travelbook-client-secret"
    assert cfg.microsoft_graph.scopes == ["user.read", "user.readwrite.all"]
    assert cfg.microsoft_graph.base_url == "https://graph.microsoft.com/v1.0"
    assert cfg.use_entra_id is True


def test_load_app_config_defaults_for_empty_file(tmp_path):
    cfg = load_app_config(_write(tmp_path, ""))
    assert cfg.use_entra_id is False
    assert cfg.key_vault.vault_uri is None
    assert cfg.microsoft_graph.scopes == ["user.read"]


def test_load_app_config_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_app_config(tmp_path / "missing.yaml")


def test_load_app_config_rejects_non_mapping(tmp_path):
    with pytest.raises(ValueError, match="mapping"):
        load_app_config(_write(tmp_path, "- a\n- b\n"))


def test_with_client_secret_returns_copy():
    cfg = AppConfig()
    updated = cfg.with_client_secret("s3cret")
    assert updated.azure_ad.client_secret == "s3cret"
    assert cfg.azure_ad.client_secret is None


def test_settings_config_path_override(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_CONFIG_PATH", str(tmp_path / "x.yaml"))
    assert Settings().resolved_config_path() == tmp_path / "x.yaml"


def test_settings_default_config_path(monkeypatch):
    monkeypatch.delenv("APP_CONFIG_PATH", raising=False)
    path = Settings().resolved_config_path()
    assert path.parts[-2:] == ("config", "appsettings.yaml")
