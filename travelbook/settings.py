from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process settings.

    Notes:
    - Directory and Graph configuration lives in the YAML app config (see travelbook.config).
    - These env vars only locate that file and tune the process itself.
    """

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    config_path: str | None = None
    log_level: str = "INFO"
    # Required: signs the session cookie that carries the signed-in principal.
    session_secret: str | None = None
    secrets_dir: str = "/run/secrets"
    session_https_only: bool = True
    # Comma-separated proxy addresses whose X-Forwarded-Proto/For headers are honored; "*" trusts all.
    forwarded_allow_ips: str = "127.0.0.1"

    def resolved_config_path(self) -> Path:
        if self.config_path:
            return Path(self.config_path)

        repo_root = Path(__file__).resolve().parents[1]
        return repo_root / "config" / "appsettings.yaml"


@lru_cache
def get_settings() -> Settings:
    return Settings()
