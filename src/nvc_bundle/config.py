"""Application configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from nvc_bundle.constants import APP_DESC, DEFAULT_API_URL, NAMING_SYSTEM_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream API
    api_url: str = DEFAULT_API_URL
    app_desc: str = APP_DESC
    naming_system_url: str = NAMING_SYSTEM_URL

    # Outputs
    output_dir: Path = Path(".")
    profile: Literal["simple", "bilingual"] = "bilingual"

    # App Settings
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
