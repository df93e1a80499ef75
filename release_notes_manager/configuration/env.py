"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from release_notes_manager.configuration.models import ProviderType
from release_notes_manager.utils.constants import DEFAULT_CONFIG_PATH, DEFAULT_GITHUB_API_URL, DEFAULT_GITLAB_API_URL


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    PROVIDER: ProviderType = ProviderType.GITHUB
    RELEASE_NOTES_CONFIG: Path = Path(DEFAULT_CONFIG_PATH)

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None

    # GitLab settings
    GITLAB_API_URL: str = DEFAULT_GITLAB_API_URL
    GITLAB_TOKEN: str | None = None
