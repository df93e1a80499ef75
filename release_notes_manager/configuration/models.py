"""Models for configuration between CLI arguments and environment variables."""

from enum import Enum


class ProviderType(str, Enum):
    """Enum for supported version-control hosting providers."""

    GITHUB = "github"
    GITLAB = "gitlab"


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"
