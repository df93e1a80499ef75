"""Version-control hosting provider implementations."""

from pathlib import Path

from release_notes_manager.configuration.models import GitHubAuthenticationType, ProviderType
from release_notes_manager.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_GITLAB_API_URL

from .abc import VcsProviderBase
from .github import GitHubProvider
from .gitlab import GitLabProvider

__all__ = [
    "VcsProviderBase",
    "GitHubProvider",
    "GitLabProvider",
    "create_provider",
]


async def create_provider(
    provider: ProviderType,
    owner: str,
    repository: str,
    github_auth_type: GitHubAuthenticationType | None = None,
    github_pat_token: str | None = None,
    github_app_id: int | None = None,
    github_app_private_key_path: Path | None = None,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    gitlab_token: str | None = None,
    gitlab_api_url: str = DEFAULT_GITLAB_API_URL,
) -> VcsProviderBase:
    """Create the provider implementation for the selected hosting platform."""
    if provider == ProviderType.GITLAB:
        return GitLabProvider.create(gitlab_token=gitlab_token or "", gitlab_api_url=gitlab_api_url)
    return await GitHubProvider.create(
        owner=owner,
        repository=repository,
        github_auth_type=github_auth_type or GitHubAuthenticationType.PAT,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_api_url=github_api_url,
    )
