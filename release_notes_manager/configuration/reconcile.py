"""Reconcile provider authentication configuration."""

from pathlib import Path

from release_notes_manager.configuration.exceptions import ProviderAuthenticationConfigurationUndefinedError
from release_notes_manager.configuration.models import GitHubAuthenticationType, ProviderType


def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.

    Raises:
        ProviderAuthenticationConfigurationUndefinedError: If neither or both of PAT and App configurations are defined,
            or the App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    if github_pat_token and (github_app_id or github_app_private_key_path):
        raise ProviderAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if github_app_id and github_app_private_key_path:
        return GitHubAuthenticationType.APP

    if github_app_id or github_app_private_key_path:
        missing = (
            "GitHub App private key path (command line option --github-app-private-key-path, environment variable GITHUB_APP_PRIVATE_KEY_PATH)"
            if github_app_id
            else "GitHub App ID (command line option --github-app-id, environment variable GITHUB_APP_ID)"
        )
        raise ProviderAuthenticationConfigurationUndefinedError(f"Incomplete GitHub App configuration - missing settings include {missing}")

    raise ProviderAuthenticationConfigurationUndefinedError(
        "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
    )


def validate_provider_authentication_configuration(
    provider: ProviderType,
    github_pat_token: str | None = None,
    github_app_id: int | None = None,
    github_app_private_key_path: Path | None = None,
    gitlab_token: str | None = None,
) -> GitHubAuthenticationType | None:
    """Validates the authentication configuration of the selected provider.

    Returns:
        The GitHub authentication type for GitHub, None for GitLab (token only).
    """
    if provider == ProviderType.GITHUB:
        return validate_github_authentication_configuration(github_pat_token, github_app_id, github_app_private_key_path)

    if not gitlab_token:
        raise ProviderAuthenticationConfigurationUndefinedError(
            "No GitLab authentication configuration provided. Please provide a token "
            "(command line option --gitlab-token, environment variable GITLAB_TOKEN)."
        )
    return None
