"""Unit tests for the configuration.reconcile module."""

from pathlib import Path

import pytest

from release_notes_manager.configuration.exceptions import ProviderAuthenticationConfigurationUndefinedError
from release_notes_manager.configuration.models import GitHubAuthenticationType, ProviderType
from release_notes_manager.configuration.reconcile import (
    validate_github_authentication_configuration,
    validate_provider_authentication_configuration,
)


def test_valid_pat_authentication() -> None:
    """Test that PAT authentication is validated correctly."""
    # When
    auth_type = validate_github_authentication_configuration(
        github_pat_token="test-token",
        github_app_id=None,
        github_app_private_key_path=None,
    )

    # Then
    assert auth_type == GitHubAuthenticationType.PAT


def test_valid_app_authentication() -> None:
    """Test that GitHub App authentication is validated correctly."""
    # When
    auth_type = validate_github_authentication_configuration(
        github_pat_token=None,
        github_app_id=12345,
        github_app_private_key_path=Path("/path/to/key.pem"),
    )

    # Then
    assert auth_type == GitHubAuthenticationType.APP


def test_both_auth_methods_error() -> None:
    """Test that error is raised when both PAT and App authentication are provided."""
    # When/Then
    with pytest.raises(ProviderAuthenticationConfigurationUndefinedError) as exc_info:
        validate_github_authentication_configuration(
            github_pat_token="test-token",
            github_app_id=12345,
            github_app_private_key_path=Path("/path/to/key.pem"),
        )

    assert "Both PAT and GitHub App configurations are defined" in str(exc_info.value)


def test_no_auth_error() -> None:
    """Test that error is raised when no authentication is provided."""
    with pytest.raises(ProviderAuthenticationConfigurationUndefinedError, match="No GitHub authentication configuration provided"):
        validate_github_authentication_configuration(github_pat_token=None, github_app_id=None, github_app_private_key_path=None)


@pytest.mark.parametrize(
    "github_app_id,github_app_private_key_path,missing_setting",
    [
        pytest.param(12345, None, "GitHub App private key path", id="missing private key path"),
        pytest.param(None, Path("/path/to/key.pem"), "GitHub App ID", id="missing app id"),
    ],
)
def test_incomplete_app_authentication(github_app_id: int | None, github_app_private_key_path: Path | None, missing_setting: str) -> None:
    """Test that the missing GitHub App setting is named in the error."""
    with pytest.raises(ProviderAuthenticationConfigurationUndefinedError) as exc_info:
        validate_github_authentication_configuration(
            github_pat_token=None,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
        )

    assert "Incomplete GitHub App configuration" in str(exc_info.value)
    assert missing_setting in str(exc_info.value)


def test_provider_github_delegates_to_github_validation() -> None:
    """Test that the GitHub provider returns the GitHub authentication type."""
    assert validate_provider_authentication_configuration(ProviderType.GITHUB, github_pat_token="test-token") == GitHubAuthenticationType.PAT


def test_provider_gitlab_with_token() -> None:
    """Test that GitLab only needs a token and ignores GitHub settings."""
    assert validate_provider_authentication_configuration(ProviderType.GITLAB, gitlab_token="glpat-test") is None


def test_provider_gitlab_without_token() -> None:
    """Test that GitLab without a token is rejected."""
    with pytest.raises(ProviderAuthenticationConfigurationUndefinedError, match="No GitLab authentication configuration provided"):
        validate_provider_authentication_configuration(ProviderType.GITLAB, github_pat_token="test-token")
