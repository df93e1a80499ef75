"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import httpx
import structlog
import typer
from dotenv import load_dotenv
from githubkit.exception import GitHubException
from typer import Argument, Option
from typing_extensions import Annotated

from release_notes_manager.configuration.env import Settings
from release_notes_manager.configuration.exceptions import ConfigurationFileError, ProviderAuthenticationConfigurationUndefinedError
from release_notes_manager.configuration.models import ProviderType
from release_notes_manager.configuration.reconcile import validate_provider_authentication_configuration
from release_notes_manager.providers import VcsProviderBase, create_provider
from release_notes_manager.release_notes.builder import ReleaseNotesBuilder
from release_notes_manager.release_notes.exceptions import ReleaseNotesError
from release_notes_manager.release_notes.models import ItemStateFilter
from release_notes_manager.utils.logging import configure_logging
from release_notes_manager.utils.repository import split_repository
from release_notes_manager.utils.yaml import dump_default_release_notes_config, load_release_notes_config

load_dotenv()

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Failures reported to the user with a non-zero exit status instead of a traceback.
REPORTED_ERRORS = (
    ReleaseNotesError,
    ConfigurationFileError,
    ProviderAuthenticationConfigurationUndefinedError,
    GitHubException,
    httpx.HTTPError,
    RuntimeError,
    ValueError,
)

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Generate release notes from milestones.")


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    provider: Annotated[ProviderType | None, Option(envvar="PROVIDER", help="Hosting provider of the repository.")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    gitlab_api_url: Annotated[str | None, Option(envvar="GITLAB_API_URL", help="GitLab API URL.")] = None,
    gitlab_token: Annotated[str | None, Option(envvar="GITLAB_TOKEN", help="GitLab access token.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Collect provider settings, falling back to the environment and .env file."""
    settings = Settings()
    configure_logging(debug=debug or settings.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj["provider"] = provider or settings.PROVIDER
    ctx.obj["github_api_url"] = github_api_url or settings.GITHUB_API_URL
    ctx.obj["github_pat_token"] = github_pat_token or settings.GITHUB_PAT_TOKEN
    ctx.obj["github_app_id"] = github_app_id or settings.GITHUB_APP_ID
    ctx.obj["github_app_private_key_path"] = github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    ctx.obj["gitlab_api_url"] = gitlab_api_url or settings.GITLAB_API_URL
    ctx.obj["gitlab_token"] = gitlab_token or settings.GITLAB_TOKEN
    ctx.obj["default_config_path"] = settings.RELEASE_NOTES_CONFIG


async def _with_provider(ctx: typer.Context, owner: str, repository: str, action: Callable[[VcsProviderBase], Awaitable[T]]) -> T:
    """Create the configured provider, run an action with it and close it afterwards."""
    github_auth_type = validate_provider_authentication_configuration(
        provider=ctx.obj["provider"],
        github_pat_token=ctx.obj["github_pat_token"],
        github_app_id=ctx.obj["github_app_id"],
        github_app_private_key_path=ctx.obj["github_app_private_key_path"],
        gitlab_token=ctx.obj["gitlab_token"],
    )
    provider = await create_provider(
        provider=ctx.obj["provider"],
        owner=owner,
        repository=repository,
        github_auth_type=github_auth_type,
        github_pat_token=ctx.obj["github_pat_token"],
        github_app_id=ctx.obj["github_app_id"],
        github_app_private_key_path=ctx.obj["github_app_private_key_path"],
        github_api_url=ctx.obj["github_api_url"],
        gitlab_token=ctx.obj["gitlab_token"],
        gitlab_api_url=ctx.obj["gitlab_api_url"],
    )
    try:
        return await action(provider)
    finally:
        await provider.close()


def _write_output(content: str, output: Path | None) -> None:
    """Write the document to a file, or to standard output when no file is given."""
    if output is None:
        typer.echo(content, nl=False)
        return
    output.write_text(content, encoding="utf-8")
    typer.echo(f"Release notes written to {output}", err=True)


def _run(ctx: typer.Context, repo: str, config_path: Path | None, action: Callable[[ReleaseNotesBuilder, str, str], Awaitable[str]]) -> str:
    """Resolve repository and configuration, then run a builder action, mapping failures to exit status 1."""
    try:
        owner, repository = split_repository(repo)
        config = load_release_notes_config(config_path or ctx.obj["default_config_path"])
        return asyncio.run(
            _with_provider(ctx, owner, repository, lambda provider: action(ReleaseNotesBuilder(provider, config), owner, repository))
        )
    except REPORTED_ERRORS as e:
        logger.debug("Release notes command failed", error_type=type(e).__name__, exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


@typer_app.command(name="create")
def create_cli(
    ctx: typer.Context,
    repo: Annotated[str, Argument(envvar="REPO", help="Repository name (owner/repo).")],
    milestone: Annotated[str, Argument(help="Title of the milestone to create release notes for.")],
    config_path: Annotated[Path | None, Option("--config", envvar="RELEASE_NOTES_CONFIG", help="Path to the release notes configuration file.")] = None,
    output: Annotated[Path | None, Option(help="File to write the release notes to. Defaults to standard output.")] = None,
) -> None:
    """Create release notes for a single milestone."""
    document = _run(ctx, repo, config_path, lambda builder, owner, repository: builder.build_release_notes(owner, repository, milestone))
    _write_output(document, output)


@typer_app.command(name="export")
def export_cli(
    ctx: typer.Context,
    repo: Annotated[str, Argument(envvar="REPO", help="Repository name (owner/repo).")],
    config_path: Annotated[Path | None, Option("--config", envvar="RELEASE_NOTES_CONFIG", help="Path to the release notes configuration file.")] = None,
    output: Annotated[Path | None, Option(help="File to write the release notes to. Defaults to standard output.")] = None,
    state: Annotated[ItemStateFilter, Option(help="Only export milestones in this state.")] = ItemStateFilter.CLOSED,
) -> None:
    """Export release notes for every milestone, newest first."""
    document = _run(ctx, repo, config_path, lambda builder, owner, repository: builder.export_release_notes(owner, repository, state))
    _write_output(document, output)


@typer_app.command(name="init")
def init_cli(
    ctx: typer.Context,
    config_path: Annotated[Path | None, Option("--config", envvar="RELEASE_NOTES_CONFIG", help="Path of the configuration file to create.")] = None,
    force: Annotated[bool, Option(help="Overwrite an existing configuration file.")] = False,
) -> None:
    """Write the default release notes configuration file."""
    path: Path = config_path or ctx.obj["default_config_path"]
    if path.exists() and not force:
        typer.echo(f"Configuration file already exists: {path.absolute()} (use --force to overwrite)", err=True)
        raise typer.Exit(1)
    dump_default_release_notes_config(path)
    typer.echo(f"Default configuration written to {path}")


if __name__ == "__main__":
    typer_app()
