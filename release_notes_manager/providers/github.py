"""GitHub provider built on the githubkit library."""

from typing import Any, Self

import structlog
from githubkit import Response
from githubkit.versions.latest.models import CommitComparison
from githubkit.versions.latest.models import Issue as GitHubIssue
from githubkit.versions.latest.models import Milestone as GitHubMilestone

from release_notes_manager.configuration.models import GitHubAuthenticationType
from release_notes_manager.release_notes.models import Issue, ItemStateFilter, Label, Milestone
from release_notes_manager.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_GITHUB_WEB_URL, DEFAULT_PAGE_SIZE
from release_notes_manager.utils.retry import retry_on_rate_limit

from .abc import VcsProviderBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

COMMIT_HISTORY_QUERY = """
query($owner: String!, $repository: String!, $ref: String!) {
  repository(owner: $owner, name: $repository) {
    object(expression: $ref) {
      ... on Commit {
        history {
          totalCount
        }
      }
    }
  }
}
"""


def github_web_url_from_api_url(github_api_url: str) -> str:
    """Derive the web UI base URL from a GitHub or GitHub Enterprise Server API URL."""
    api_url = github_api_url.rstrip("/")
    if api_url == DEFAULT_GITHUB_API_URL:
        return DEFAULT_GITHUB_WEB_URL
    if api_url.endswith("/api/v3"):
        return api_url[: -len("/api/v3")]
    return api_url


def _label_name(label: Any) -> str | None:
    """Labels come back either as plain strings or as label objects."""
    if isinstance(label, str):
        return label
    name = getattr(label, "name", None)
    return name if isinstance(name, str) else None


class GitHubProvider(VcsProviderBase):
    """Hosting provider for GitHub and GitHub Enterprise Server."""

    def __init__(self, client: GitHubClient, github_api_url: str = DEFAULT_GITHUB_API_URL) -> None:
        """Initialize the provider with an already-authenticated client."""
        self.client = client
        self.web_url = github_web_url_from_api_url(github_api_url)

    @classmethod
    async def create(
        cls,
        owner: str,
        repository: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Any = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub provider.

        Args:
            owner: Repository owner, needed to look up a GitHub App installation
            repository: Repository name, needed to look up a GitHub App installation
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubProvider instance
        """
        logger.info("Creating client for GitHub instance", github_api_url=github_api_url, owner=owner, repository=repository)
        client = await get_github_client(
            owner=owner,
            repository=repository,
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_api_url=github_api_url,
        )
        return cls(client, github_api_url)

    # Commit Operations
    @retry_on_rate_limit()
    async def get_commits_count(self, owner: str, repository: str, from_ref: str | None, to_ref: str) -> int:
        """Count commits between two refs using the compare API, or the full history of to_ref."""
        if from_ref is None:
            return await self._get_history_count(owner, repository, to_ref)

        response: Response[CommitComparison] = await self.client.rest.repos.async_compare_commits(
            owner=owner,
            repo=repository,
            basehead=f"{from_ref}...{to_ref}",
            per_page=1,
        )
        total_commits = response.parsed_data.total_commits
        logger.debug("Counted commits between refs", owner=owner, repository=repository, from_ref=from_ref, to_ref=to_ref, total=total_commits)
        return total_commits

    async def _get_history_count(self, owner: str, repository: str, ref: str) -> int:
        """Count every commit reachable from ref with a single GraphQL query."""
        data: dict[str, Any] = await self.client.async_graphql(
            COMMIT_HISTORY_QUERY,
            variables={"owner": owner, "repository": repository, "ref": ref},
        )
        target = (data.get("repository") or {}).get("object")
        if not target or "history" not in target:
            raise ValueError(f"Ref '{ref}' does not resolve to a commit in {owner}/{repository}")
        total_commits = int(target["history"]["totalCount"])
        logger.debug("Counted commit history", owner=owner, repository=repository, ref=ref, total=total_commits)
        return total_commits

    def get_commits_url(self, owner: str, repository: str, from_ref: str | None, to_ref: str) -> str:
        """Build the compare URL, or the commit list of to_ref when there is no previous ref."""
        if from_ref is None:
            return f"{self.web_url}/{owner}/{repository}/commits/{to_ref}"
        return f"{self.web_url}/{owner}/{repository}/compare/{from_ref}...{to_ref}"

    # Issue Operations
    @retry_on_rate_limit()
    async def get_issues(
        self,
        owner: str,
        repository: str,
        milestone_number: int,
        state: ItemStateFilter = ItemStateFilter.CLOSED,
        per_page: int = DEFAULT_PAGE_SIZE,
    ) -> list[Issue]:
        """List all issues and pull requests in a milestone, handling pagination."""
        all_issues: list[GitHubIssue] = []
        page: int = 1
        while True:
            response: Response[list[GitHubIssue]] = await self.client.rest.issues.async_list_for_repo(
                owner=owner,
                repo=repository,
                milestone=str(milestone_number),
                state=state.value,
                per_page=per_page,
                page=page,
            )
            issues: list[GitHubIssue] = response.parsed_data
            if not issues:
                break
            all_issues.extend(issues)
            if len(issues) < per_page:
                break
            page += 1

        logger.info("Fetched milestone issues", owner=owner, repository=repository, milestone_number=milestone_number, total=len(all_issues))
        return [self._convert_issue(issue) for issue in all_issues]

    @staticmethod
    def _convert_issue(issue: GitHubIssue) -> Issue:
        names = [_label_name(label) for label in issue.labels]
        return Issue(
            number=issue.number,
            title=issue.title,
            html_url=issue.html_url,
            labels=tuple(Label(name=name) for name in dict.fromkeys(names) if name),
        )

    # Milestone Operations
    @retry_on_rate_limit()
    async def get_milestones(
        self,
        owner: str,
        repository: str,
        state: ItemStateFilter = ItemStateFilter.ALL,
        per_page: int = DEFAULT_PAGE_SIZE,
    ) -> list[Milestone]:
        """List all milestones for a repository, handling pagination."""
        all_milestones: list[GitHubMilestone] = []
        page: int = 1
        while True:
            response: Response[list[GitHubMilestone]] = await self.client.rest.issues.async_list_milestones(
                owner=owner,
                repo=repository,
                state=state.value,
                per_page=per_page,
                page=page,
            )
            milestones: list[GitHubMilestone] = response.parsed_data
            if not milestones:
                break
            all_milestones.extend(milestones)
            if len(milestones) < per_page:
                break
            page += 1

        logger.info("Fetched milestones", owner=owner, repository=repository, state=state.value, total=len(all_milestones))
        return [
            Milestone(
                number=milestone.number,
                title=milestone.title,
                html_url=milestone.html_url,
                description=milestone.description,
                state=milestone.state,
                due_on=milestone.due_on,
                closed_at=milestone.closed_at,
            )
            for milestone in all_milestones
        ]
