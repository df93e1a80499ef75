"""GitLab provider built on httpx."""

from datetime import date, datetime, time
from typing import Any, Self
from urllib.parse import quote

import httpx
import structlog

from release_notes_manager.release_notes.models import Issue, ItemStateFilter, Label, Milestone
from release_notes_manager.utils.constants import DEFAULT_GITLAB_API_URL, DEFAULT_PAGE_SIZE
from release_notes_manager.utils.retry import retry_on_rate_limit

from .abc import VcsProviderBase

logger = structlog.get_logger(__name__)

GITLAB_MILESTONE_STATES = {
    ItemStateFilter.OPEN: "active",
    ItemStateFilter.CLOSED: "closed",
}

GITLAB_ISSUE_STATES = {
    ItemStateFilter.OPEN: "opened",
    ItemStateFilter.CLOSED: "closed",
}


def gitlab_web_url_from_api_url(gitlab_api_url: str) -> str:
    """Derive the web UI base URL from a GitLab REST API URL."""
    api_url = gitlab_api_url.rstrip("/")
    if api_url.endswith("/api/v4"):
        return api_url[: -len("/api/v4")]
    return api_url


def _parse_due_date(value: str | None) -> datetime | None:
    """GitLab due dates are plain ISO dates; treat them as midnight."""
    if not value:
        return None
    return datetime.combine(date.fromisoformat(value), time.min)


def project_path(owner: str, repository: str) -> str:
    """URL-encoded 'namespace/project' path used as the GitLab project id."""
    return quote(f"{owner}/{repository}", safe="")


class GitLabProvider(VcsProviderBase):
    """Hosting provider for gitlab.com and self-managed GitLab instances.

    Milestone numbers are GitLab's global milestone ids. Only issues are
    listed for a milestone; merge requests use a separate number space.
    """

    def __init__(self, client: httpx.AsyncClient, gitlab_api_url: str = DEFAULT_GITLAB_API_URL) -> None:
        """Initialize the provider with an httpx client whose base URL is the GitLab API URL."""
        self.client = client
        self.web_url = gitlab_web_url_from_api_url(gitlab_api_url)

    @classmethod
    def create(cls, gitlab_token: str, gitlab_api_url: str = DEFAULT_GITLAB_API_URL, timeout: float = 30.0) -> Self:
        """Create a provider authenticated with a personal, project or group access token."""
        if not gitlab_token:
            raise RuntimeError("GitLab authentication requires gitlab_token in config.")
        logger.info("Creating client for GitLab instance", gitlab_api_url=gitlab_api_url)
        client = httpx.AsyncClient(
            base_url=gitlab_api_url.rstrip("/") + "/",
            headers={"PRIVATE-TOKEN": gitlab_token},
            timeout=timeout,
        )
        return cls(client, gitlab_api_url)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    @retry_on_rate_limit()
    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        return response

    async def _get_all_pages(self, path: str, params: dict[str, Any] | None = None, per_page: int = DEFAULT_PAGE_SIZE) -> list[dict[str, Any]]:
        """Fetch every page of a paginated GitLab listing."""
        items: list[dict[str, Any]] = []
        page: str | None = "1"
        while page:
            response = await self._get(path, params={**(params or {}), "per_page": per_page, "page": page})
            items.extend(response.json())
            page = response.headers.get("x-next-page") or None
        return items

    # Commit Operations
    async def get_commits_count(self, owner: str, repository: str, from_ref: str | None, to_ref: str) -> int:
        """Count commits between two refs using the compare API, or the full history of to_ref."""
        project = project_path(owner, repository)
        if from_ref is None:
            commits = await self._get_all_pages(f"projects/{project}/repository/commits", params={"ref_name": to_ref})
            total_commits = len(commits)
        else:
            response = await self._get(f"projects/{project}/repository/compare", params={"from": from_ref, "to": to_ref})
            total_commits = len(response.json().get("commits", []))
        logger.debug("Counted commits between refs", owner=owner, repository=repository, from_ref=from_ref, to_ref=to_ref, total=total_commits)
        return total_commits

    def get_commits_url(self, owner: str, repository: str, from_ref: str | None, to_ref: str) -> str:
        """Build the compare URL, or the commit list of to_ref when there is no previous ref."""
        if from_ref is None:
            return f"{self.web_url}/{owner}/{repository}/-/commits/{to_ref}"
        return f"{self.web_url}/{owner}/{repository}/-/compare/{from_ref}...{to_ref}"

    # Issue Operations
    async def get_issues(
        self,
        owner: str,
        repository: str,
        milestone_number: int,
        state: ItemStateFilter = ItemStateFilter.CLOSED,
    ) -> list[Issue]:
        """List the issues of a milestone, filtered by state on the client side."""
        raw_issues = await self._get_all_pages(f"projects/{project_path(owner, repository)}/milestones/{milestone_number}/issues")
        wanted_state = GITLAB_ISSUE_STATES.get(state)
        issues = [
            Issue(
                number=raw["iid"],
                title=raw["title"],
                html_url=raw.get("web_url") or "",
                labels=tuple(Label(name=name) for name in dict.fromkeys(raw.get("labels") or [])),
            )
            for raw in raw_issues
            if wanted_state is None or raw.get("state") == wanted_state
        ]
        logger.info("Fetched milestone issues", owner=owner, repository=repository, milestone_number=milestone_number, total=len(issues))
        return issues

    # Milestone Operations
    async def get_milestones(self, owner: str, repository: str, state: ItemStateFilter = ItemStateFilter.ALL) -> list[Milestone]:
        """List all milestones for a project."""
        params: dict[str, Any] = {}
        if state in GITLAB_MILESTONE_STATES:
            params["state"] = GITLAB_MILESTONE_STATES[state]
        raw_milestones = await self._get_all_pages(f"projects/{project_path(owner, repository)}/milestones", params=params)
        logger.info("Fetched milestones", owner=owner, repository=repository, state=state.value, total=len(raw_milestones))
        return [
            Milestone(
                number=raw["id"],
                title=raw["title"],
                html_url=raw.get("web_url") or "",
                description=raw.get("description"),
                state=raw.get("state"),
                due_on=_parse_due_date(raw.get("due_date")),
            )
            for raw in raw_milestones
        ]
