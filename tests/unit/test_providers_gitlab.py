"""Unit tests for the GitLabProvider class."""

from datetime import datetime
from typing import Any, Callable

import httpx
import pytest

from release_notes_manager.providers.gitlab import GitLabProvider, gitlab_web_url_from_api_url, project_path
from release_notes_manager.release_notes.models import ItemStateFilter

API_URL = "https://gitlab.example.com/api/v4"


def make_provider(handler: Callable[[httpx.Request], httpx.Response]) -> GitLabProvider:
    """Create a provider whose HTTP calls are answered by handler."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=API_URL + "/")
    return GitLabProvider(client, API_URL)


def json_response(data: Any, next_page: str = "") -> httpx.Response:
    """Build a JSON response with GitLab pagination headers."""
    return httpx.Response(200, json=data, headers={"x-next-page": next_page})


def test_gitlab_web_url_and_project_path() -> None:
    """Test web URL derivation and project id encoding."""
    assert gitlab_web_url_from_api_url("https://gitlab.com/api/v4/") == "https://gitlab.com"
    assert project_path("group/subgroup", "project") == "group%2Fsubgroup%2Fproject"


def test_get_commits_url() -> None:
    """Test compare URLs with and without a previous ref."""
    provider = make_provider(lambda request: httpx.Response(404))

    assert provider.get_commits_url("group", "project", "1.0.0", "1.1.0") == "https://gitlab.example.com/group/project/-/compare/1.0.0...1.1.0"
    assert provider.get_commits_url("group", "project", None, "1.1.0") == "https://gitlab.example.com/group/project/-/commits/1.1.0"


@pytest.mark.asyncio
async def test_get_commits_count_between_refs() -> None:
    """Test that the compare API commits are counted."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/repository/compare")
        assert request.url.params["from"] == "1.0.0"
        assert request.url.params["to"] == "1.1.0"
        return httpx.Response(200, json={"commits": [{"id": "a"}, {"id": "b"}, {"id": "c"}]})

    provider = make_provider(handler)

    assert await provider.get_commits_count("group", "project", "1.0.0", "1.1.0") == 3
    await provider.close()


@pytest.mark.asyncio
async def test_get_commits_count_paginates_history() -> None:
    """Test that the full history is counted across pages when there is no previous ref."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["ref_name"] == "1.1.0"
        if request.url.params["page"] == "1":
            return json_response([{"id": "a"}, {"id": "b"}], next_page="2")
        return json_response([{"id": "c"}])

    provider = make_provider(handler)

    assert await provider.get_commits_count("group", "project", None, "1.1.0") == 3


@pytest.mark.asyncio
async def test_get_issues_filters_state() -> None:
    """Test that only issues in the requested state are returned."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/milestones/77/issues")
        return json_response(
            [
                {"iid": 1, "title": "Fix crash", "web_url": "https://gitlab.example.com/i/1", "state": "closed", "labels": ["Bug"]},
                {"iid": 2, "title": "Still open", "web_url": "https://gitlab.example.com/i/2", "state": "opened", "labels": []},
            ]
        )

    provider = make_provider(handler)

    issues = await provider.get_issues("group", "project", 77, ItemStateFilter.CLOSED)

    assert [issue.number for issue in issues] == [1]
    assert issues[0].label_names == ["Bug"]


@pytest.mark.asyncio
async def test_get_milestones_maps_state_and_due_date() -> None:
    """Test that the state filter is translated and milestones are converted."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["state"] == "active"
        return json_response([{"id": 77, "iid": 3, "title": "1.1.0", "web_url": "https://gitlab.example.com/m/3", "state": "active", "due_date": "2024-05-01"}])

    provider = make_provider(handler)

    milestones = await provider.get_milestones("group", "project", ItemStateFilter.OPEN)

    assert milestones[0].number == 77
    assert milestones[0].due_on == datetime(2024, 5, 1)


@pytest.mark.asyncio
async def test_http_errors_propagate() -> None:
    """Test that non rate limit failures are raised unchanged."""
    provider = make_provider(lambda request: httpx.Response(401, json={"message": "401 Unauthorized"}))

    with pytest.raises(httpx.HTTPStatusError):
        await provider.get_milestones("group", "project")
