"""Fixtures for unit tests."""

from typing import Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from release_notes_manager.providers.abc import VcsProviderBase
from release_notes_manager.providers.github import GitHubProvider
from release_notes_manager.release_notes.models import Issue, Label, Milestone

OWNER = "TestUser"
REPOSITORY = "FakeRepository"


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


def create_issue(number: int, *labels: str) -> Issue:
    """Create an issue titled 'Issue <number>' with the given labels."""
    return Issue(
        number=number,
        title=f"Issue {number}",
        html_url=f"http://example.com/{number}",
        labels=tuple(Label(name=label) for label in labels),
    )


def create_milestone(title: str, number: int = 1, **kwargs: object) -> Milestone:
    """Create a milestone linking to the milestone's issue search."""
    return Milestone(
        number=number,
        title=title,
        html_url=f"https://github.com/gep13/FakeRepository/issues?q=milestone%3A{title}",
        **kwargs,  # type: ignore[arg-type]
    )


@pytest.fixture
def issue_factory() -> Callable[..., Issue]:
    """Factory for test issues."""
    return create_issue


@pytest.fixture
def milestone_factory() -> Callable[..., Milestone]:
    """Factory for test milestones."""
    return create_milestone


@pytest.fixture
def provider_factory() -> Callable[..., MagicMock]:
    """Factory for a mocked provider serving fixed milestones, issues and commit count.

    Comparison URLs are built with the real GitHub URL construction.
    """

    def _create(commits: int, issues: list[Issue], milestones: list[Milestone] | None = None) -> MagicMock:
        provider = MagicMock(spec=VcsProviderBase)
        provider.get_milestones = AsyncMock(return_value=milestones if milestones is not None else [create_milestone("1.2.3")])
        provider.get_commits_count = AsyncMock(return_value=commits)
        provider.get_issues = AsyncMock(return_value=issues)
        provider.get_commits_url = MagicMock(side_effect=GitHubProvider(MagicMock()).get_commits_url)
        provider.close = AsyncMock()
        return provider

    return _create
