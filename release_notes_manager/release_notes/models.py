"""Data models for release notes generation."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict

from .exceptions import InvalidMilestoneVersionError


class ItemStateFilter(str, Enum):
    """State filter for issues and milestones."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class Label(BaseModel):
    """A label attached to an issue or pull request."""

    model_config = ConfigDict(frozen=True)

    name: str


class Issue(BaseModel):
    """A snapshot of an issue or pull request assigned to a milestone."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    html_url: str
    labels: tuple[Label, ...] = ()

    @property
    def label_names(self) -> list[str]:
        """Names of the labels attached to the issue."""
        return [label.name for label in self.labels]


class Milestone(BaseModel):
    """A snapshot of a milestone representing a planned release."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    html_url: str = ""
    description: str | None = None
    state: str | None = None
    due_on: datetime | None = None
    closed_at: datetime | None = None

    @property
    def version(self) -> Version:
        """The semantic version parsed from the milestone title."""
        try:
            return Version(self.title)
        except InvalidVersion as exc:
            raise InvalidMilestoneVersionError(self.title) from exc


@dataclass
class IssueCategory:
    """Issues that share a display heading."""

    heading: str
    plural: str
    issues: list[Issue] = field(default_factory=list)

    @property
    def display_heading(self) -> str:
        """The plural heading when the category holds more than one issue."""
        return self.plural if len(self.issues) > 1 else self.heading


@dataclass
class ReleaseNotesData:
    """Everything the markdown writer needs to render one release."""

    milestone: Milestone
    previous_milestone: Milestone | None
    commit_count: int
    commits_url: str
    categories: list[IssueCategory]

    @property
    def issue_count(self) -> int:
        """Total number of issues across all categories."""
        return sum(len(category.issues) for category in self.categories)
