"""Release notes generation module."""

from .aliases import ResolvedLabel, resolve_label
from .builder import ReleaseNotesBuilder, build_release_notes
from .exceptions import (
    InvalidMilestoneVersionError,
    InvalidReleaseError,
    MilestoneNotFoundError,
    ReleaseNotesError,
)
from .markdown import MarkdownWriter
from .models import (
    Issue,
    IssueCategory,
    ItemStateFilter,
    Label,
    Milestone,
    ReleaseNotesData,
)
from .versions import MilestoneVersionResolver

__all__ = [
    "Issue",
    "IssueCategory",
    "ItemStateFilter",
    "Label",
    "Milestone",
    "ReleaseNotesData",
    "ReleaseNotesError",
    "MilestoneNotFoundError",
    "InvalidReleaseError",
    "InvalidMilestoneVersionError",
    "ResolvedLabel",
    "resolve_label",
    "MilestoneVersionResolver",
    "MarkdownWriter",
    "ReleaseNotesBuilder",
    "build_release_notes",
]
