"""Milestone lookup and version ordering for release notes."""

from typing import Iterable

import structlog
from packaging.version import Version

from .exceptions import InvalidMilestoneVersionError, MilestoneNotFoundError
from .models import Milestone

logger = structlog.get_logger(__name__)


class MilestoneVersionResolver:
    """Finds the target milestone and its predecessor by semantic version."""

    def __init__(self, owner: str, repository: str) -> None:
        """Initialize with the repository the milestones belong to."""
        self.owner = owner
        self.repository = repository

    def find_milestone(self, milestones: Iterable[Milestone], title: str) -> Milestone:
        """Return the milestone whose title exactly matches.

        Raises:
            MilestoneNotFoundError: If no milestone has this title
        """
        for milestone in milestones:
            if milestone.title == title:
                logger.debug("Resolved milestone", title=title, number=milestone.number)
                return milestone
        raise MilestoneNotFoundError(self.owner, self.repository, title)

    def versioned_milestones(self, milestones: Iterable[Milestone]) -> list[tuple[Version, Milestone]]:
        """Pair milestones with their parsed versions, oldest first.

        Milestones whose titles are not versions (e.g. "Backlog") cannot be
        ordered and are skipped.
        """
        versioned: list[tuple[Version, Milestone]] = []
        for milestone in milestones:
            try:
                versioned.append((milestone.version, milestone))
            except InvalidMilestoneVersionError:
                logger.warning("Skipping milestone whose title is not a version", title=milestone.title)
        return sorted(versioned, key=lambda pair: (pair[0], pair[1].number))

    def find_previous_milestone(self, milestones: Iterable[Milestone], target: Milestone) -> Milestone | None:
        """Return the milestone with the greatest version strictly below the target's.

        Args:
            milestones: All milestones of the repository, in any state
            target: The milestone release notes are built for

        Returns:
            The previous milestone, or None if the target is the first release

        Raises:
            InvalidMilestoneVersionError: If the target title is not a version
        """
        target_version = target.version
        previous: Milestone | None = None
        for version, milestone in self.versioned_milestones(milestones):
            if version < target_version:
                previous = milestone
        logger.debug(
            "Resolved previous milestone",
            target=target.title,
            previous=previous.title if previous is not None else None,
        )
        return previous
