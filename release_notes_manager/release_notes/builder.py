"""Main release notes building orchestration."""

import asyncio
from typing import TYPE_CHECKING

import structlog

from ..schemas.config import ReleaseNotesConfig
from .exceptions import InvalidReleaseError
from .grouping import filter_excluded_issues, group_issues, validate_issue_labels
from .markdown import MarkdownWriter
from .models import ItemStateFilter, Milestone, ReleaseNotesData
from .versions import MilestoneVersionResolver

if TYPE_CHECKING:
    from ..providers.abc import VcsProviderBase

logger = structlog.get_logger(__name__)


class ReleaseNotesBuilder:
    """Builds the release notes document for a milestone.

    The builder holds no per-invocation state, so a single instance may build
    notes for several milestones or repositories concurrently. All data for
    one invocation lives in local variables and is discarded once rendered.
    """

    def __init__(self, provider: "VcsProviderBase", config: ReleaseNotesConfig) -> None:
        """Initialize with the hosting provider and the release notes configuration.

        Args:
            provider: Implementation of the hosting provider port
            config: Release notes configuration, treated as immutable
        """
        self.provider = provider
        self.config = config
        self.writer = MarkdownWriter(config.create)

    async def build_release_notes(self, owner: str, repository: str, milestone_title: str) -> str:
        """Build the release notes document for a milestone.

        Args:
            owner: Repository owner (user, organization or GitLab namespace)
            repository: Repository name
            milestone_title: Exact title of the milestone to document

        Returns:
            The rendered markdown document

        Raises:
            MilestoneNotFoundError: If no milestone has this title
            InvalidMilestoneVersionError: If the milestone title is not a version
            InvalidReleaseError: If the milestone has neither commits nor eligible issues
        """
        log = logger.bind(owner=owner, repository=repository, milestone=milestone_title)

        milestones = await self.provider.get_milestones(owner, repository, ItemStateFilter.ALL)
        resolver = MilestoneVersionResolver(owner, repository)
        milestone = resolver.find_milestone(milestones, milestone_title)
        previous_milestone = resolver.find_previous_milestone(milestones, milestone)

        notes = await self.collect_release_notes_data(owner, repository, milestone, previous_milestone)
        document = self.writer.render(notes)
        log.info("Built release notes", commits=notes.commit_count, issues=notes.issue_count, length=len(document))
        return document

    async def collect_release_notes_data(
        self,
        owner: str,
        repository: str,
        milestone: Milestone,
        previous_milestone: Milestone | None,
    ) -> ReleaseNotesData:
        """Fetch, validate and group everything needed to render one milestone."""
        from_ref = previous_milestone.title if previous_milestone is not None else None
        to_ref = milestone.title

        # Both fetches must complete before anything is combined. A failure in
        # either propagates as-is and the other result is discarded.
        commit_count, issues = await asyncio.gather(
            self.provider.get_commits_count(owner, repository, from_ref, to_ref),
            self.provider.get_issues(owner, repository, milestone.number, ItemStateFilter.CLOSED),
        )
        logger.debug("Fetched milestone content", milestone=milestone.title, from_ref=from_ref, commits=commit_count, issues=len(issues))

        if commit_count == 0 and not issues:
            raise InvalidReleaseError(f"Milestone '{milestone.title}' has no commits and no closed issues, so it is not a publishable release")

        eligible_issues = filter_excluded_issues(issues, self.config)
        validate_issue_labels(eligible_issues, self.config)
        if commit_count == 0 and not eligible_issues:
            raise InvalidReleaseError(f"Milestone '{milestone.title}' has no commits and every closed issue is excluded from release notes")

        return ReleaseNotesData(
            milestone=milestone,
            previous_milestone=previous_milestone,
            commit_count=commit_count,
            commits_url=self.provider.get_commits_url(owner, repository, from_ref, to_ref),
            categories=group_issues(eligible_issues, self.config),
        )

    async def export_release_notes(self, owner: str, repository: str, state: ItemStateFilter = ItemStateFilter.CLOSED) -> str:
        """Build release notes for every versioned milestone in a state, newest first.

        Each milestone is built independently and concurrently. Milestones that
        are not publishable releases are skipped; any other failure aborts the
        export.
        """
        all_milestones, state_milestones = await asyncio.gather(
            self.provider.get_milestones(owner, repository, ItemStateFilter.ALL),
            self.provider.get_milestones(owner, repository, state),
        )
        resolver = MilestoneVersionResolver(owner, repository)
        selected = [milestone for _, milestone in reversed(resolver.versioned_milestones(state_milestones))]

        async def build_section(milestone: Milestone) -> str | None:
            previous_milestone = resolver.find_previous_milestone(all_milestones, milestone)
            try:
                notes = await self.collect_release_notes_data(owner, repository, milestone, previous_milestone)
            except InvalidReleaseError as e:
                logger.warning("Skipping milestone in export", milestone=milestone.title, reason=str(e))
                return None
            return f"## {milestone.title}\n\n{self.writer.render(notes)}"

        sections = await asyncio.gather(*(build_section(milestone) for milestone in selected))
        exported = [section for section in sections if section is not None]
        logger.info("Exported release notes", owner=owner, repository=repository, milestones=len(exported))
        return "\n".join(exported)


async def build_release_notes(
    provider: "VcsProviderBase",
    owner: str,
    repository: str,
    milestone_title: str,
    config: ReleaseNotesConfig,
) -> str:
    """Build the release notes document for a milestone with the given configuration."""
    return await ReleaseNotesBuilder(provider, config).build_release_notes(owner, repository, milestone_title)
