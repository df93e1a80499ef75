"""Base ABC for version-control hosting providers."""

from abc import ABC, abstractmethod

from release_notes_manager.release_notes.models import Issue, ItemStateFilter, Milestone


class VcsProviderBase(ABC):
    """Capabilities the release notes builder needs from a hosting provider.

    One implementation exists per hosting platform. Implementations own
    authentication, pagination, timeouts and retry policy; failures they
    raise reach the caller of the builder unmodified.
    """

    # Commit Operations
    @abstractmethod
    async def get_commits_count(self, owner: str, repository: str, from_ref: str | None, to_ref: str) -> int:
        """Count the commits reachable from to_ref but not from from_ref.

        A from_ref of None counts every commit reachable from to_ref.
        """
        pass

    @abstractmethod
    def get_commits_url(self, owner: str, repository: str, from_ref: str | None, to_ref: str) -> str:
        """Build the web URL comparing two refs, without any network call."""
        pass

    # Issue Operations
    @abstractmethod
    async def get_issues(
        self,
        owner: str,
        repository: str,
        milestone_number: int,
        state: ItemStateFilter = ItemStateFilter.CLOSED,
    ) -> list[Issue]:
        """List issues and pull requests assigned to a milestone."""
        pass

    # Milestone Operations
    @abstractmethod
    async def get_milestones(self, owner: str, repository: str, state: ItemStateFilter = ItemStateFilter.ALL) -> list[Milestone]:
        """List milestones for a repository."""
        pass

    async def close(self) -> None:
        """Release any network resources held by the provider."""
        return None
