"""Contains exceptions raised while building release notes."""


class ReleaseNotesError(Exception):
    """Base class for errors raised while building release notes."""

    pass


class MilestoneNotFoundError(ReleaseNotesError):
    """Raised when no milestone matches the requested title."""

    def __init__(self, owner: str, repository: str, title: str) -> None:
        """Initializes the exception with the repository and the missing milestone title."""
        super().__init__(f"Unable to find a milestone with title '{title}' in repository {owner}/{repository}")
        self.owner = owner
        self.repository = repository
        self.title = title


class InvalidReleaseError(ReleaseNotesError):
    """Raised when a milestone does not describe a publishable release.

    This is a policy decision, not a transient failure, so it is never retried.
    """

    pass


class InvalidMilestoneVersionError(ReleaseNotesError, ValueError):
    """Raised when a milestone title cannot be parsed as a version."""

    def __init__(self, title: str) -> None:
        """Initializes the exception with the offending milestone title."""
        super().__init__(f"Milestone title '{title}' is not a valid version")
        self.title = title
