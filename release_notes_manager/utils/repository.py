"""Contains utility functions for working with repository identifiers."""


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits a repository in 'owner/repo' format into owner and repository.

    GitLab subgroups are supported: everything before the last slash is
    treated as the owner (namespace).
    """
    if repo is None:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    repo = repo.strip("/")
    owner, _, repository = repo.rpartition("/")
    if not owner or not repository or "//" in repo:
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or empty parts.")
    return owner, repository
