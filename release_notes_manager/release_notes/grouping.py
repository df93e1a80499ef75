"""Filtering, validation and grouping of milestone issues by label."""

from typing import Iterable

import structlog

from ..schemas.config import ReleaseNotesConfig
from .aliases import ResolvedLabel, resolve_label
from .exceptions import InvalidReleaseError
from .models import Issue, IssueCategory

logger = structlog.get_logger(__name__)


def filter_excluded_issues(issues: Iterable[Issue], config: ReleaseNotesConfig) -> list[Issue]:
    """Drop every issue carrying at least one excluded label."""
    excluded_labels = set(config.issue_labels_exclude)
    kept: list[Issue] = []
    for issue in issues:
        matched = excluded_labels.intersection(issue.label_names)
        if matched:
            logger.debug("Excluding issue from release notes", issue_number=issue.number, labels=sorted(matched))
            continue
        kept.append(issue)
    return kept


def validate_issue_labels(issues: Iterable[Issue], config: ReleaseNotesConfig) -> None:
    """Ensure every issue carries an included label, when an include list is configured.

    Raises:
        InvalidReleaseError: If an issue has none of the included labels
    """
    if not config.issue_labels_include:
        return
    included_labels = set(config.issue_labels_include)
    for issue in issues:
        if not included_labels.intersection(issue.label_names):
            raise InvalidReleaseError(
                f"Bad issue #{issue.number} ({issue.html_url}): it must be labelled with one of "
                f"{', '.join(config.issue_labels_include)} or be excluded with one of {', '.join(config.issue_labels_exclude)}"
            )


def category_sort_key(heading: str, config: ReleaseNotesConfig) -> tuple[int, int, str]:
    """Sort key placing configured headings first, then other headings alphabetically.

    The uncategorized heading always sorts last.
    """
    if heading == config.uncategorized_heading:
        return (2, 0, "")
    if heading in config.category_order:
        return (0, config.category_order.index(heading), "")
    return (1, 0, heading)


def _resolve_issue_category(issue: Issue, config: ReleaseNotesConfig) -> ResolvedLabel:
    """Pick the single category an issue is rendered under."""
    candidates = issue.label_names
    if config.issue_labels_include:
        candidates = [name for name in candidates if name in config.issue_labels_include]
    if not candidates:
        return ResolvedLabel(heading=config.uncategorized_heading, plural=config.uncategorized_heading)
    resolved = [resolve_label(name, config.issue_labels_alias) for name in candidates]
    return min(resolved, key=lambda label: category_sort_key(label.heading, config))


def group_issues(issues: Iterable[Issue], config: ReleaseNotesConfig) -> list[IssueCategory]:
    """Group issues by display heading.

    Each issue lands in exactly one category: the highest-precedence heading
    among its labels. Issues within a category are ordered by number, and
    categories by ``category_sort_key``.

    Args:
        issues: Issues that survived exclusion
        config: Release notes configuration

    Returns:
        Non-empty categories in rendering order
    """
    categories: dict[str, IssueCategory] = {}
    for issue in sorted(issues, key=lambda i: i.number):
        resolved = _resolve_issue_category(issue, config)
        category = categories.get(resolved.heading)
        if category is None:
            category = IssueCategory(heading=resolved.heading, plural=resolved.plural)
            categories[resolved.heading] = category
        category.issues.append(issue)

    ordered = sorted(categories.values(), key=lambda c: category_sort_key(c.heading, config))
    logger.debug("Grouped issues", categories={c.heading: len(c.issues) for c in ordered})
    return ordered
