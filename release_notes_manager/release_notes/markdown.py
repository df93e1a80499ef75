"""Markdown rendering for release notes."""

from ..schemas.config import CreateConfig
from .models import Issue, IssueCategory, ReleaseNotesData


def _pluralize_count(count: int, noun: str) -> str:
    """Format a count with its noun, e.g. '1 commit' or '5 commits'."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _link(text: str, url: str) -> str:
    """Render a markdown link, or plain text when there is no URL."""
    return f"[{text}]({url})" if url else text


class MarkdownWriter:
    """Renders release notes data into a markdown document.

    Rendering is pure: identical data and configuration always produce
    byte-identical output.
    """

    def __init__(self, create_config: CreateConfig) -> None:
        """Initialize with the footer settings."""
        self.create_config = create_config

    def render(self, notes: ReleaseNotesData) -> str:
        """Render the complete release notes document."""
        blocks: list[str] = []

        description = (notes.milestone.description or "").strip()
        if description:
            blocks.append(description)

        for category in notes.categories:
            if category.issues:
                blocks.append(self.render_category(category))

        blocks.append(self.render_commit_summary(notes))

        footer = self.render_footer(notes.milestone.title)
        if footer:
            blocks.append(footer)

        return "\n\n".join(blocks) + "\n"

    def render_category(self, category: IssueCategory) -> str:
        """Render a category heading followed by one line per issue."""
        lines = [f"__{category.display_heading}__", ""]
        lines.extend(self.render_issue(issue) for issue in category.issues)
        return "\n".join(lines)

    def render_issue(self, issue: Issue) -> str:
        """Render a single issue line."""
        return f"- [__#{issue.number}__]({issue.html_url}) {issue.title}"

    def render_commit_summary(self, notes: ReleaseNotesData) -> str:
        """Render the sentence summarizing commits and closed issues."""
        commits = _link(_pluralize_count(notes.commit_count, "commit"), notes.commits_url)
        issues = _link(_pluralize_count(notes.issue_count, "issue"), notes.milestone.html_url)

        if notes.commit_count == 0:
            return f"As part of this release we had {issues} closed."
        if notes.issue_count == 0:
            return f"As part of this release we had {commits}."
        return f"As part of this release we had {commits} which resulted in {issues} being closed."

    def render_footer(self, milestone_title: str) -> str | None:
        """Render the configured footer, substituting the milestone title if enabled."""
        if not self.create_config.include_footer:
            return None

        content = self.create_config.footer_content
        replace_text = self.create_config.milestone_replace_text
        if self.create_config.footer_includes_milestone and replace_text:
            content = content.replace(replace_text, milestone_title)

        return f"### {self.create_config.footer_heading}\n\n{content.strip()}"
