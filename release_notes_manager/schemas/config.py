"""Pydantic schema for the release notes configuration file."""

from pydantic import BaseModel, ConfigDict, Field

from release_notes_manager.utils.constants import (
    DEFAULT_CATEGORY_ORDER,
    DEFAULT_EXCLUDED_LABELS,
    DEFAULT_FOOTER_CONTENT,
    DEFAULT_FOOTER_HEADING,
    DEFAULT_MILESTONE_REPLACE_TEXT,
    DEFAULT_UNCATEGORIZED_HEADING,
)


class LabelAlias(BaseModel):
    """Pydantic model remapping a raw label to a display heading and plural noun."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    header: str | None = None
    plural: str | None = None


class CreateConfig(BaseModel):
    """Pydantic model for the footer settings used when creating release notes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    include_footer: bool = Field(default=False, alias="include-footer")
    footer_heading: str = Field(default=DEFAULT_FOOTER_HEADING, alias="footer-heading")
    footer_content: str = Field(default=DEFAULT_FOOTER_CONTENT, alias="footer-content")
    footer_includes_milestone: bool = Field(default=False, alias="footer-includes-milestone")
    milestone_replace_text: str = Field(default=DEFAULT_MILESTONE_REPLACE_TEXT, alias="milestone-replace-text")


class ReleaseNotesConfig(BaseModel):
    """Pydantic model for the complete release notes configuration.

    Loaded once per run and passed explicitly to the release notes builder.
    Label aliases keep their file order; the first alias matching a label wins.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    create: CreateConfig = Field(default_factory=CreateConfig)
    issue_labels_include: tuple[str, ...] = Field(default=(), alias="issue-labels-include")
    issue_labels_exclude: tuple[str, ...] = Field(default=tuple(DEFAULT_EXCLUDED_LABELS), alias="issue-labels-exclude")
    issue_labels_alias: tuple[LabelAlias, ...] = Field(default=(), alias="issue-labels-alias")
    category_order: tuple[str, ...] = Field(default=tuple(DEFAULT_CATEGORY_ORDER), alias="category-order")
    uncategorized_heading: str = Field(default=DEFAULT_UNCATEGORIZED_HEADING, alias="uncategorized-heading")
