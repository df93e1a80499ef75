"""Shared constants used across the application."""

# This file is intended to hold shared constants.

# Release Notes Constants
# -----------------------

DEFAULT_CONFIG_PATH = "release-notes.yaml"
"""Default path to the release notes configuration file."""

DEFAULT_CATEGORY_ORDER = ["Bug", "Feature", "Improvement"]
"""Headings that are rendered first, in this order. Other headings follow alphabetically."""

DEFAULT_EXCLUDED_LABELS = ["Build", "Internal Refactoring"]
"""Labels whose issues never appear in release notes."""

DEFAULT_UNCATEGORIZED_HEADING = "Uncategorized"
"""Heading used for issues that carry no label at all."""

DEFAULT_FOOTER_HEADING = "Where to get it"

DEFAULT_FOOTER_CONTENT = "You can download this release from [chocolatey](https://chocolatey.org/packages/ChocolateyGUI/{milestone})"

DEFAULT_MILESTONE_REPLACE_TEXT = "{milestone}"
"""Token in the footer content replaced by the milestone title."""

PLURAL_SUFFIX = "s"
"""Appended to a heading when no plural is configured for it."""

# Provider Constants
# ------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"

DEFAULT_GITHUB_WEB_URL = "https://github.com"

DEFAULT_GITLAB_API_URL = "https://gitlab.com/api/v4"

DEFAULT_PAGE_SIZE = 100
"""Page size used for paginated provider listings (maximum allowed by GitHub and GitLab)."""
