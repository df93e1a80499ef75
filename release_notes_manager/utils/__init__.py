"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_CATEGORY_ORDER,
    DEFAULT_CONFIG_PATH,
    DEFAULT_EXCLUDED_LABELS,
    DEFAULT_UNCATEGORIZED_HEADING,
)
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_CATEGORY_ORDER",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_EXCLUDED_LABELS",
    "DEFAULT_UNCATEGORIZED_HEADING",
    "retry_on_rate_limit",
]
