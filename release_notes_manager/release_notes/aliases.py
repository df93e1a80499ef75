"""Resolves raw issue labels to display headings through configured aliases."""

from typing import Iterable, NamedTuple

from ..schemas.config import LabelAlias
from ..utils.constants import PLURAL_SUFFIX


class ResolvedLabel(NamedTuple):
    """Display heading and plural noun for a label."""

    heading: str
    plural: str


def find_label_alias(label_name: str, aliases: Iterable[LabelAlias]) -> LabelAlias | None:
    """Return the first alias whose name exactly matches the label name."""
    for alias in aliases:
        if alias.name == label_name:
            return alias
    return None


def resolve_label(label_name: str, aliases: Iterable[LabelAlias]) -> ResolvedLabel:
    """Resolve a raw label name to its display heading and plural noun.

    The heading is the alias header when one is configured, else the label
    name as-is. The plural is the alias plural when configured, else the
    heading with a trailing "s". The suffix rule is deliberately naive and
    must not be changed, since rendered output depends on it.

    Args:
        label_name: Raw label name as returned by the provider
        aliases: Configured label aliases, in configuration order

    Returns:
        The resolved heading and plural noun
    """
    alias = find_label_alias(label_name, aliases)
    heading = alias.header if alias is not None and alias.header else label_name
    if alias is not None and alias.plural:
        plural = alias.plural
    else:
        plural = heading + PLURAL_SUFFIX
    return ResolvedLabel(heading=heading, plural=plural)
