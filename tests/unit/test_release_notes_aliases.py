"""Unit tests for label alias resolution."""

import pytest

from release_notes_manager.release_notes.aliases import ResolvedLabel, find_label_alias, resolve_label
from release_notes_manager.schemas.config import LabelAlias


@pytest.mark.parametrize(
    "label_name,aliases,expected",
    [
        pytest.param("Bug", [], ResolvedLabel("Bug", "Bugs"), id="no alias"),
        pytest.param("Bug", [LabelAlias(name="Bug", header="Foo")], ResolvedLabel("Foo", "Foos"), id="header only"),
        pytest.param("Help Wanted", [LabelAlias(name="Help Wanted", plural="Bar")], ResolvedLabel("Help Wanted", "Bar"), id="plural only"),
        pytest.param("Bug", [LabelAlias(name="Bug", header="Bug Fix", plural="Bug Fixes")], ResolvedLabel("Bug Fix", "Bug Fixes"), id="both"),
        pytest.param("bug", [LabelAlias(name="Bug", header="Foo")], ResolvedLabel("bug", "bugs"), id="case sensitive"),
        pytest.param("Bugfix", [LabelAlias(name="Bug", header="Foo")], ResolvedLabel("Bugfix", "Bugfixs"), id="no prefix matching"),
        pytest.param("Story", [], ResolvedLabel("Story", "Storys"), id="naive plural preserved"),
    ],
)
def test_resolve_label(label_name: str, aliases: list[LabelAlias], expected: ResolvedLabel) -> None:
    """Test heading and plural resolution for a label."""
    assert resolve_label(label_name, aliases) == expected


def test_first_matching_alias_wins() -> None:
    """Test that the first alias in configuration order is used."""
    aliases = [LabelAlias(name="Bug", header="First"), LabelAlias(name="Bug", header="Second")]

    assert find_label_alias("Bug", aliases) is aliases[0]
    assert resolve_label("Bug", aliases).heading == "First"


def test_find_label_alias_no_match() -> None:
    """Test that no alias is returned for an unknown label."""
    assert find_label_alias("Feature", [LabelAlias(name="Bug", header="Foo")]) is None
