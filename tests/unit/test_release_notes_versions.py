"""Unit tests for milestone lookup and version ordering."""

import pytest
from conftest import OWNER, REPOSITORY, create_milestone
from packaging.version import Version

from release_notes_manager.release_notes.exceptions import InvalidMilestoneVersionError, MilestoneNotFoundError
from release_notes_manager.release_notes.versions import MilestoneVersionResolver


@pytest.fixture
def resolver() -> MilestoneVersionResolver:
    """Resolver for the test repository."""
    return MilestoneVersionResolver(OWNER, REPOSITORY)


def test_find_milestone_exact_title(resolver: MilestoneVersionResolver) -> None:
    """Test that the milestone is found by exact title."""
    milestones = [create_milestone("1.2", number=1), create_milestone("1.2.0", number=2)]

    assert resolver.find_milestone(milestones, "1.2.0").number == 2


def test_find_milestone_missing(resolver: MilestoneVersionResolver) -> None:
    """Test that a missing title raises MilestoneNotFoundError with context."""
    with pytest.raises(MilestoneNotFoundError) as exc_info:
        resolver.find_milestone([create_milestone("1.0.0")], "v1.0.0")

    assert exc_info.value.title == "v1.0.0"
    assert f"{OWNER}/{REPOSITORY}" in str(exc_info.value)


def test_find_previous_milestone_uses_semantic_order(resolver: MilestoneVersionResolver) -> None:
    """Test that 1.9.0 precedes 1.10.0 even though it sorts after it as a string."""
    milestones = [create_milestone(title, number=i) for i, title in enumerate(["1.10.0", "1.9.0", "1.2.0", "2.0.0"])]
    target = milestones[0]

    previous = resolver.find_previous_milestone(milestones, target)

    assert previous is not None
    assert previous.title == "1.9.0"


def test_find_previous_milestone_first_release(resolver: MilestoneVersionResolver) -> None:
    """Test that the lowest version has no previous milestone."""
    milestones = [create_milestone("0.1.0", number=1), create_milestone("0.2.0", number=2)]

    assert resolver.find_previous_milestone(milestones, milestones[0]) is None


def test_find_previous_milestone_skips_unversioned(resolver: MilestoneVersionResolver) -> None:
    """Test that milestones without version titles are ignored."""
    milestones = [create_milestone("Backlog", number=1), create_milestone("1.0.0", number=2), create_milestone("0.9.0", number=3)]

    previous = resolver.find_previous_milestone(milestones, milestones[1])

    assert previous is not None
    assert previous.number == 3


def test_find_previous_milestone_rejects_unversioned_target(resolver: MilestoneVersionResolver) -> None:
    """Test that a target without a version title is an input error."""
    target = create_milestone("Next Release")

    with pytest.raises(InvalidMilestoneVersionError, match="Next Release"):
        resolver.find_previous_milestone([target], target)


def test_versioned_milestones_sorted_oldest_first(resolver: MilestoneVersionResolver) -> None:
    """Test that versioned milestones are paired with parsed versions in ascending order."""
    milestones = [create_milestone("2.0.0", number=1), create_milestone("1.0.0", number=2), create_milestone("Someday", number=3)]

    versioned = resolver.versioned_milestones(milestones)

    assert [version for version, _ in versioned] == [Version("1.0.0"), Version("2.0.0")]
