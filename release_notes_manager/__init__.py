"""Generates release notes from milestones on a version-control hosting provider."""
