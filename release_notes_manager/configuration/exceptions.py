"""Contains exceptions raised when reconciling application configuration."""

from pathlib import Path


class ProviderAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the provider authentication configuration is undefined or ambiguous."""

    pass


class ConfigurationFileError(Exception):
    """Raised when the release notes configuration file cannot be parsed or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initializes the exception with the path of the offending file."""
        super().__init__(f"Invalid release notes configuration file {path}: {reason}")
        self.path = path
        self.reason = reason
