"""Contains utility functions for working with YAML files."""

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from release_notes_manager.configuration.exceptions import ConfigurationFileError
from release_notes_manager.schemas.config import ReleaseNotesConfig

logger = structlog.get_logger(__name__)

yaml = YAML(typ="safe")


def load_yaml_file(path: Path) -> Any:
    """Loads a YAML file and returns its content (None for an empty file)."""
    with open(path, encoding="utf-8") as f:
        return yaml.load(f)


def create_yaml_dumper() -> YAML:
    """Creates a YAML object for dumping human-editable configuration files."""
    yaml_dumper = YAML()
    yaml_dumper.default_flow_style = False
    yaml_dumper.indent(mapping=2, sequence=4, offset=2)  # type: ignore[attr-defined]
    yaml_dumper.width = 4096  # Prevent line wrapping for long lines
    return yaml_dumper


def dump_yaml_to_file(data: Any, file_path: Path) -> None:
    """Dumps data to a YAML file."""
    yaml_dumper = create_yaml_dumper()
    with open(file_path, "w", encoding="utf-8") as f:
        yaml_dumper.dump(data, f)  # type: ignore[misc]


def load_release_notes_config(path: Path) -> ReleaseNotesConfig:
    """Load and validate the release notes configuration file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        The validated configuration. A missing or empty file yields the defaults.

    Raises:
        ConfigurationFileError: If the file is not valid YAML or does not match the schema
    """
    if not path.exists():
        logger.info("No release notes configuration file found, using defaults", path=str(path))
        return ReleaseNotesConfig()

    try:
        content = load_yaml_file(path)
    except YAMLError as e:
        raise ConfigurationFileError(path, f"Failed to parse YAML file: {e}") from e

    if content is None:
        return ReleaseNotesConfig()
    if not isinstance(content, dict):
        raise ConfigurationFileError(path, "top level of the file must be a mapping")

    try:
        config = ReleaseNotesConfig.model_validate(content)
    except ValidationError as e:
        raise ConfigurationFileError(path, str(e)) from e

    logger.debug(
        "Loaded release notes configuration",
        path=str(path),
        aliases=len(config.issue_labels_alias),
        excluded_labels=list(config.issue_labels_exclude),
    )
    return config


def dump_default_release_notes_config(path: Path) -> None:
    """Write the default release notes configuration to a YAML file."""
    dump_yaml_to_file(ReleaseNotesConfig().model_dump(mode="json", by_alias=True), path)
