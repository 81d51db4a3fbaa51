"""Input validators for CLI commands."""

from pathlib import Path

import click
import yaml


def validate_config_file(
    ctx: click.Context,
    param: click.Parameter,
    value: Path | None,
) -> Path | None:
    """Validate configuration file.

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return None

    if not value.exists():
        raise click.BadParameter(f"Config file does not exist: {value}")

    if value.suffix.lower() not in {".yaml", ".yml"}:
        raise click.BadParameter(f"Config file must be YAML format: {value}")

    try:
        with open(value, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.BadParameter(f"Invalid YAML in config file: {e}") from None

    if config is None:
        raise click.BadParameter(f"Config file is empty: {value}")

    return value


def validate_document_file(
    ctx: click.Context,
    param: click.Parameter,
    value: Path | None,
) -> Path | None:
    """Validate a document manifest is a YAML mapping.

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return None

    if value.suffix.lower() not in {".yaml", ".yml"}:
        raise click.BadParameter(f"Document must be YAML format: {value}")

    try:
        with open(value, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.BadParameter(f"Invalid YAML in document: {e}") from None

    if document is not None and not isinstance(document, dict):
        raise click.BadParameter(f"Document must be a dictionary: {value}")

    return value
