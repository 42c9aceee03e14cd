"""Configuration commands."""

import json
import sys

import click
from pydantic import ValidationError

from pagination_service.cli.utils import error, key_values
from pagination_service.core.settings import get_logging_settings, get_pagination_settings


@click.group(name="config")
def config() -> None:
    """Configuration management commands."""


@config.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
def show(output_format: str) -> None:
    """Display the effective pagination and logging settings."""
    try:
        pagination = get_pagination_settings()
        logging_settings = get_logging_settings()
    except ValidationError as e:
        error(f"Invalid configuration: {e}")
        sys.exit(1)

    config_dict: dict[str, dict[str, object]] = {
        "pagination": pagination.model_dump(),
        "logging": logging_settings.model_dump(),
    }

    if output_format == "json":
        click.echo(json.dumps(config_dict, indent=2, default=str))
        return

    for section, values in config_dict.items():
        key_values(section, values)
