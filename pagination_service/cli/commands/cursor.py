"""Cursor inspection commands.

Handy when debugging a client that sends unexpected pages: decode the token
it sent, or mint a token positioned at a known value.
"""

import json
import sys
from datetime import datetime

import click

from pagination_service.cli.utils import error, key_values
from pagination_service.core.pagination import CursorCodec

_VALUE_TYPES: dict[str, click.ParamType] = {
    "str": click.STRING,
    "int": click.INT,
    "float": click.FLOAT,
    "bool": click.BOOL,
}


def _parse_value(raw: str, value_type: str) -> object:
    if value_type == "datetime":
        try:
            return datetime.fromisoformat(raw)
        except ValueError as e:
            raise click.BadParameter(f"{raw!r} is not an ISO 8601 datetime", param_hint="VALUE") from e
    return _VALUE_TYPES[value_type].convert(raw, None, None)


@click.group(name="cursor")
def cursor() -> None:
    """Encode and decode pagination cursors."""


@cursor.command()
@click.argument("field")
@click.argument("value")
@click.option(
    "--type",
    "value_type",
    type=click.Choice(["str", "int", "float", "bool", "datetime"]),
    default="str",
    show_default=True,
    help="How to interpret VALUE before encoding",
)
def encode(field: str, value: str, value_type: str) -> None:
    """Print the cursor positioned at VALUE of sort field FIELD."""
    click.echo(CursorCodec.encode(_parse_value(value, value_type), field))


@cursor.command()
@click.argument("token")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the payload as JSON")
def decode(token: str, as_json: bool) -> None:
    """Print the field and boundary value carried by TOKEN."""
    data = CursorCodec.decode(token)
    if data is None:
        error("Malformed cursor: a paginator would serve the first page")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(data.model_dump(), sort_keys=True))
        return

    key_values(
        "cursor",
        {
            "field": data.field,
            "value": data.value,
            "value_type": type(data.value).__name__,
        },
    )
