"""Output formatting utilities for CLI commands.

Data (tokens, JSON, settings) goes to stdout so it can be piped; errors go
to stderr.
"""

import click


def error(message: str) -> None:
    """Print an error message in red to stderr."""
    click.secho(f"✗ {message}", fg="red", err=True)


def key_values(title: str, values: dict[str, object], width: int = 24) -> None:
    """Print a titled block of aligned ``key = value`` lines to stdout."""
    click.secho(f"[{title.upper()}]", fg="cyan", bold=True)
    for key, value in values.items():
        click.echo(f"  {key:{width}} = {value}")
