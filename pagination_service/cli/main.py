"""Main CLI entry point for pagination-service commands."""

import click

from pagination_service.cli.commands import config, cursor
from pagination_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="pagination-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Pagination Service CLI - inspect cursors and effective settings.

    \b
    Command Groups:
      cursor     Encode and decode pagination cursors
      config     Configuration inspection

    \b
    Quick Start:
      pagination-service cursor encode created_at 2023-01-01T00:00:00Z --type datetime
      pagination-service cursor decode eyJmaWVsZCI6ImlkIiwidmFsdWUiOjQyfQ
      pagination-service config show --format json
    """
    ctx.ensure_object(dict)


cli.add_command(cursor.cursor)
cli.add_command(config.config)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
