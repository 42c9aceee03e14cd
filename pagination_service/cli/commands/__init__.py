"""CLI command modules."""

from pagination_service.cli.commands import config, cursor

__all__ = [
    "config",
    "cursor",
]
