"""CLI utilities for formatting output."""

from pagination_service.cli.utils.formatters import error, key_values

__all__ = [
    "error",
    "key_values",
]
