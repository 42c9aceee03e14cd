"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.info("Processing request")

    # Lazy evaluation for expensive operations
    from pagination_service.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Expensive: {compute_heavy_data()}")  # Only runs if DEBUG enabled

    # Entry points configure output once
    from pagination_service.infra.logging import setup_logging

    setup_logging()
"""

from pagination_service.infra.logging.config import configure_logging, setup_logging
from pagination_service.infra.logging.formatters import JSONFormatter
from pagination_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    as_lazy_logger,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "as_lazy_logger",
    "configure_logging",
    "get_lazy_logger",
    "lazy",
    "setup_logging",
]
