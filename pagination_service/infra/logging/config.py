"""Logging configuration setup.

Configures the root logger with ``logging.config.dictConfig``. Library code
never calls this; it only obtains loggers. Entry points (the CLI, an
application embedding the paginator) decide how records are rendered.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from pagination_service.core.settings.logs import LoggingSettings

# Engine and repository loggers tuned together by ``pagination_level``
PAGINATION_LOGGERS = ("pagination_service.core.pagination", "pagination_service.core.database")


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from pagination_service.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: str = "pagination-service",
    pagination_level: str | None = None,
    capture_warnings: bool = True,
    **kwargs: Any,
) -> None:
    """Configure logging with dictConfig.

    All output goes through a single stderr handler on the root logger;
    application loggers propagate up.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Enable JSONL (JSON Lines) structured logging.
        service_name: Static ``service`` field added to JSON records.
        pagination_level: Level for the pagination engine loggers. If None,
            they inherit the root level.
        capture_warnings: Forward Python warnings to logging system.
        **kwargs: Ignored extra settings.

    Example:
        configure_logging(log_level="INFO", pagination_level="DEBUG", json_logs=False)
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs.keys())))

    if capture_warnings:
        logging.captureWarnings(True)

    if json_logs:
        formatter: dict[str, Any] = {
            "()": "pagination_service.infra.logging.formatters.JSONFormatter",
            "fmt_keys": {"level": "levelname", "logger": "name", "message": "message"},
            "static": {"service": service_name},
        }
    else:
        formatter = {
            "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": log_level.upper(),
            "handlers": ["console"],
        },
        "loggers": {},
    }

    if pagination_level:
        for name in PAGINATION_LOGGERS:
            logging_config["loggers"][name] = {"level": pagination_level.upper()}

    logging.config.dictConfig(logging_config)
