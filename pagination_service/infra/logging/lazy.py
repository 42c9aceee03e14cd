"""Lazy evaluation support for logging.

Expensive debug messages are wrapped in lambdas and only rendered when the
target level is enabled, so pagination diagnostics cost nothing in
production where DEBUG is off.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any


class LazyString:
    """Lazy-evaluated string that defers computation until needed.

    Example:
        ```python
        logger.debug("Rows: %s", LazyString(lambda: [r.id for r in rows]))
        ```
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[], Any]) -> None:
        self._func = func

    def __str__(self) -> str:
        return str(self._func())

    def __repr__(self) -> str:
        return f"LazyString({self._func!r})"


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that supports lazy evaluation of log messages.

    Callables passed as the message or as format arguments are invoked only
    when the level is enabled for the underlying logger.

    Example:
        ```python
        logger = LazyLoggerAdapter(logging.getLogger(__name__))
        logger.debug(lambda: f"Processing {expensive_call()}")
        logger.info("Status: %s", lambda: compute_status())
        ```
    """

    def log(
        self,
        level: int,
        msg: Any,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Log message with lazy evaluation support.

        Args:
            level: Numeric log level (e.g., logging.DEBUG).
            msg: Log message or callable returning message.
            *args: Format arguments (may include callables).
            **kwargs: Additional kwargs for logging.
        """
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()

        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        """Merge bound context into ``extra`` without discarding call-site extras."""
        if self.extra:
            kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get logger with lazy evaluation support.

    Args:
        name: Logger name (usually __name__).
        **context: Optional context to bind to every record.

    Returns:
        Logger adapter with lazy evaluation support.

    Example:
        ```python
        logger = get_lazy_logger(__name__, component="paginator")
        logger.debug(lambda: f"Cursor payload: {decode(token)}")
        ```
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})


def as_lazy_logger(logger: logging.Logger | logging.LoggerAdapter | None, default_name: str) -> LazyLoggerAdapter:
    """Wrap an injected logger so lazy messages work with it.

    ``None`` yields the module default; plain loggers and foreign adapters
    are wrapped; lazy adapters are returned unchanged.
    """
    if logger is None:
        return get_lazy_logger(default_name)
    if isinstance(logger, LazyLoggerAdapter):
        return logger
    return LazyLoggerAdapter(logger, {})


def lazy(func: Callable[[], Any]) -> LazyString:
    """Create a lazy-evaluated string.

    Example:
        ```python
        logger.debug("Data: %s", lazy(lambda: expensive_dump(data)))
        ```
    """
    return LazyString(func)
