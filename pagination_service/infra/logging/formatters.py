"""JSON Lines formatter with trace correlation."""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_DEFAULT_KEYS = {"level": "levelname", "logger": "name", "message": "message"}


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Pagination loggers pass their parameters through ``extra=`` (``limit``,
    ``sort_field``, ``has_cursor``...), and those land as top-level keys next
    to the standard ones. When an OpenTelemetry span is active its
    ``trace_id`` and ``span_id`` are added so log lines join up with traces.

    Example output:
        {"level": "DEBUG", "logger": "pagination_service.core.pagination.paginator",
         "message": "pagination requested", "timestamp": "2025-01-01T00:00:00.123Z",
         "service": "pagination-service", "limit": 20, "sort_field": "created_at"}

    Args:
        fmt_keys: Output key to LogRecord attribute mapping
        static: Fields added to every record, e.g. ``{"service": "api"}``
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.fmt_keys = fmt_keys or dict(_DEFAULT_KEYS)
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        data: dict[str, Any] = {key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()}
        data["timestamp"] = _utc_timestamp(record.created)
        data.update(self._trace_fields())

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_trace"] = self.formatStack(record.stack_info)

        data.update(self.static)
        data.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in data
        )
        # json.dumps escapes embedded newlines, so tracebacks stay on one line
        return json.dumps(data, ensure_ascii=False, default=str)

    @staticmethod
    def _trace_fields() -> dict[str, str]:
        context = trace.get_current_span().get_span_context()
        if not context.is_valid:
            return {}
        return {
            "trace_id": format(context.trace_id, "032x"),
            "span_id": format(context.span_id, "016x"),
        }


__all__ = ["JSONFormatter"]
