"""Pagination exceptions.

Only conditions the caller has to act on are raised. Malformed cursors and
missing counts are absorbed by the paginator and never surface here; failures
coming from the data source itself propagate untouched.
"""

from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for pagination operations.

    Raised when a pagination call cannot be carried out because of how it was
    configured, as opposed to what the backing store returned.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize pagination error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class CountUnavailableError(PaginationError):
    """The data source cannot report a row count.

    Sources raise this from ``count()`` when counting is temporarily or
    permanently impossible. The paginator treats it as an absent count;
    ``paginate_with_count`` lets it propagate because the total is the
    whole point of that call.
    """

    def __init__(self, source: str, reason: str | None = None):
        """Initialize count unavailable error.

        Args:
            source: Name of the queryable that could not count
            reason: Optional explanation from the source
        """
        self.source = source
        self.reason = reason
        details: dict[str, Any] = {"source": source}
        if reason:
            details["reason"] = reason
        super().__init__("Row count is not available", details=details)


class UnknownSortFieldError(PaginationError):
    """A sort or filter field does not exist on the queried model.

    Raised by adapters that resolve field names against a schema, such as
    the SQLAlchemy adapter resolving against mapped columns.

    Attributes:
        model_name: Name of the model the field was looked up on
        field: The field name that could not be resolved
    """

    def __init__(self, model_name: str, field: str):
        self.model_name = model_name
        self.field = field
        super().__init__(
            f"{model_name} has no sortable field {field!r}",
            details={"model": model_name, "field": field},
        )

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"UnknownSortFieldError(model={self.model_name!r}, field={self.field!r})"


__all__ = [
    "CountUnavailableError",
    "PaginationError",
    "UnknownSortFieldError",
]
