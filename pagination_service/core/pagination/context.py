"""Per-call pagination configuration."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


class SortDirection(StrEnum):
    """Sort direction for the primary sort field."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def _missing_(cls, value: object) -> SortDirection | None:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None

    @property
    def seek_operator(self) -> str:
        """Comparison that selects rows after a boundary in this direction."""
        return ">" if self is SortDirection.ASC else "<"

    @property
    def opposite(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


def clamp_limit(limit: int | None, *, default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE) -> int:
    """Clamp a requested page size into ``[1, maximum]``.

    ``None`` and ``0`` fall back to ``default``.
    """
    return min(max(limit or default, 1), maximum)


class QueryContext(BaseModel):
    """Immutable pagination options for a single call.

    Attributes:
        sort_field: Primary sort field, also the field cursors encode
        sort_direction: Direction of the primary sort
        limit: Page size, clamped to [1, 100]
        cursor: Opaque cursor from a previous page (None for first page)
        offset: Rows to skip when offset fallback is enabled
        use_offset_fallback: Use skip/take instead of keyset seeking
        tie_break_field: Unique secondary sort field, always ascending
        verify_previous_page: Probe the store to confirm a previous page exists

    Example:
        ctx = QueryContext(sort_field="created_at", sort_direction="asc", limit=50)
        page = await paginator.paginate(source, ctx)
        next_ctx = ctx.next(page.next_cursor)
    """

    sort_field: str = Field(default="created_at", min_length=1)
    sort_direction: SortDirection = SortDirection.DESC
    limit: int = DEFAULT_PAGE_SIZE
    cursor: str | None = None
    offset: int | None = Field(default=None, ge=0)
    use_offset_fallback: bool = False
    tie_break_field: str = Field(default="id", min_length=1)
    verify_previous_page: bool = False

    model_config = {"frozen": True}

    @field_validator("sort_direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_PAGE_SIZE
        return clamp_limit(int(value))

    @field_validator("cursor", mode="before")
    @classmethod
    def _blank_cursor(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def fetch_size(self) -> int:
        """Rows requested from the store in keyset mode (one extra)."""
        return self.limit + 1

    def next(self, cursor: str | None) -> QueryContext:
        """Copy of this context positioned at ``cursor``."""
        return self.model_copy(update={"cursor": cursor})


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "QueryContext",
    "SortDirection",
    "clamp_limit",
]
