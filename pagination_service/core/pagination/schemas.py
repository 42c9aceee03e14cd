"""Pagination response schemas.

The engine returns exactly one shape per mode (``Page`` and
``PageWithTotals``). This module is the API boundary: it turns those results
into wire models. Three styles are provided:

1. CursorPage: the canonical page, field for field
2. CursorPaginatedResponse: ``{"data": [...], "pagination": {limit, hasNext, nextCursor}}``
3. PaginatedResponse: ``{"data": [...], "pagination": {page, limit, total, totalPages, hasNext, hasPrevious}}``

Fields serialize in camelCase when dumped by alias (FastAPI does this by
default), and accept either spelling on input.
"""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pagination_service.core.pagination.results import Page, PageWithTotals

T = TypeVar("T")

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CursorPage(BaseModel, Generic[T]):
    """Cursor pagination response mirroring ``Page``.

    Usage:
        @router.get("/tasks", response_model=CursorPage[TaskResponse])
        async def list_tasks(pagination: CursorPagination, session: Session):
            page = await task_repo.paginate_cursor(session, select(Task), pagination)
            return CursorPage.from_page(page)

    Attributes:
        items: List of data items
        has_next_page: Whether more items exist after this page
        has_previous_page: Whether the page was reached through a cursor
        next_cursor: Cursor to fetch the next page
        previous_cursor: Cursor of the first item on this page
        total_count: Total count (optional)
    """

    model_config = _WIRE_CONFIG

    items: list[T] = Field(default_factory=list, description="List of items")
    has_next_page: bool = Field(default=False, description="Whether more items exist")
    has_previous_page: bool = Field(default=False, description="Whether previous items exist")
    next_cursor: str | None = Field(default=None, description="Cursor to fetch next page")
    previous_cursor: str | None = Field(default=None, description="Cursor of the first item")
    total_count: int | None = Field(default=None, description="Total count (optional)")

    @classmethod
    def from_page(cls, page: Page[Any]) -> CursorPage[T]:
        return cls(
            items=page.items,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
            next_cursor=page.next_cursor,
            previous_cursor=page.previous_cursor,
            total_count=page.total_count,
        )


class CursorPaginationMeta(BaseModel):
    """Navigation block of ``CursorPaginatedResponse``."""

    model_config = _WIRE_CONFIG

    limit: int
    has_next: bool
    next_cursor: str | None = None


class CursorPaginatedResponse(BaseModel, Generic[T]):
    """Legacy ``data``/``pagination`` envelope for cursor pages."""

    model_config = _WIRE_CONFIG

    data: list[T] = Field(default_factory=list)
    pagination: CursorPaginationMeta

    @classmethod
    def from_page(cls, page: Page[Any], limit: int) -> CursorPaginatedResponse[T]:
        return create_cursor_paginated_response(page.items, limit, page.next_cursor)


class OffsetPaginationMeta(BaseModel):
    """Navigation block of ``PaginatedResponse``."""

    model_config = _WIRE_CONFIG

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool


class PaginatedResponse(BaseModel, Generic[T]):
    """Page-number pagination envelope.

    Usage:
        @router.get("/tasks", response_model=PaginatedResponse[TaskResponse])
        async def list_tasks(params: PagePagination, session: Session):
            result = await task_repo.offset_paginate(session, stmt, page=params.page, limit=params.limit)
            return PaginatedResponse.from_totals(result)
    """

    model_config = _WIRE_CONFIG

    data: list[T] = Field(default_factory=list)
    pagination: OffsetPaginationMeta

    @classmethod
    def from_totals(cls, result: PageWithTotals[Any]) -> PaginatedResponse[T]:
        return create_paginated_response(result.items, result.total, result.page, result.limit)


def create_paginated_response(
    data: list[Any],
    total: int,
    page: int,
    limit: int,
) -> PaginatedResponse[Any]:
    """Build a page-number envelope from raw values.

    Args:
        data: Items on the current page
        total: Total items across all pages
        page: Current page (1-indexed)
        limit: Page size

    Returns:
        PaginatedResponse with computed page count and navigation flags
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return PaginatedResponse(
        data=data,
        pagination=OffsetPaginationMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        ),
    )


def create_cursor_paginated_response(
    data: list[Any],
    limit: int,
    next_cursor: str | None = None,
) -> CursorPaginatedResponse[Any]:
    """Build a cursor envelope; ``has_next`` follows the presence of a cursor."""
    return CursorPaginatedResponse(
        data=data,
        pagination=CursorPaginationMeta(
            limit=limit,
            has_next=next_cursor is not None,
            next_cursor=next_cursor,
        ),
    )


__all__ = [
    "CursorPage",
    "CursorPaginatedResponse",
    "CursorPaginationMeta",
    "OffsetPaginationMeta",
    "PaginatedResponse",
    "create_cursor_paginated_response",
    "create_paginated_response",
]
