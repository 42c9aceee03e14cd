"""Reusable pagination dependencies for FastAPI routes.

Two pagination styles are provided:
    - CursorPagination: keyset pagination, resolves to a QueryContext
    - PagePagination: classic ``?page=N&limit=M``, resolves to PageParams

Usage:
    from pagination_service.core.dependencies import CursorPagination, PagePagination

    @router.get("/tasks", response_model=CursorPage[TaskResponse])
    async def list_tasks(pagination: CursorPagination, session: Session):
        page = await task_repo.paginate_cursor(session, select(Task), pagination)
        return CursorPage.from_page(page)

    @router.get("/tasks/pages", response_model=PaginatedResponse[TaskResponse])
    async def list_task_pages(params: PagePagination, session: Session):
        stmt = select(Task).order_by(Task.created_at.desc(), Task.id)
        result = await task_repo.offset_paginate(session, stmt, page=params.page, limit=params.limit)
        return PaginatedResponse.from_totals(result)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query
from pydantic import BaseModel, Field

from pagination_service.core.pagination.context import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, QueryContext
from pagination_service.core.settings import get_pagination_settings


class PageParams(BaseModel):
    """Page-number pagination parameters.

    Attributes:
        page: 1-indexed page number.
        limit: Items per page.
    """

    page: int = Field(ge=1, default=1, description="Page number (1-based)")
    limit: int = Field(ge=1, le=MAX_PAGE_SIZE, default=DEFAULT_PAGE_SIZE, description="Items per page")

    model_config = {"frozen": True}

    @property
    def skip(self) -> int:
        """Rows before the first item of this page."""
        return (self.page - 1) * self.limit


def get_cursor_pagination(
    cursor: Annotated[
        str | None,
        Query(description="Cursor from a previous page (base64url encoded)"),
    ] = None,
    limit: Annotated[
        int | None,
        Query(
            ge=1,
            le=MAX_PAGE_SIZE,
            description="Number of items to return (1-100)",
        ),
    ] = None,
    sort_field: Annotated[
        str | None,
        Query(min_length=1, description="Field to sort by"),
    ] = None,
    sort_direction: Annotated[
        str | None,
        Query(pattern="^(?i:asc|desc)$", description="Sort direction (ASC or DESC)"),
    ] = None,
) -> QueryContext:
    """Get cursor pagination options.

    Unset values fall back to settings; the limit is capped at
    ``settings.max_limit``.

    Returns:
        QueryContext ready for ``Paginator.paginate``.
    """
    settings = get_pagination_settings()
    return QueryContext(
        cursor=cursor,
        limit=min(limit or settings.default_limit, settings.max_limit),
        sort_field=sort_field or settings.default_sort_field,
        sort_direction=sort_direction or settings.default_sort_direction,
        tie_break_field=settings.tie_break_field,
        verify_previous_page=settings.verify_previous_page,
    )


def get_page_pagination(
    page: Annotated[
        int,
        Query(ge=1, description="Page number (1-based)"),
    ] = 1,
    limit: Annotated[
        int | None,
        Query(
            ge=1,
            le=MAX_PAGE_SIZE,
            description="Number of items per page (1-100)",
        ),
    ] = None,
) -> PageParams:
    """Get page-number pagination parameters.

    Returns:
        PageParams; an omitted limit uses ``settings.default_limit`` and the
        limit is capped at ``settings.max_limit``.
    """
    settings = get_pagination_settings()
    return PageParams(page=page, limit=min(limit or settings.default_limit, settings.max_limit))


# Type aliases for cleaner route signatures
CursorPagination = Annotated[QueryContext, Depends(get_cursor_pagination)]
PagePagination = Annotated[PageParams, Depends(get_page_pagination)]

__all__ = [
    "CursorPagination",
    "PageParams",
    "PagePagination",
    "get_cursor_pagination",
    "get_page_pagination",
]
