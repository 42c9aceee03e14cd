"""Cursor-based pagination with an offset fallback.

This package provides keyset pagination that is:
- Stable: Results don't shift when data changes between pages
- Bounded: Pages never exceed 100 rows
- Forgiving: Malformed cursors degrade to the first page instead of failing

Keyset style:
    paginator = Paginator()
    ctx = paginator.context(sort_field="created_at", sort_direction="asc", cursor=token)
    page = await paginator.paginate(SelectQueryable(session, stmt), ctx)
    return CursorPage.from_page(page)

Page-number style:
    result = await OffsetFallbackAdapter().offset_paginate(queryable, page=2, limit=25)
    return PaginatedResponse.from_totals(result)

The cursor encodes the primary sort value of the boundary row.
Cursors are opaque base64 strings that clients pass back unchanged.
"""

from pagination_service.core.pagination.context import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    QueryContext,
    SortDirection,
    clamp_limit,
)
from pagination_service.core.pagination.cursor import CursorCodec, CursorData
from pagination_service.core.pagination.memory import SequenceQueryable
from pagination_service.core.pagination.offset import OffsetFallbackAdapter
from pagination_service.core.pagination.paginator import Paginator
from pagination_service.core.pagination.queryable import Queryable, RangePredicate
from pagination_service.core.pagination.results import Page, PageWithTotals
from pagination_service.core.pagination.schemas import (
    CursorPage,
    CursorPaginatedResponse,
    PaginatedResponse,
    create_cursor_paginated_response,
    create_paginated_response,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    # Cursor utilities
    "CursorCodec",
    "CursorData",
    # Wire schemas
    "CursorPage",
    "CursorPaginatedResponse",
    # Engine
    "OffsetFallbackAdapter",
    "Page",
    "PageWithTotals",
    "PaginatedResponse",
    "Paginator",
    "QueryContext",
    # Data-access contract
    "Queryable",
    "RangePredicate",
    "SequenceQueryable",
    "SortDirection",
    "clamp_limit",
    "create_cursor_paginated_response",
    "create_paginated_response",
]
