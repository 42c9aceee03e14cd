"""FastAPI dependencies for route handlers.

Usage:
    from pagination_service.core.dependencies import CursorPagination, PagePagination
"""

from __future__ import annotations

from pagination_service.core.dependencies.pagination import (
    CursorPagination,
    PageParams,
    PagePagination,
    get_cursor_pagination,
    get_page_pagination,
)

__all__ = [
    "CursorPagination",
    "PageParams",
    "PagePagination",
    "get_cursor_pagination",
    "get_page_pagination",
]
