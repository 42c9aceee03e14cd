"""Page-number pagination with totals.

For callers that need classic ``?page=N`` navigation and a page count.
Offset pagination is simple but not stable: rows inserted or deleted between
requests shift later pages, so rows can be skipped or repeated. Prefer
``Paginator`` wherever clients can follow cursors.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from pagination_service.core.pagination.context import clamp_limit
from pagination_service.core.pagination.results import PageWithTotals
from pagination_service.core.settings import get_pagination_settings
from pagination_service.infra.logging import as_lazy_logger

if TYPE_CHECKING:
    from pagination_service.core.pagination.queryable import Queryable
    from pagination_service.core.settings import PaginationSettings


class OffsetFallbackAdapter:
    """Skip/take pagination producing ``PageWithTotals``.

    The queryable must already carry the ordering the caller wants; this
    adapter only adds positional bounds.

    Example:
        adapter = OffsetFallbackAdapter()
        result = await adapter.offset_paginate(SelectQueryable(session, stmt), page=2, limit=5)
        print(f"page {result.page}/{result.total_pages}")
    """

    __slots__ = ("settings", "_logger")

    def __init__(
        self,
        settings: PaginationSettings | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.settings = settings or get_pagination_settings()
        self._logger = as_lazy_logger(logger, __name__)

    async def offset_paginate[T](
        self,
        source: Queryable[T],
        page: int | None = 1,
        limit: int | None = None,
    ) -> PageWithTotals[T]:
        """Fetch page ``page`` of size ``limit`` along with the total row count.

        Args:
            source: Ordered queryable over the caller's dataset
            page: 1-indexed page number, clamped to at least 1
            limit: Page size, clamped to [1, max_limit]; defaults from settings

        Returns:
            PageWithTotals with items and page arithmetic
        """
        safe_limit = clamp_limit(
            limit,
            default=self.settings.default_limit,
            maximum=self.settings.max_limit,
        )
        safe_page = max(page or 1, 1)
        offset = (safe_page - 1) * safe_limit

        items, total = await source.skip(offset).take(safe_limit).execute_and_count()

        result = PageWithTotals(
            items=list(items),
            total=total,
            page=safe_page,
            limit=safe_limit,
            total_pages=math.ceil(total / safe_limit),
        )
        self._logger.debug(
            lambda: f"offset_paginate: page={safe_page} limit={safe_limit} -> "
            f"{len(result.items)}/{total} items, {result.total_pages} pages"
        )
        return result


__all__ = ["OffsetFallbackAdapter"]
