"""Keyset pagination over a Queryable.

The paginator implements the seek method:
- Orders by the requested field plus a unique tie-break field, so rows with
  equal sort values keep the same relative order on every page
- Seeks past the cursor with a strict range predicate instead of OFFSET
- Fetches ``limit + 1`` rows to learn whether another page exists without
  a second round trip

How it works:
    For ORDER BY created_at ASC, id ASC with a cursor at created_at = t1:
    WHERE created_at > t1 ORDER BY created_at ASC, id ASC LIMIT :limit + 1

Only the primary sort value is carried in the cursor, so rows sharing the
boundary value with the last row of a page are not revisited. Pick a sort
field that is unique (or nearly so) when that matters.

Malformed cursors and unavailable counts degrade the result instead of
failing. Exceptions raised by the data source propagate unchanged.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from pagination_service.core.exceptions import CountUnavailableError
from pagination_service.core.pagination.context import QueryContext, SortDirection
from pagination_service.core.pagination.cursor import CursorCodec, CursorData
from pagination_service.core.pagination.queryable import RangePredicate
from pagination_service.core.pagination.results import Page
from pagination_service.core.settings import get_pagination_settings
from pagination_service.infra.logging import as_lazy_logger

if TYPE_CHECKING:
    from pagination_service.core.pagination.queryable import Queryable
    from pagination_service.core.settings import PaginationSettings


class Paginator:
    """Produce ``Page`` results from a scoped ``Queryable``.

    The paginator holds configuration only. Every call works on the queryable
    it is given and keeps nothing between calls, so one instance can serve
    any number of concurrent requests.

    Example:
        paginator = Paginator()
        ctx = paginator.context(sort_field="created_at", sort_direction="asc", cursor=token)
        page = await paginator.paginate(SelectQueryable(session, stmt), ctx)

    Args:
        settings: Pagination settings; defaults to the cached environment settings
        logger: Logger for diagnostics. Raise its level or disable it to
            silence the paginator.
    """

    __slots__ = ("settings", "_logger")

    def __init__(
        self,
        settings: PaginationSettings | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.settings = settings or get_pagination_settings()
        self._logger = as_lazy_logger(logger, __name__)

    def context(self, **options: Any) -> QueryContext:
        """Build a QueryContext with defaults taken from settings.

        Keyword arguments override the defaults; ``None`` values are ignored.
        """
        values: dict[str, Any] = {
            "sort_field": self.settings.default_sort_field,
            "sort_direction": self.settings.default_sort_direction,
            "limit": self.settings.default_limit,
            "tie_break_field": self.settings.tie_break_field,
            "verify_previous_page": self.settings.verify_previous_page,
        }
        values.update({k: v for k, v in options.items() if v is not None})
        return QueryContext(**values)

    async def paginate[T](self, source: Queryable[T], ctx: QueryContext) -> Page[T]:
        """Fetch one page.

        Args:
            source: Queryable scoped to the caller's dataset, owned by this call
            ctx: Pagination options

        Returns:
            Page with items, navigation flags, and cursors
        """
        limit = min(ctx.limit, self.settings.max_limit)
        self._logger.debug(
            "pagination requested",
            extra={
                "has_cursor": ctx.cursor is not None,
                "limit": limit,
                "sort_field": ctx.sort_field,
                "sort_direction": ctx.sort_direction.value,
                "use_offset_fallback": ctx.use_offset_fallback,
                "offset": ctx.offset,
            },
        )

        if ctx.use_offset_fallback:
            return await self._paginate_offset(source, ctx, limit)
        return await self._paginate_keyset(source, ctx, limit)

    async def paginate_with_count[T](self, source: Queryable[T], ctx: QueryContext) -> Page[T]:
        """Fetch one page and report the total size of the scoped set.

        The total is counted before the cursor predicate is applied, so it is
        the same on every page. Counting is expensive on large tables; use it
        where clients really need the number.

        Raises:
            CountUnavailableError: If the source cannot count
        """
        if not source.supports_count:
            raise CountUnavailableError(type(source).__name__, "source does not support counting")
        total = await source.count()
        page = await self.paginate(source, ctx)
        return dataclasses.replace(page, total_count=total)

    async def _paginate_keyset[T](self, source: Queryable[T], ctx: QueryContext, limit: int) -> Page[T]:
        verify_previous = ctx.verify_previous_page and ctx.cursor is not None
        probe = source.clone() if verify_previous else None

        self._apply_ordering(source, ctx)

        boundary = self._decode_boundary(ctx)
        has_previous = False
        if boundary is not None:
            source.where(
                RangePredicate(ctx.sort_field, ctx.sort_direction.seek_operator, boundary.value)
            )
            has_previous = True
            if probe is not None:
                has_previous = await self._predecessor_exists(probe, ctx, boundary)

        rows = list(await source.limit(limit + 1).execute())
        count = await self._count(source)

        # Overfetch is the primary signal; the count covers sources that
        # cannot honour ordering and limit together.
        has_next = len(rows) > limit
        items = rows[:limit]
        if not has_next and count is not None:
            has_next = count > len(items)

        next_cursor = None
        if has_next and items:
            next_cursor = CursorCodec.encode(source.value_of(items[-1], ctx.sort_field), ctx.sort_field)
        previous_cursor = None
        if has_previous and items:
            previous_cursor = CursorCodec.encode(source.value_of(items[0], ctx.sort_field), ctx.sort_field)

        page = Page(
            items=items,
            has_next_page=has_next,
            has_previous_page=has_previous,
            next_cursor=next_cursor,
            previous_cursor=previous_cursor,
            # Without a seek predicate the count covers the whole scoped set
            total_count=count if boundary is None else None,
        )
        self._logger.debug(
            lambda: f"keyset page: fetched={len(rows)} returned={len(items)} "
            f"has_next={has_next} has_previous={has_previous} count={count}"
        )
        return page

    async def _paginate_offset[T](self, source: Queryable[T], ctx: QueryContext, limit: int) -> Page[T]:
        offset = ctx.offset or 0
        self._apply_ordering(source, ctx)
        items = list(await source.skip(offset).take(limit).execute())
        total = await self._count(source)

        self._logger.debug(
            lambda: f"offset page: offset={offset} limit={limit} returned={len(items)} total={total}"
        )
        return Page(
            items=items,
            has_next_page=total is not None and offset + len(items) < total,
            has_previous_page=offset > 0,
            total_count=total,
        )

    def _apply_ordering(self, source: Queryable[Any], ctx: QueryContext) -> None:
        source.order_by(ctx.sort_field, ctx.sort_direction)
        if ctx.tie_break_field != ctx.sort_field:
            source.add_order_by(ctx.tie_break_field, SortDirection.ASC)

    def _decode_boundary(self, ctx: QueryContext) -> CursorData | None:
        if ctx.cursor is None:
            return None

        data = CursorCodec.decode(ctx.cursor)
        if data is None:
            self._logger.debug("malformed cursor ignored, serving first page")
            return None
        if data.field != ctx.sort_field:
            self._logger.debug(
                "cursor for a different sort field ignored, serving first page",
                extra={"cursor_field": data.field, "sort_field": ctx.sort_field},
            )
            return None
        return data

    async def _predecessor_exists(
        self,
        probe: Queryable[Any],
        ctx: QueryContext,
        boundary: CursorData,
    ) -> bool:
        """Check that at least one row sorts at or before the boundary."""
        operator = "<=" if ctx.sort_direction is SortDirection.ASC else ">="
        probe.where(RangePredicate(ctx.sort_field, operator, boundary.value))
        probe.order_by(ctx.sort_field, ctx.sort_direction.opposite).limit(1)
        return bool(await probe.execute())

    async def _count(self, source: Queryable[Any]) -> int | None:
        if not source.supports_count:
            return None
        try:
            return await source.count()
        except CountUnavailableError as exc:
            self._logger.debug("count unavailable, relying on overfetch", extra={"reason": exc.reason})
            return None


__all__ = ["Paginator"]
